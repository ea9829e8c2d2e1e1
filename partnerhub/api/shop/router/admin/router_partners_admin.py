from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.shop.models.model_partner import ShopPartnerStatus
from partnerhub.api.shop.schemas.schema_partner import PartnerListOut, PartnerReviewIn, ShopPartnerOut
from partnerhub.api.shop.services.service_partners import ShopPartnerService
from partnerhub.core.auth_dependencies import require_admin
from partnerhub.database.db_connection import get_db

router = APIRouter(
    prefix="/api/shop/admin/partners",
    tags=["Admin - Parceiros Loja"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=PartnerListOut)
def listar_parceiros(
    status_filter: Optional[ShopPartnerStatus] = Query(None, alias="status"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return ShopPartnerService(db).admin_list(status_filter, limit, offset)


@router.post("/{partner_id}/review", response_model=ShopPartnerOut)
def revisar_parceiro(
    body: PartnerReviewIn,
    partner_id: int = Path(...),
    admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """approve | reject | suspend | ban, com registro em auditoria."""
    return ShopPartnerService(db).review(admin, partner_id, body)
