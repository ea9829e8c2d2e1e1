from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.shop.schemas.schema_partner import (
    PartnerApplicationIn,
    PartnerProfileUpdate,
    PartnerWithMembershipOut,
    ShopPartnerOut,
)
from partnerhub.api.shop.services.dependencies import (
    PartnerContext,
    get_partner_membership,
    require_owner,
)
from partnerhub.api.shop.services.service_partners import ShopPartnerService
from partnerhub.core.auth_dependencies import get_current_user
from partnerhub.database.db_connection import get_db

router = APIRouter(prefix="/api/shop/partners", tags=["Shop - Parceiro"])


@router.post("/apply", response_model=ShopPartnerOut, status_code=status.HTTP_201_CREATED)
def aplicar_como_parceiro(
    body: PartnerApplicationIn,
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Candidatura de parceiro (aprovação automática)."""
    return ShopPartnerService(db).apply(current_user, body)


@router.get("/me", response_model=PartnerWithMembershipOut)
def obter_meu_parceiro(ctx: PartnerContext = Depends(get_partner_membership)):
    """Parceiro do usuário atual com role e permissões do vínculo."""
    return ShopPartnerService.with_membership(ctx)


@router.patch("/me", response_model=PartnerWithMembershipOut)
def atualizar_meu_parceiro(
    body: PartnerProfileUpdate,
    ctx: PartnerContext = Depends(require_owner),
    db: Session = Depends(get_db),
):
    ShopPartnerService(db).update_profile(ctx, body)
    return ShopPartnerService.with_membership(ctx)
