from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from partnerhub.api.shop.schemas.schema_partner import PartnerPublicOut
from partnerhub.api.shop.services.service_partners import ShopPartnerService
from partnerhub.database.db_connection import get_db

router = APIRouter(prefix="/api/shop/partners/public", tags=["Public - Parceiros Loja"])


@router.get("/{slug}", response_model=PartnerPublicOut)
def obter_parceiro_publico(slug: str, db: Session = Depends(get_db)):
    """Vitrine pública: apenas parceiros aprovados."""
    return ShopPartnerService(db).get_public(slug)
