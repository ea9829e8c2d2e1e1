"""
Models da Loja (parceiros, produtos e pedidos)
"""

# Importar todos os models para garantir registro no SQLAlchemy
from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.shop.models.model_partner import (
    BrandModel,
    ShopPartnerModel,
    PartnerMemberModel,
    PartnerAuditLogModel,
)
from partnerhub.api.shop.models.model_product import (
    ProductModel,
    VariantModel,
    VariantOptionModel,
    ProductImageModel,
)
from partnerhub.api.shop.models.model_order import ShopOrderModel, OrderItemModel

__all__ = [
    "UserModel",
    "BrandModel",
    "ShopPartnerModel",
    "PartnerMemberModel",
    "PartnerAuditLogModel",
    "ProductModel",
    "VariantModel",
    "VariantOptionModel",
    "ProductImageModel",
    "ShopOrderModel",
    "OrderItemModel",
]
