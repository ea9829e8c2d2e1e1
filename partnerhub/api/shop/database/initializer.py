"""
Inicializador do domínio Shop.
"""
from partnerhub.database.domain.base import DomainInitializer
from partnerhub.database.domain.registry import register_domain

# Importar models do domínio para registrar as tabelas no Base
from partnerhub.api.shop.models import (  # noqa: F401
    model_order,
    model_partner,
    model_product,
)


class ShopInitializer(DomainInitializer):
    """Inicializador do domínio Shop (parceiros, produtos, pedidos)."""

    name = "shop"
    table_prefix = "shop_"
    depends_on = ("accounts",)


register_domain(ShopInitializer())
