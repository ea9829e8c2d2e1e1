# partnerhub/api/shop/router/router.py

from fastapi import APIRouter

from partnerhub.api.shop.router.admin.router_partners_admin import router as router_partners_admin
from partnerhub.api.shop.router.partner.router_analytics import router as router_analytics
from partnerhub.api.shop.router.partner.router_orders import router as router_orders
from partnerhub.api.shop.router.partner.router_products import router as router_products
from partnerhub.api.shop.router.partner.router_profile import router as router_profile
from partnerhub.api.shop.router.partner.router_team import router as router_team
from partnerhub.api.shop.router.public.router_partners_public import router as router_partners_public

api_shop = APIRouter()

# Routers públicos (sem autenticação)
api_shop.include_router(router_partners_public)

# Routers do parceiro (membro ativo)
api_shop.include_router(router_profile)
api_shop.include_router(router_products)
api_shop.include_router(router_orders)
api_shop.include_router(router_analytics)
api_shop.include_router(router_team)

# Routers admin (require_admin)
api_shop.include_router(router_partners_admin)
