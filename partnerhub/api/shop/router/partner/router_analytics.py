from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from partnerhub.api.shop.schemas.schema_analytics import (
    DashboardPeriod,
    DashboardStatsOut,
    TopProductOut,
)
from partnerhub.api.shop.services.dependencies import PartnerContext, require_permission
from partnerhub.api.shop.services.service_analytics import ShopAnalyticsService
from partnerhub.database.db_connection import get_db

router = APIRouter(prefix="/api/shop/partners/analytics", tags=["Shop - Analytics"])

analytics_access = require_permission("analytics")


@router.get("/dashboard", response_model=DashboardStatsOut)
def dashboard(
    period: DashboardPeriod = Query("7d"),
    ctx: PartnerContext = Depends(analytics_access),
    db: Session = Depends(get_db),
):
    return ShopAnalyticsService(db).dashboard(ctx.partner, period)


@router.get("/top-products", response_model=List[TopProductOut])
def top_produtos(
    limit: int = Query(10, ge=1, le=50),
    ctx: PartnerContext = Depends(analytics_access),
    db: Session = Depends(get_db),
):
    """Produtos mais vendidos por unidades."""
    return ShopAnalyticsService(db).top_products(ctx.partner.id, limit=limit)
