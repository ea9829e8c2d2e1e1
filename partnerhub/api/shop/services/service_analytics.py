"""
Analytics do painel do parceiro da loja.

Receita é devolvida em centavos (amount inteiro), tanto nos cards quanto no gráfico.
"""
from datetime import datetime, timedelta
from typing import List

from sqlalchemy.orm import Session

from partnerhub.api.shared.schemas import money
from partnerhub.api.shop.models.model_order import OrderItemModel
from partnerhub.api.shop.models.model_partner import ShopPartnerModel
from partnerhub.api.shop.repositories.repo_orders import ShopOrderRepository
from partnerhub.api.shop.schemas.schema_analytics import (
    DashboardChart,
    DashboardNumbers,
    DashboardStatsOut,
    TopProductOut,
)
from partnerhub.utils.database_utils import now_trimmed, percent_change

PERIOD_DAYS = {"today": 1, "7d": 7, "30d": 30, "12m": 365}

# estimativa de visualizações por produto/dia enquanto não há tracking
VIEWS_PER_PRODUCT_DAY = 5


def to_cents(value) -> int:
    return int(round(float(value or 0) * 100))


def build_chart(items: List[OrderItemModel], start: datetime, days: int) -> DashboardChart:
    """Série diária (ou mensal no período 12m) de receita e pedidos distintos."""
    monthly = days > 31
    buckets: dict[str, dict] = {}

    if monthly:
        cursor = start.replace(day=1)
        while cursor <= start + timedelta(days=days):
            buckets[cursor.strftime("%Y-%m")] = {"revenue": 0.0, "orders": set()}
            cursor = (cursor + timedelta(days=32)).replace(day=1)
    else:
        for offset in range(days):
            buckets[(start + timedelta(days=offset + 1)).strftime("%Y-%m-%d")] = {"revenue": 0.0, "orders": set()}

    for item in items:
        key = item.created_at.strftime("%Y-%m" if monthly else "%Y-%m-%d")
        bucket = buckets.setdefault(key, {"revenue": 0.0, "orders": set()})
        bucket["revenue"] += float(item.line_total or 0)
        bucket["orders"].add(item.order_id)

    labels = sorted(buckets)
    return DashboardChart(
        labels=labels,
        revenue=[to_cents(buckets[k]["revenue"]) for k in labels],
        orders=[len(buckets[k]["orders"]) for k in labels],
    )


class ShopAnalyticsService:
    def __init__(self, db: Session):
        self.repo = ShopOrderRepository(db)

    def dashboard(self, partner: ShopPartnerModel, period: str = "7d") -> DashboardStatsOut:
        days = PERIOD_DAYS.get(period, 7)
        now = now_trimmed()
        start = now - timedelta(days=days)
        prev_start = start - timedelta(days=days)

        current = self.repo.items_between(partner.id, start, now + timedelta(seconds=1))
        previous = self.repo.items_between(partner.id, prev_start, start)

        current_revenue = sum(float(i.line_total or 0) for i in current)
        prev_revenue = sum(float(i.line_total or 0) for i in previous)
        current_orders = len({i.order_id for i in current})
        prev_orders = len({i.order_id for i in previous})

        product_views = partner.product_count * days * VIEWS_PER_PRODUCT_DAY
        conversion = round(current_orders / product_views * 100, 2) if product_views else 0.0

        return DashboardStatsOut(
            period=period,
            stats=DashboardNumbers(
                revenue=money(to_cents(current_revenue)),
                revenue_change=percent_change(current_revenue, prev_revenue),
                orders=current_orders,
                orders_change=percent_change(current_orders, prev_orders),
                product_views=product_views,
                views_change=0.0,
                conversion_rate=conversion,
            ),
            chart=build_chart(current, start, days),
        )

    def top_products(self, partner_id: int, limit: int = 10) -> List[TopProductOut]:
        rows = self.repo.top_products(partner_id, limit=limit)
        return [
            TopProductOut(
                product_id=r.product_id,
                title=r.title or "",
                image_url=r.image_url or "",
                sales_count=int(r.sales_count or 0),
                revenue=money(to_cents(r.revenue)),
            )
            for r in rows
        ]
