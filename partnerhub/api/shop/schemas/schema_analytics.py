from typing import List, Literal, Optional

from pydantic import BaseModel

from partnerhub.api.shared.schemas import Money

DashboardPeriod = Literal["today", "7d", "30d", "12m"]


class DashboardNumbers(BaseModel):
    revenue: Money
    revenue_change: float
    orders: int
    orders_change: float
    product_views: int
    views_change: float
    conversion_rate: float


class DashboardChart(BaseModel):
    labels: List[str]
    revenue: List[float]
    orders: List[int]


class DashboardStatsOut(BaseModel):
    period: DashboardPeriod
    stats: DashboardNumbers
    chart: Optional[DashboardChart] = None


class TopProductOut(BaseModel):
    product_id: Optional[int] = None
    title: str
    image_url: str = ""
    sales_count: int
    revenue: Money
