from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, constr

from partnerhub.api.shared.schemas import reject_null


class ActivityIn(BaseModel):
    title: constr(min_length=1, max_length=200)
    description: Optional[str] = None
    location: constr(min_length=1, max_length=200)
    price: Decimal = Field(..., gt=0)
    category: Optional[str] = None
    duration: Optional[str] = None
    images: Optional[List[str]] = None
    inclusions: Optional[List[str]] = None
    exclusions: Optional[List[str]] = None
    important_info: Optional[str] = None


class ActivityUpdate(BaseModel):
    title: Optional[constr(min_length=1, max_length=200)] = None
    description: Optional[str] = None
    location: Optional[constr(min_length=1, max_length=200)] = None
    price: Optional[Decimal] = Field(None, gt=0)
    category: Optional[str] = None
    duration: Optional[str] = None
    images: Optional[List[str]] = None
    inclusions: Optional[List[str]] = None
    exclusions: Optional[List[str]] = None
    important_info: Optional[str] = None
    is_active: Optional[bool] = None

    _no_nulls = reject_null("title", "location", "category", "price", "is_active")


class ActivityItemOut(BaseModel):
    """Item da listagem do parceiro."""
    id: int
    title: str
    location: str
    price: float
    rating: float
    type: Literal["activity"] = "activity"
    status: str
    model_config = ConfigDict(from_attributes=True)


class ActivityOut(BaseModel):
    id: int
    partner_user_id: int
    title: str
    description: Optional[str] = None
    location: str
    category: str
    duration: Optional[str] = None
    price: float
    currency: str
    image_url: Optional[str] = None
    images: Optional[List[str]] = None
    inclusions: Optional[List[str]] = None
    exclusions: Optional[List[str]] = None
    important_info: Optional[str] = None
    rating: float
    reviews_count: int
    is_instant: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class ChartPoint(BaseModel):
    date: str
    revenue: float
    bookings: int


class PartnerStatsOut(BaseModel):
    revenue: float
    totalBookings: int
    averageRating: float
    activeListings: int
    chartData: Optional[List[ChartPoint]] = None
