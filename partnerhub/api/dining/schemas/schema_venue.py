from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, constr, model_validator

from partnerhub.api.shared.schemas import reject_null

PriceRange = Literal["budget", "moderate", "upscale", "fine_dining"]


class OpeningHours(BaseModel):
    open: constr(pattern=r"^\d{2}:\d{2}$")
    close: constr(pattern=r"^\d{2}:\d{2}$")


# ---------------- Restaurante ----------------
class VenueIn(BaseModel):
    name: constr(min_length=2, max_length=200)
    description: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    cuisine_type: Optional[List[str]] = None
    price_range: Optional[PriceRange] = None
    capacity: int = Field(0, ge=0)
    operating_hours: Optional[Dict[str, OpeningHours]] = None
    amenities: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    cover_image_url: Optional[str] = None


class VenueUpdate(BaseModel):
    name: Optional[constr(min_length=2, max_length=200)] = None
    description: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    cuisine_type: Optional[List[str]] = None
    price_range: Optional[PriceRange] = None
    capacity: Optional[int] = Field(None, ge=0)
    operating_hours: Optional[Dict[str, OpeningHours]] = None
    amenities: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    cover_image_url: Optional[str] = None
    is_active: Optional[bool] = None

    _no_nulls = reject_null("name", "capacity", "is_active")


class VenueOut(BaseModel):
    id: int
    owner_user_id: Optional[int] = None
    name: str
    slug: str
    description: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    cuisine_type: Optional[List[str]] = None
    price_range: Optional[str] = None
    capacity: int
    operating_hours: Optional[dict] = None
    amenities: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    cover_image_url: Optional[str] = None
    is_active: bool
    is_verified: bool
    is_featured: bool
    average_rating: float
    review_count: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ---------------- Cardápio ----------------
class MenuItemIn(BaseModel):
    venue_id: int
    name: constr(min_length=1, max_length=200)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    original_price: Optional[Decimal] = Field(None, ge=0)
    category: Optional[str] = None
    dietary_tags: Optional[List[str]] = None
    allergens: Optional[List[str]] = None
    image_url: Optional[str] = None
    is_available: bool = True
    is_featured: bool = False
    is_popular: bool = False
    display_order: int = 0

    @model_validator(mode="after")
    def _check_original_price(self):
        if self.original_price is not None and self.original_price < self.price:
            raise ValueError("original_price deve ser maior ou igual a price")
        return self


class MenuItemUpdate(BaseModel):
    name: Optional[constr(min_length=1, max_length=200)] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    original_price: Optional[Decimal] = Field(None, ge=0)
    category: Optional[str] = None
    dietary_tags: Optional[List[str]] = None
    allergens: Optional[List[str]] = None
    image_url: Optional[str] = None
    is_available: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_popular: Optional[bool] = None
    display_order: Optional[int] = None

    _no_nulls = reject_null("name", "price", "is_available", "is_featured", "is_popular", "display_order")


class MenuItemOut(BaseModel):
    id: int
    venue_id: int
    name: str
    description: Optional[str] = None
    price: float
    original_price: Optional[float] = None
    currency: str
    category: Optional[str] = None
    dietary_tags: Optional[List[str]] = None
    allergens: Optional[List[str]] = None
    image_url: Optional[str] = None
    is_available: bool
    is_featured: bool
    is_popular: bool
    display_order: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ---------------- Mesas ----------------
class TableIn(BaseModel):
    venue_id: int
    table_number: constr(min_length=1, max_length=20)
    name: Optional[str] = None
    min_capacity: int = Field(1, ge=1)
    max_capacity: int = Field(4, ge=1)
    section: Optional[str] = None
    floor: int = 1
    features: Optional[List[str]] = None
    is_active: bool = True
    is_reservable: bool = True
    premium_charge: Decimal = Field(Decimal("0"), ge=0)

    @model_validator(mode="after")
    def _check_capacity(self):
        if self.min_capacity > self.max_capacity:
            raise ValueError("min_capacity não pode ser maior que max_capacity")
        return self


class TableUpdate(BaseModel):
    table_number: Optional[constr(min_length=1, max_length=20)] = None
    name: Optional[str] = None
    min_capacity: Optional[int] = Field(None, ge=1)
    max_capacity: Optional[int] = Field(None, ge=1)
    section: Optional[str] = None
    floor: Optional[int] = None
    features: Optional[List[str]] = None
    is_active: Optional[bool] = None
    is_reservable: Optional[bool] = None
    premium_charge: Optional[Decimal] = Field(None, ge=0)

    _no_nulls = reject_null(
        "table_number", "min_capacity", "max_capacity", "floor", "is_active", "is_reservable", "premium_charge",
    )


class TableOut(BaseModel):
    id: int
    venue_id: int
    table_number: str
    name: Optional[str] = None
    min_capacity: int
    max_capacity: int
    section: Optional[str] = None
    floor: int
    features: Optional[List[str]] = None
    is_active: bool
    is_reservable: bool
    premium_charge: float
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
