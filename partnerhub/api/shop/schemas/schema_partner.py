"""
Schemas de Parceiros da Loja
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, constr

from partnerhub.api.shop.models.model_partner import (
    BusinessType,
    MemberRole,
    ShopPartnerStatus,
)


class PartnerPermissions(BaseModel):
    products: bool = True
    orders: bool = True
    analytics: bool = False


# Candidatura
class PartnerApplicationIn(BaseModel):
    business_name: constr(min_length=2, max_length=160)
    display_name: Optional[constr(max_length=160)] = None
    business_type: BusinessType = BusinessType.INDIVIDUAL
    email: EmailStr
    phone: Optional[str] = None
    website: Optional[str] = None
    address_line1: Optional[str] = None
    city: Optional[str] = None
    country_code: constr(min_length=2, max_length=2) = "VN"
    description: Optional[str] = None
    business_registration_number: Optional[str] = None
    tax_id: Optional[str] = None


class PartnerProfileUpdate(BaseModel):
    display_name: Optional[constr(min_length=1, max_length=160)] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    cover_url: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None


class ShopPartnerOut(BaseModel):
    id: int
    slug: str
    business_name: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    cover_url: Optional[str] = None
    email: str
    phone: Optional[str] = None
    website: Optional[str] = None
    business_type: BusinessType
    country_code: str
    city: Optional[str] = None
    status: ShopPartnerStatus
    verified_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    brand_id: Optional[int] = None
    product_count: int = 0
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class PartnerPublicOut(BaseModel):
    id: int
    slug: str
    display_name: Optional[str] = None
    business_name: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    cover_url: Optional[str] = None
    website: Optional[str] = None
    product_count: int = 0
    model_config = ConfigDict(from_attributes=True)


class PartnerWithMembershipOut(ShopPartnerOut):
    role: MemberRole
    permissions: PartnerPermissions


# Admin
class PartnerReviewIn(BaseModel):
    action: Literal["approve", "reject", "suspend", "ban"]
    reason: Optional[str] = Field(None, max_length=1000)


class PartnerListOut(BaseModel):
    data: List[ShopPartnerOut]
    total: int
