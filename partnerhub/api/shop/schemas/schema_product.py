"""
Schemas de Produtos do parceiro
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, constr, model_validator

from partnerhub.api.shared.schemas import reject_null
from partnerhub.api.shop.models.model_product import ProductStatus, ProductType


class VariantOptionIn(BaseModel):
    name: constr(min_length=1, max_length=60)
    value: constr(min_length=1, max_length=120)


class VariantOptionOut(BaseModel):
    name: str
    value: str
    model_config = ConfigDict(from_attributes=True)


class VariantIn(BaseModel):
    sku: constr(min_length=1, max_length=80)
    title: constr(min_length=1, max_length=200)
    price: Decimal
    compare_at_price: Optional[Decimal] = None
    stock_on_hand: int = Field(0, ge=0)
    options: List[VariantOptionIn] = []


class VariantUpdate(BaseModel):
    sku: Optional[constr(min_length=1, max_length=80)] = None
    title: Optional[constr(min_length=1, max_length=200)] = None
    price: Optional[Decimal] = None
    compare_at_price: Optional[Decimal] = None
    stock_on_hand: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    _no_nulls = reject_null("sku", "title", "price", "stock_on_hand", "is_active")


class VariantOut(BaseModel):
    id: int
    product_id: int
    sku: str
    title: str
    price: float
    compare_at_price: Optional[float] = None
    currency: str
    stock_on_hand: int
    is_active: bool
    options: List[VariantOptionOut] = []
    model_config = ConfigDict(from_attributes=True)


class ProductImageIn(BaseModel):
    url: constr(min_length=1, max_length=500)
    alt: str = ""


class ProductImageOut(BaseModel):
    id: int
    product_id: int
    url: str
    alt: str
    sort_order: int
    is_primary: bool
    model_config = ConfigDict(from_attributes=True)


class ImageOrderIn(BaseModel):
    image_ids: List[int] = Field(..., min_length=1)


class ProductIn(BaseModel):
    title: constr(min_length=1, max_length=200)
    description: str = ""
    category: Optional[str] = None
    product_type: ProductType = ProductType.PHYSICAL


class ProductUpdate(BaseModel):
    title: Optional[constr(min_length=1, max_length=200)] = None
    description: Optional[str] = None
    category: Optional[str] = None
    product_type: Optional[ProductType] = None

    _no_nulls = reject_null("title", "description", "product_type")

    @model_validator(mode="after")
    def _at_least_one(self):
        if not self.model_fields_set:
            raise ValueError("Informe ao menos um campo para atualizar")
        return self


class PartnerProductOut(BaseModel):
    id: int
    partner_id: int
    brand_id: Optional[int] = None
    slug: str
    title: str
    description: str
    category: Optional[str] = None
    product_type: ProductType
    status: ProductStatus
    is_featured: bool
    rating_avg: float
    review_count: int
    stock_total: int
    variants: List[VariantOut] = []
    images: List[ProductImageOut] = []
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
