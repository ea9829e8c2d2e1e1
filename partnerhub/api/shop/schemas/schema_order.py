"""
Schemas de Pedidos vistos pelo parceiro
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from partnerhub.api.shared.schemas import Money
from partnerhub.api.shop.models.model_order import OrderStatus


class PartnerOrderItemOut(BaseModel):
    id: int
    product_id: Optional[int] = None
    product_title: str
    variant_id: Optional[int] = None
    variant_title: str = ""
    qty: int
    unit_price: Money
    line_total: Money
    image_url: Optional[str] = None


class PartnerOrderOut(BaseModel):
    id: int
    order_number: str
    status: OrderStatus
    customer_name: str
    item_count: int
    partner_subtotal: Money
    items: List[PartnerOrderItemOut]
    shipping_address: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
