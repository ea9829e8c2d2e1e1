from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from partnerhub.api.shared.schemas import money
from partnerhub.api.shop.models.model_order import (
    ORDER_STATUS_TRANSITIONS,
    OrderItemModel,
    OrderStatus,
    ShopOrderModel,
)
from partnerhub.api.shop.repositories.repo_orders import ShopOrderRepository
from partnerhub.api.shop.schemas.schema_order import PartnerOrderItemOut, PartnerOrderOut
from partnerhub.core.errors import check_transition
from partnerhub.utils.logger import logger


def _item_out(item: OrderItemModel, currency: str) -> PartnerOrderItemOut:
    return PartnerOrderItemOut(
        id=item.id,
        product_id=item.product_id,
        product_title=item.title_snapshot or "",
        variant_id=item.variant_id,
        variant_title=item.variant_title_snapshot or "",
        qty=item.qty,
        unit_price=money(item.unit_price, currency),
        line_total=money(item.line_total, currency),
        image_url=item.image_url_snapshot,
    )


def build_partner_order(order: ShopOrderModel, items: List[OrderItemModel]) -> PartnerOrderOut:
    """Visão do pedido restrita aos itens do parceiro."""
    items_out = [_item_out(i, order.currency) for i in items]
    subtotal = sum(float(i.line_total or 0) for i in items)
    address = order.shipping_address or {}
    return PartnerOrderOut(
        id=order.id,
        order_number=order.order_number,
        status=order.status,
        customer_name=address.get("recipient_name") or "Customer",
        item_count=len(items_out),
        partner_subtotal=money(subtotal, order.currency),
        items=items_out,
        shipping_address=order.shipping_address,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


class ShopOrderService:
    def __init__(self, db: Session):
        self.repo = ShopOrderRepository(db)

    def list(
        self,
        partner_id: int,
        status: Optional[OrderStatus] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        limit: int = 20,
        offset: int = 0,
    ):
        orders, total = self.repo.list_for_partner(
            partner_id, status=status, date_from=date_from, date_to=date_to, limit=limit, offset=offset
        )
        items = self.repo.items_for_partner(partner_id, [o.id for o in orders])

        grouped: dict[int, list] = {}
        for item in items:
            grouped.setdefault(item.order_id, []).append(item)

        return {
            "data": [build_partner_order(o, grouped.get(o.id, [])) for o in orders],
            "total": total,
        }

    def get(self, partner_id: int, order_id: int) -> PartnerOrderOut:
        order = self.repo.get_for_partner(partner_id, order_id)
        return build_partner_order(order, self.repo.items_for_partner(partner_id, [order.id]))

    def update_status(self, partner_id: int, order_id: int, target: OrderStatus) -> PartnerOrderOut:
        order = self.repo.get_for_partner(partner_id, order_id)
        check_transition(ORDER_STATUS_TRANSITIONS, order.status.value, target.value, domain="shop_order")

        previous = order.status
        order.status = target
        self.repo.commit(order)
        logger.info(f"[SHOP] Pedido {order.order_number}: {previous.value} -> {target.value} (partner={partner_id})")
        return build_partner_order(order, self.repo.items_for_partner(partner_id, [order.id]))
