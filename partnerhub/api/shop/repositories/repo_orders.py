from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from partnerhub.api.shop.models.model_order import OrderItemModel, ShopOrderModel
from partnerhub.core.errors import not_found


class ShopOrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def _partner_order_ids(self, partner_id: int):
        return (
            self.db.query(OrderItemModel.order_id)
            .filter(OrderItemModel.partner_id == partner_id)
            .distinct()
        )

    def list_for_partner(
        self,
        partner_id: int,
        status: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[ShopOrderModel], int]:
        query = self.db.query(ShopOrderModel).filter(
            ShopOrderModel.id.in_(self._partner_order_ids(partner_id))
        )
        if status:
            query = query.filter(ShopOrderModel.status == status)
        if date_from:
            query = query.filter(ShopOrderModel.created_at >= date_from)
        if date_to:
            query = query.filter(ShopOrderModel.created_at <= date_to)

        total = query.count()
        rows = (
            query.order_by(ShopOrderModel.created_at.desc(), ShopOrderModel.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total

    def get_for_partner(self, partner_id: int, order_id: int) -> ShopOrderModel:
        order = (
            self.db.query(ShopOrderModel)
            .filter(
                ShopOrderModel.id == order_id,
                ShopOrderModel.id.in_(self._partner_order_ids(partner_id)),
            )
            .first()
        )
        if not order:
            raise not_found("Order not found")
        return order

    def items_for_partner(self, partner_id: int, order_ids: List[int]) -> List[OrderItemModel]:
        if not order_ids:
            return []
        return (
            self.db.query(OrderItemModel)
            .filter(OrderItemModel.partner_id == partner_id, OrderItemModel.order_id.in_(order_ids))
            .order_by(OrderItemModel.id)
            .all()
        )

    # ---------------- Analytics ----------------
    def items_between(self, partner_id: int, start: datetime, end: datetime) -> List[OrderItemModel]:
        return (
            self.db.query(OrderItemModel)
            .filter(
                OrderItemModel.partner_id == partner_id,
                OrderItemModel.created_at >= start,
                OrderItemModel.created_at < end,
            )
            .all()
        )

    def top_products(self, partner_id: int, limit: int = 10):
        """Agrega por produto: (product_id, title, image, qty, receita) ordenado por qty."""
        qty = func.sum(OrderItemModel.qty).label("sales_count")
        return (
            self.db.query(
                OrderItemModel.product_id,
                func.max(OrderItemModel.title_snapshot).label("title"),
                func.max(OrderItemModel.image_url_snapshot).label("image_url"),
                qty,
                func.sum(OrderItemModel.line_total).label("revenue"),
            )
            .filter(OrderItemModel.partner_id == partner_id)
            .group_by(OrderItemModel.product_id)
            .order_by(qty.desc())
            .limit(limit)
            .all()
        )

    def commit(self, *instances) -> None:
        self.db.commit()
        for obj in instances:
            self.db.refresh(obj)
