import enum

from sqlalchemy import (
    Column, Integer, String, DateTime, Numeric, JSON, ForeignKey, Enum as SAEnum,
)
from sqlalchemy.orm import relationship

from partnerhub.config.settings import DEFAULT_CURRENCY
from partnerhub.database.db_connection import Base
from partnerhub.utils.database_utils import now_trimmed


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Fluxo que o parceiro pode aplicar ao pedido
ORDER_STATUS_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["confirmed", "cancelled"],
    "confirmed": ["processing", "cancelled"],
    "processing": ["shipped", "cancelled"],
    "shipped": ["delivered"],
    "delivered": [],
    "cancelled": [],
}


class ShopOrderModel(Base):
    """Pedido do cliente; criado pelo checkout da loja."""
    __tablename__ = "shop_orders"

    id = Column(Integer, primary_key=True)
    order_number = Column(String(40), nullable=False, unique=True)
    user_id = Column(Integer, ForeignKey("accounts_users.id", ondelete="SET NULL"), nullable=True)
    status = Column(
        SAEnum(OrderStatus, name="shop_order_status_enum", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=OrderStatus.PENDING,
    )
    payment_status = Column(String(20), nullable=False, default="pending")
    currency = Column(String(3), nullable=False, default=DEFAULT_CURRENCY)
    grand_total = Column(Numeric(18, 2), nullable=False, default=0)
    shipping_address = Column(JSON, nullable=True)

    items = relationship("OrderItemModel", back_populates="order", cascade="all, delete-orphan")

    created_at = Column(DateTime, default=now_trimmed, nullable=False, index=True)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)


class OrderItemModel(Base):
    __tablename__ = "shop_order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("shop_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    order = relationship("ShopOrderModel", back_populates="items")
    partner_id = Column(Integer, ForeignKey("shop_partners.id", ondelete="SET NULL"), nullable=True, index=True)

    # Sem cascade: produto com pedidos não pode ser excluído
    product_id = Column(Integer, ForeignKey("shop_products.id"), nullable=True, index=True)
    variant_id = Column(Integer, ForeignKey("shop_product_variants.id", ondelete="SET NULL"), nullable=True)

    qty = Column(Integer, nullable=False)
    unit_price = Column(Numeric(18, 2), nullable=False)
    line_total = Column(Numeric(18, 2), nullable=False)
    title_snapshot = Column(String(200), nullable=False, default="")
    variant_title_snapshot = Column(String(200), nullable=True)
    image_url_snapshot = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False, index=True)
