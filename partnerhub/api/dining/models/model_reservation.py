import enum

from sqlalchemy import (
    Column, Integer, String, Boolean, Date, DateTime, Time, Text, Numeric, JSON, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import relationship

from partnerhub.database.db_connection import Base
from partnerhub.utils.database_utils import now_trimmed


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SEATED = "seated"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


RESERVATION_STATUS_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["confirmed", "cancelled"],
    "confirmed": ["seated", "cancelled", "no_show"],
    "seated": ["completed"],
    "completed": [],
    "cancelled": [],
    "no_show": [],
}


class KitchenStatus(str, enum.Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"


# Só avança um passo por vez
KITCHEN_STATUS_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["preparing"],
    "preparing": ["ready"],
    "ready": ["served"],
    "served": [],
}


class ReservationModel(Base):
    __tablename__ = "dining_reservations"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("accounts_users.id", ondelete="SET NULL"), nullable=True)
    venue_id = Column(Integer, ForeignKey("dining_venues.id", ondelete="CASCADE"), nullable=False, index=True)
    table_id = Column(Integer, ForeignKey("dining_tables.id", ondelete="SET NULL"), nullable=True)

    reservation_code = Column(String(20), nullable=False, unique=True)
    reservation_date = Column(Date, nullable=False, index=True)
    reservation_time = Column(Time, nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=90)
    guest_count = Column(Integer, nullable=False)
    guest_name = Column(String(160), nullable=False)
    guest_phone = Column(String(30), nullable=True)
    guest_email = Column(String(255), nullable=True)
    special_requests = Column(Text, nullable=True)
    occasion = Column(String(60), nullable=True)
    dietary_restrictions = Column(JSON, nullable=True)

    status = Column(
        SAEnum(ReservationStatus, name="dining_reservation_status_enum", native_enum=False,
               values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ReservationStatus.PENDING,
    )
    confirmed_at = Column(DateTime, nullable=True)
    confirmed_by = Column(Integer, ForeignKey("accounts_users.id", ondelete="SET NULL"), nullable=True)
    seated_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    cancellation_reason = Column(Text, nullable=True)

    deposit_amount = Column(Numeric(18, 2), nullable=False, default=0)
    deposit_paid = Column(Boolean, nullable=False, default=False)
    internal_notes = Column(Text, nullable=True)

    table = relationship("TableModel")

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    @property
    def guest_key(self) -> str:
        """Identifica o cliente para contagem de clientes distintos."""
        return (self.guest_phone or self.guest_email or self.guest_name or "").strip().lower()


# ----------------------
# COZINHA (KDS)
# ----------------------
class KitchenTicketModel(Base):
    __tablename__ = "dining_kitchen_tickets"

    id = Column(Integer, primary_key=True)
    venue_id = Column(Integer, ForeignKey("dining_venues.id", ondelete="CASCADE"), nullable=False, index=True)
    table_number = Column(String(20), nullable=True)
    reservation_id = Column(Integer, ForeignKey("dining_reservations.id", ondelete="SET NULL"), nullable=True)

    # [{"name", "quantity", "unit_price", "notes"}]
    items = Column(JSON, nullable=False, default=list)
    total = Column(Numeric(18, 2), nullable=False, default=0)
    priority = Column(String(10), nullable=False, default="normal")
    status = Column(
        SAEnum(KitchenStatus, name="dining_kitchen_status_enum", native_enum=False,
               values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=KitchenStatus.PENDING,
    )

    created_at = Column(DateTime, default=now_trimmed, nullable=False, index=True)
    ready_at = Column(DateTime, nullable=True)
    served_at = Column(DateTime, nullable=True)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    @property
    def elapsed_minutes(self) -> int:
        end = self.ready_at or now_trimmed()
        if not self.created_at:
            return 0
        return max(int((end - self.created_at).total_seconds() // 60), 0)
