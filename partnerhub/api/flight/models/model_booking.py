import enum

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Numeric, ForeignKey, Enum as SAEnum,
)
from sqlalchemy.orm import relationship

from partnerhub.config.settings import DEFAULT_CURRENCY
from partnerhub.database.db_connection import Base
from partnerhub.utils.database_utils import now_trimmed


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    BOARDED = "boarded"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


BOOKING_STATUS_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["confirmed", "cancelled"],
    "confirmed": ["checked_in", "cancelled", "no_show"],
    "checked_in": ["boarded", "no_show"],
    "boarded": ["completed"],
    "completed": [],
    "cancelled": [],
    "no_show": [],
}

# Status que ocupam assento
SEAT_HOLDING_STATUSES = ("pending", "confirmed", "checked_in", "boarded", "completed")


class FlightBookingModel(Base):
    """Reserva do passageiro; criada pelo fluxo de compra."""
    __tablename__ = "flight_bookings"

    id = Column(Integer, primary_key=True)
    flight_id = Column(Integer, ForeignKey("flight_flights.id"), nullable=False, index=True)
    flight = relationship("FlightModel", back_populates="bookings", lazy="joined")
    user_id = Column(Integer, ForeignKey("accounts_users.id", ondelete="SET NULL"), nullable=True)

    booking_reference = Column(String(12), nullable=False, unique=True)
    passenger_name = Column(String(160), nullable=False)
    passenger_email = Column(String(255), nullable=True)
    passenger_count = Column(Integer, nullable=False, default=1)
    booking_class = Column(String(30), nullable=False, default="economy")
    total_price = Column(Numeric(18, 2), nullable=False)
    currency = Column(String(3), nullable=False, default=DEFAULT_CURRENCY)

    status = Column(
        SAEnum(BookingStatus, name="flight_booking_status_enum", native_enum=False,
               values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=BookingStatus.PENDING,
    )
    refund_amount = Column(Numeric(18, 2), nullable=True)
    refund_percentage = Column(Integer, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)

    events = relationship(
        "BookingEventModel", back_populates="booking", cascade="all, delete-orphan", order_by="BookingEventModel.id"
    )

    created_at = Column(DateTime, default=now_trimmed, nullable=False, index=True)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)


class BookingEventModel(Base):
    """Histórico de mudanças de status da reserva."""
    __tablename__ = "flight_booking_events"

    id = Column(Integer, primary_key=True)
    booking_id = Column(Integer, ForeignKey("flight_bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    booking = relationship("FlightBookingModel", back_populates="events")
    event_type = Column(String(60), nullable=False)
    previous_status = Column(String(20), nullable=True)
    notes = Column(Text, nullable=True)
    actor_user_id = Column(Integer, ForeignKey("accounts_users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
