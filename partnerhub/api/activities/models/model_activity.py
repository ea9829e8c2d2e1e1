import enum

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Float, Text, Numeric, JSON, ForeignKey, Enum as SAEnum,
)
from sqlalchemy.orm import relationship

from partnerhub.config.settings import DEFAULT_CURRENCY
from partnerhub.database.db_connection import Base
from partnerhub.utils.database_utils import now_trimmed


class ActivityBookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


# ----------------------
# ATIVIDADES
# ----------------------
class ActivityModel(Base):
    __tablename__ = "activity_activities"

    id = Column(Integer, primary_key=True)
    partner_user_id = Column(Integer, ForeignKey("accounts_users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(200), nullable=False)
    category = Column(String(60), nullable=False, default="Activity")
    duration = Column(String(60), nullable=True)
    price = Column(Numeric(18, 2), nullable=False)
    currency = Column(String(3), nullable=False, default=DEFAULT_CURRENCY)

    image_url = Column(String(500), nullable=True)
    images = Column(JSON, nullable=True)
    inclusions = Column(JSON, nullable=True)
    exclusions = Column(JSON, nullable=True)
    important_info = Column(Text, nullable=True)

    rating = Column(Float, nullable=False, default=0)
    reviews_count = Column(Integer, nullable=False, default=0)
    is_instant = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True)

    bookings = relationship("ActivityBookingModel", back_populates="activity")

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)


# ----------------------
# RESERVAS
# ----------------------
class ActivityBookingModel(Base):
    """Reserva de atividade; criada pelo fluxo de compra."""
    __tablename__ = "activity_bookings"

    id = Column(Integer, primary_key=True)
    activity_id = Column(Integer, ForeignKey("activity_activities.id"), nullable=False, index=True)
    activity = relationship("ActivityModel", back_populates="bookings")
    user_id = Column(Integer, ForeignKey("accounts_users.id", ondelete="SET NULL"), nullable=True)

    participants = Column(Integer, nullable=False, default=1)
    total_amount = Column(Numeric(18, 2), nullable=False)
    status = Column(
        SAEnum(ActivityBookingStatus, name="activity_booking_status_enum", native_enum=False,
               values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ActivityBookingStatus.PENDING,
    )

    created_at = Column(DateTime, default=now_trimmed, nullable=False, index=True)
