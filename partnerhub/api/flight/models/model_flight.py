import enum

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Numeric, JSON, ForeignKey, Enum as SAEnum,
)
from sqlalchemy.orm import relationship

from partnerhub.config.settings import DEFAULT_CURRENCY
from partnerhub.database.db_connection import Base
from partnerhub.utils.database_utils import now_trimmed


def _enum_values(e):
    return [m.value for m in e]


class FlightStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    DELAYED = "delayed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class RouteFrequency(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    SEASONAL = "seasonal"


# ----------------------
# COMPANHIA AÉREA
# ----------------------
class FlightPartnerModel(Base):
    __tablename__ = "flight_partners"

    id = Column(Integer, primary_key=True)
    owner_user_id = Column(Integer, ForeignKey("accounts_users.id", ondelete="CASCADE"), nullable=False, unique=True)
    airline_code = Column(String(2), nullable=False, unique=True)
    name = Column(String(160), nullable=False)
    contact_email = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)


# ----------------------
# ROTAS
# ----------------------
class FlightRouteModel(Base):
    __tablename__ = "flight_routes"

    id = Column(Integer, primary_key=True)
    partner_id = Column(Integer, ForeignKey("flight_partners.id", ondelete="CASCADE"), nullable=False, index=True)
    origin = Column(String(3), nullable=False)
    destination = Column(String(3), nullable=False)
    distance_km = Column(Numeric(10, 2), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    frequency = Column(
        SAEnum(RouteFrequency, name="flight_route_frequency_enum", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=RouteFrequency.WEEKLY,
    )
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)


# ----------------------
# VOOS
# ----------------------
class FlightModel(Base):
    __tablename__ = "flight_flights"

    id = Column(Integer, primary_key=True)
    partner_id = Column(Integer, ForeignKey("flight_partners.id", ondelete="CASCADE"), nullable=False, index=True)
    route_id = Column(Integer, ForeignKey("flight_routes.id", ondelete="SET NULL"), nullable=True)
    route = relationship("FlightRouteModel")

    flight_number = Column(String(20), nullable=False)
    airline_code = Column(String(2), nullable=False)
    origin = Column(String(3), nullable=False)
    origin_name = Column(String(160), nullable=True)
    destination = Column(String(3), nullable=False)
    destination_name = Column(String(160), nullable=True)
    departure_at = Column(DateTime, nullable=False, index=True)
    arrival_at = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    aircraft = Column(String(60), nullable=False)
    total_seats = Column(Integer, nullable=False, default=180)
    base_price = Column(Numeric(18, 2), nullable=False)
    currency = Column(String(3), nullable=False, default=DEFAULT_CURRENCY)
    amenities = Column(JSON, nullable=True)
    baggage_allowance = Column(JSON, nullable=True)
    status = Column(
        SAEnum(FlightStatus, name="flight_status_enum", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=FlightStatus.SCHEDULED,
    )

    bookings = relationship("FlightBookingModel", back_populates="flight")

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)


# ----------------------
# REGRAS DE PREÇO
# ----------------------
class PricingRuleModel(Base):
    __tablename__ = "flight_pricing_rules"

    id = Column(Integer, primary_key=True)
    partner_id = Column(Integer, ForeignKey("flight_partners.id", ondelete="CASCADE"), nullable=False, index=True)
    route_id = Column(Integer, ForeignKey("flight_routes.id", ondelete="CASCADE"), nullable=True)

    name = Column(String(100), nullable=False)
    rule_type = Column(String(30), nullable=False)
    flight_class = Column(String(30), nullable=True)
    adjustment_type = Column(String(20), nullable=False)
    adjustment_value = Column(Numeric(18, 2), nullable=False)
    # start_date, end_date, days_before_departure_min/max, days_of_week, min/max_seats_available
    conditions = Column(JSON, nullable=True)
    priority = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)
