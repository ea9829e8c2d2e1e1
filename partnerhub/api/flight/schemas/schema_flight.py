from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, constr, field_validator, model_validator

from partnerhub.api.flight.models.model_flight import FlightStatus, RouteFrequency
from partnerhub.api.shared.schemas import LocalDateTime, reject_null

IataCode = constr(min_length=3, max_length=3)


def _upper(value: Optional[str]) -> Optional[str]:
    return value.upper() if isinstance(value, str) else value


# ---------------- Companhia ----------------
class FlightPartnerIn(BaseModel):
    airline_code: constr(min_length=2, max_length=2)
    name: constr(min_length=2, max_length=160)
    contact_email: Optional[str] = None

    @field_validator("airline_code")
    @classmethod
    def _upper_code(cls, value):
        return _upper(value)


class FlightPartnerOut(BaseModel):
    id: int
    owner_user_id: int
    airline_code: str
    name: str
    contact_email: Optional[str] = None
    is_active: bool
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ---------------- Rotas ----------------
class RouteIn(BaseModel):
    origin: IataCode
    destination: IataCode
    distance_km: Decimal = Field(..., gt=0)
    duration_minutes: int = Field(..., gt=0)
    frequency: RouteFrequency = RouteFrequency.WEEKLY
    is_active: bool = True

    @field_validator("origin", "destination")
    @classmethod
    def _upper_codes(cls, value):
        return _upper(value)

    @model_validator(mode="after")
    def _origin_differs(self):
        if self.origin == self.destination:
            raise ValueError("origin and destination must differ")
        return self


class RouteUpdate(BaseModel):
    origin: Optional[IataCode] = None
    destination: Optional[IataCode] = None
    distance_km: Optional[Decimal] = Field(None, gt=0)
    duration_minutes: Optional[int] = Field(None, gt=0)
    frequency: Optional[RouteFrequency] = None
    is_active: Optional[bool] = None

    _no_nulls = reject_null("origin", "destination", "distance_km", "duration_minutes", "frequency", "is_active")

    @field_validator("origin", "destination")
    @classmethod
    def _upper_codes(cls, value):
        return _upper(value)


class RouteOut(BaseModel):
    id: int
    partner_id: int
    origin: str
    destination: str
    distance_km: float
    duration_minutes: int
    frequency: RouteFrequency
    is_active: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ---------------- Voos ----------------
class FlightIn(BaseModel):
    flight_number: constr(min_length=1, max_length=20)
    route_id: Optional[int] = None
    origin: IataCode
    origin_name: Optional[str] = None
    destination: IataCode
    destination_name: Optional[str] = None
    departure_at: LocalDateTime
    arrival_at: LocalDateTime
    aircraft: constr(min_length=1, max_length=60)
    total_seats: int = Field(180, ge=1)
    base_price: Decimal = Field(..., gt=0)
    currency: Optional[constr(min_length=3, max_length=3)] = None
    amenities: Optional[List[str]] = None
    baggage_allowance: Optional[dict] = None
    status: FlightStatus = FlightStatus.SCHEDULED

    @field_validator("origin", "destination")
    @classmethod
    def _upper_codes(cls, value):
        return _upper(value)

    @model_validator(mode="after")
    def _check_schedule(self):
        if self.arrival_at <= self.departure_at:
            raise ValueError("arrival_at must be after departure_at")
        if self.origin == self.destination:
            raise ValueError("origin and destination must differ")
        return self


class FlightUpdate(BaseModel):
    flight_number: Optional[constr(min_length=1, max_length=20)] = None
    route_id: Optional[int] = None
    origin: Optional[IataCode] = None
    origin_name: Optional[str] = None
    destination: Optional[IataCode] = None
    destination_name: Optional[str] = None
    departure_at: Optional[LocalDateTime] = None
    arrival_at: Optional[LocalDateTime] = None
    aircraft: Optional[constr(min_length=1, max_length=60)] = None
    total_seats: Optional[int] = Field(None, ge=1)
    base_price: Optional[Decimal] = Field(None, gt=0)
    amenities: Optional[List[str]] = None
    baggage_allowance: Optional[dict] = None
    status: Optional[FlightStatus] = None

    _no_nulls = reject_null(
        "flight_number", "origin", "destination", "departure_at", "arrival_at",
        "aircraft", "total_seats", "base_price", "status",
    )

    @field_validator("origin", "destination")
    @classmethod
    def _upper_codes(cls, value):
        return _upper(value)


class FlightOut(BaseModel):
    id: int
    partner_id: int
    route_id: Optional[int] = None
    flight_number: str
    airline_code: str
    origin: str
    origin_name: Optional[str] = None
    destination: str
    destination_name: Optional[str] = None
    departure_at: datetime
    arrival_at: datetime
    duration_minutes: int
    aircraft: str
    total_seats: int
    base_price: float
    currency: str
    amenities: Optional[List[str]] = None
    baggage_allowance: Optional[dict] = None
    status: FlightStatus
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ---------------- Regras de preço ----------------
AdjustmentType = Literal["percentage", "fixed_amount"]


class RuleConditions(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    days_before_departure_min: Optional[int] = Field(None, ge=0)
    days_before_departure_max: Optional[int] = Field(None, ge=0)
    days_of_week: Optional[List[int]] = None
    min_seats_available: Optional[int] = Field(None, ge=0)
    max_seats_available: Optional[int] = Field(None, ge=0)

    @field_validator("days_of_week")
    @classmethod
    def _valid_weekdays(cls, value):
        if value and any(d < 0 or d > 6 for d in value):
            raise ValueError("days_of_week values must be between 0 (Sunday) and 6")
        return value


class PricingRuleIn(BaseModel):
    name: constr(min_length=1, max_length=100)
    route_id: Optional[int] = None
    rule_type: constr(min_length=1, max_length=30)
    flight_class: Optional[str] = None
    adjustment_type: AdjustmentType
    adjustment_value: Decimal
    conditions: RuleConditions = Field(default_factory=RuleConditions)
    priority: int = 0
    is_active: bool = True


class PricingRuleUpdate(BaseModel):
    name: Optional[constr(min_length=1, max_length=100)] = None
    route_id: Optional[int] = None
    rule_type: Optional[constr(min_length=1, max_length=30)] = None
    flight_class: Optional[str] = None
    adjustment_type: Optional[AdjustmentType] = None
    adjustment_value: Optional[Decimal] = None
    conditions: Optional[RuleConditions] = None
    priority: Optional[int] = None
    is_active: Optional[bool] = None

    _no_nulls = reject_null("name", "rule_type", "adjustment_type", "adjustment_value", "priority", "is_active")


class PricingRuleOut(BaseModel):
    id: int
    partner_id: int
    route_id: Optional[int] = None
    name: str
    rule_type: str
    flight_class: Optional[str] = None
    adjustment_type: str
    adjustment_value: float
    conditions: Optional[dict] = None
    priority: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class PriceQuoteOut(BaseModel):
    flight_id: int
    base_price: float
    price: float
    currency: str
    seats_available: int
    days_before_departure: int
    applied_rules: List[int]
