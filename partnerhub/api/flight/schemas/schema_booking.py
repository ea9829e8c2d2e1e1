from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from partnerhub.api.flight.models.model_booking import BookingStatus


class BookingEventOut(BaseModel):
    id: int
    event_type: str
    previous_status: Optional[str] = None
    notes: Optional[str] = None
    actor_user_id: Optional[int] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class BookingFlightOut(BaseModel):
    id: int
    flight_number: str
    origin: str
    destination: str
    departure_at: datetime
    model_config = ConfigDict(from_attributes=True)


class BookingOut(BaseModel):
    id: int
    flight_id: int
    flight: Optional[BookingFlightOut] = None
    user_id: Optional[int] = None
    booking_reference: str
    passenger_name: str
    passenger_email: Optional[str] = None
    passenger_count: int
    booking_class: str
    total_price: float
    currency: str
    status: BookingStatus
    refund_amount: Optional[float] = None
    refund_percentage: Optional[int] = None
    cancelled_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class BookingDetailOut(BookingOut):
    events: List[BookingEventOut] = []


class BookingStatusUpdate(BaseModel):
    status: BookingStatus
    notes: Optional[str] = Field(None, max_length=1000)
