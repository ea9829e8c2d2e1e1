from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, constr

from partnerhub.api.dining.models.model_reservation import KitchenStatus, ReservationStatus


# ---------------- Reservas ----------------
class ReservationIn(BaseModel):
    """Reserva lançada pela equipe (walk-in ou telefone)."""
    venue_id: int
    table_id: Optional[int] = None
    reservation_date: date
    reservation_time: time
    duration_minutes: int = Field(90, ge=15, le=600)
    guest_count: int = Field(..., ge=1)
    guest_name: constr(min_length=1, max_length=160)
    guest_phone: Optional[str] = None
    guest_email: Optional[str] = None
    special_requests: Optional[str] = None
    occasion: Optional[str] = None
    dietary_restrictions: Optional[List[str]] = None
    internal_notes: Optional[str] = None


class ReservationStatusUpdate(BaseModel):
    status: Literal["confirmed", "cancelled", "seated", "completed", "no_show"]
    reason: Optional[str] = Field(None, max_length=500)


class ReservationOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    venue_id: int
    table_id: Optional[int] = None
    reservation_code: str
    reservation_date: date
    reservation_time: time
    duration_minutes: int
    guest_count: int
    guest_name: str
    guest_phone: Optional[str] = None
    guest_email: Optional[str] = None
    special_requests: Optional[str] = None
    occasion: Optional[str] = None
    dietary_restrictions: Optional[List[str]] = None
    status: ReservationStatus
    confirmed_at: Optional[datetime] = None
    confirmed_by: Optional[int] = None
    seated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    deposit_amount: float
    deposit_paid: bool
    internal_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ---------------- Cozinha ----------------
class KitchenItem(BaseModel):
    name: constr(min_length=1, max_length=200)
    quantity: int = Field(..., ge=1)
    unit_price: Decimal = Field(Decimal("0"), ge=0)
    notes: Optional[str] = None


class KitchenTicketIn(BaseModel):
    venue_id: int
    table_number: Optional[str] = None
    reservation_id: Optional[int] = None
    priority: Literal["normal", "high"] = "normal"
    items: List[KitchenItem] = Field(..., min_length=1)


class KitchenStatusUpdate(BaseModel):
    status: KitchenStatus


class KitchenTicketOut(BaseModel):
    id: int
    venue_id: int
    table_number: Optional[str] = None
    reservation_id: Optional[int] = None
    items: List[dict]
    total: float
    priority: str
    status: KitchenStatus
    elapsed_minutes: int = 0
    created_at: datetime
    ready_at: Optional[datetime] = None
    served_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# ---------------- Dashboard ----------------
class DiningDashboardStats(BaseModel):
    todayRevenue: float
    todayRevenueChange: float
    pendingOrders: int
    pendingOrdersChange: float
    newCustomers: int
    newCustomersChange: float
    avgServiceTime: float
    avgServiceTimeChange: float
