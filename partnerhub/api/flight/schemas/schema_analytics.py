from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel


class Growth(BaseModel):
    absolute: float
    percentage: float
    trend: Literal["up", "down", "stable"]


class AnalyticsTotals(BaseModel):
    bookings: int
    revenue: float
    passengers: int


class AnalyticsStatus(BaseModel):
    confirmed: int
    cancelled: int
    pending: int


class AnalyticsRevenue(BaseModel):
    confirmed: float
    cancelled: float
    net: float


class AnalyticsAverages(BaseModel):
    booking_value: float
    passengers_per_booking: float
    lead_time_days: float


class AnalyticsRates(BaseModel):
    cancellation_rate: float
    confirmation_rate: float


class AnalyticsGrowth(BaseModel):
    bookings: Growth
    revenue: Growth
    passengers: Growth


class FlightDashboardOut(BaseModel):
    period: str
    start: datetime
    end: datetime
    total: AnalyticsTotals
    status: AnalyticsStatus
    revenue: AnalyticsRevenue
    averages: AnalyticsAverages
    rates: AnalyticsRates
    growth: AnalyticsGrowth


class FlightCapacityOut(BaseModel):
    flight_id: int
    flight_number: str
    origin: str
    destination: str
    departure_at: datetime
    total_seats: int
    seats_booked: int
    seats_available: int
    load_factor: float
    revenue: float
    yield_per_seat: int
    rask: float


class CapacityOverviewOut(BaseModel):
    flights: List[FlightCapacityOut]
    average_load_factor: float
