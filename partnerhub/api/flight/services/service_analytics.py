from collections import defaultdict
from typing import Optional

from sqlalchemy.orm import Session

from partnerhub.api.flight.models.model_booking import SEAT_HOLDING_STATUSES, FlightBookingModel
from partnerhub.api.flight.models.model_flight import FlightPartnerModel
from partnerhub.api.flight.repositories.repo_bookings import BookingRepository
from partnerhub.api.flight.repositories.repo_flights import FlightRepository
from partnerhub.api.flight.services.calculations import (
    calculate_flight_analytics,
    calculate_growth,
    calculate_load_factor,
    calculate_rask,
    calculate_yield_per_seat,
    get_date_range,
    previous_range,
    resolve_period,
    round_half_up,
)
from partnerhub.utils.database_utils import now_trimmed


def booking_as_dict(booking: FlightBookingModel) -> dict:
    return {
        "total_price": booking.total_price,
        "passenger_count": booking.passenger_count,
        "created_at": booking.created_at,
        "departure_at": booking.flight.departure_at if booking.flight else None,
        "status": booking.status.value,
    }


class FlightAnalyticsService:
    def __init__(self, db: Session):
        self.flights = FlightRepository(db)
        self.bookings = BookingRepository(db)

    def dashboard(self, partner: FlightPartnerModel, period: Optional[str] = None) -> dict:
        period = resolve_period(period)
        start, end = get_date_range(period, now_trimmed())
        prev_start, prev_end = previous_range(start, end)

        current = calculate_flight_analytics(
            [booking_as_dict(b) for b in self.bookings.created_between(partner.id, start, end)]
        )
        previous = calculate_flight_analytics(
            [booking_as_dict(b) for b in self.bookings.created_between(partner.id, prev_start, prev_end)]
        )

        growth = {
            key: calculate_growth(current["total"][key], previous["total"][key])
            for key in ("bookings", "revenue", "passengers")
        }
        return {"period": period, "start": start, "end": end, **current, "growth": growth}

    def capacity(self, partner: FlightPartnerModel) -> dict:
        """Ocupação, yield e RASK por voo."""
        flights = self.flights.list_flights(partner.id)
        bookings = self.bookings.for_flights([f.id for f in flights])

        seats = defaultdict(int)
        revenue = defaultdict(float)
        for b in bookings:
            if b.status.value in SEAT_HOLDING_STATUSES:
                seats[b.flight_id] += b.passenger_count or 1
                revenue[b.flight_id] += float(b.total_price or 0)

        rows = []
        for f in flights:
            booked = seats[f.id]
            distance = f.route.distance_km if f.route else 0
            rows.append({
                "flight_id": f.id,
                "flight_number": f.flight_number,
                "origin": f.origin,
                "destination": f.destination,
                "departure_at": f.departure_at,
                "total_seats": f.total_seats,
                "seats_booked": booked,
                "seats_available": max(f.total_seats - booked, 0),
                "load_factor": calculate_load_factor(booked, f.total_seats),
                "revenue": revenue[f.id],
                "yield_per_seat": calculate_yield_per_seat(revenue[f.id], booked),
                "rask": round(calculate_rask(revenue[f.id], f.total_seats, distance), 4),
            })

        average = (
            round_half_up(sum(r["load_factor"] for r in rows) / len(rows) * 100) / 100 if rows else 0.0
        )
        return {"flights": rows, "average_load_factor": average}
