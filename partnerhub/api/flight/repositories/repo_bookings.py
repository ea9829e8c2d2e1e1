from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from partnerhub.api.flight.models.model_booking import FlightBookingModel
from partnerhub.api.flight.models.model_flight import FlightModel
from partnerhub.core.errors import not_found


class BookingRepository:
    def __init__(self, db: Session):
        self.db = db

    def _partner_query(self, partner_id: int):
        return (
            self.db.query(FlightBookingModel)
            .join(FlightModel, FlightBookingModel.flight_id == FlightModel.id)
            .filter(FlightModel.partner_id == partner_id)
        )

    def list(
        self,
        partner_id: int,
        flight_id: Optional[int] = None,
        status: Optional[str] = None,
        passenger_name: Optional[str] = None,
        booking_reference: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[FlightBookingModel], int]:
        query = self._partner_query(partner_id)
        if flight_id:
            query = query.filter(FlightBookingModel.flight_id == flight_id)
        if status:
            query = query.filter(FlightBookingModel.status == status)
        if passenger_name:
            query = query.filter(FlightBookingModel.passenger_name.ilike(f"%{passenger_name}%"))
        if booking_reference:
            query = query.filter(FlightBookingModel.booking_reference == booking_reference.upper())

        total = query.count()
        rows = (
            query.order_by(FlightBookingModel.created_at.desc(), FlightBookingModel.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total

    def get(self, partner_id: int, booking_id: int) -> FlightBookingModel:
        booking = (
            self._partner_query(partner_id)
            .options(selectinload(FlightBookingModel.events))
            .filter(FlightBookingModel.id == booking_id)
            .first()
        )
        if not booking:
            raise not_found("Booking not found")
        return booking

    def created_between(self, partner_id: int, start: datetime, end: datetime) -> List[FlightBookingModel]:
        return (
            self._partner_query(partner_id)
            .filter(FlightBookingModel.created_at >= start, FlightBookingModel.created_at <= end)
            .all()
        )

    def for_flights(self, flight_ids: List[int]) -> List[FlightBookingModel]:
        if not flight_ids:
            return []
        return self.db.query(FlightBookingModel).filter(FlightBookingModel.flight_id.in_(flight_ids)).all()

    def add(self, instance):
        self.db.add(instance)
        self.db.flush()
        return instance

    def commit(self, *instances) -> None:
        self.db.commit()
        for instance in instances:
            self.db.refresh(instance)
