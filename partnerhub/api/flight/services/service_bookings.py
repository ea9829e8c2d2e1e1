from typing import Optional

from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.flight.models.model_booking import (
    BOOKING_STATUS_TRANSITIONS,
    BookingEventModel,
    BookingStatus,
    FlightBookingModel,
)
from partnerhub.api.flight.models.model_flight import FlightPartnerModel
from partnerhub.api.flight.repositories.repo_bookings import BookingRepository
from partnerhub.api.flight.schemas.schema_booking import BookingStatusUpdate
from partnerhub.api.flight.services.calculations import calculate_refund_amount
from partnerhub.core.errors import check_transition
from partnerhub.utils.database_utils import now_trimmed
from partnerhub.utils.logger import logger


class BookingService:
    def __init__(self, db: Session):
        self.repo = BookingRepository(db)

    def list(
        self,
        partner: FlightPartnerModel,
        flight_id: Optional[int] = None,
        status: Optional[BookingStatus] = None,
        passenger_name: Optional[str] = None,
        booking_reference: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> dict:
        rows, total = self.repo.list(
            partner.id,
            flight_id=flight_id,
            status=status.value if status else None,
            passenger_name=passenger_name,
            booking_reference=booking_reference,
            limit=limit,
            offset=offset,
        )
        return {"data": rows, "total": total}

    def get(self, partner: FlightPartnerModel, booking_id: int) -> FlightBookingModel:
        return self.repo.get(partner.id, booking_id)

    def update_status(
        self,
        partner: FlightPartnerModel,
        booking_id: int,
        user: UserModel,
        data: BookingStatusUpdate,
    ) -> FlightBookingModel:
        """Aplica a transição; no cancelamento calcula o reembolso pela antecedência."""
        booking = self.repo.get(partner.id, booking_id)
        previous = booking.status.value
        target = data.status.value
        check_transition(BOOKING_STATUS_TRANSITIONS, previous, target, domain="flight_booking")

        booking.status = data.status
        if data.notes:
            booking.notes = data.notes

        if data.status == BookingStatus.CANCELLED:
            now = now_trimmed()
            refund = calculate_refund_amount(booking.total_price, booking.flight.departure_at, cancelled_at=now)
            booking.cancelled_at = now
            booking.refund_amount = refund["refund_amount"]
            booking.refund_percentage = refund["refund_percentage"]
            logger.info(
                f"[FLIGHT] Reserva {booking.booking_reference} cancelada "
                f"{refund['hours_before']}h antes: reembolso {refund['refund_percentage']}%"
            )

        self.repo.add(
            BookingEventModel(
                booking_id=booking.id,
                event_type=f"status_{target}",
                previous_status=previous,
                notes=data.notes,
                actor_user_id=user.id,
            )
        )
        self.repo.commit(booking)
        logger.info(f"[FLIGHT] Reserva {booking.booking_reference}: {previous} -> {target}")
        return booking
