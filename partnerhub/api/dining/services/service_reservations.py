import secrets
import string
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.dining.models.model_reservation import (
    KITCHEN_STATUS_TRANSITIONS,
    RESERVATION_STATUS_TRANSITIONS,
    KitchenStatus,
    KitchenTicketModel,
    ReservationModel,
    ReservationStatus,
)
from partnerhub.api.dining.repositories.repo_reservations import KitchenRepository, ReservationRepository
from partnerhub.api.dining.repositories.repo_venues import VenueRepository
from partnerhub.api.dining.schemas.schema_reservation import (
    KitchenTicketIn,
    ReservationIn,
    ReservationStatusUpdate,
)
from partnerhub.api.dining.services.service_venues import ensure_owner
from partnerhub.core.errors import check_transition, validation_error
from partnerhub.utils.database_utils import now_trimmed
from partnerhub.utils.logger import logger

_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_reservation_code() -> str:
    return "DN" + "".join(secrets.choice(_CODE_ALPHABET) for _ in range(8))


def ticket_total(items: list) -> Decimal:
    """Total do ticket = Σ quantidade × preço unitário."""
    return sum(
        (Decimal(str(i.get("unit_price") or 0)) * int(i.get("quantity") or 0) for i in items),
        Decimal("0"),
    )


def apply_reservation_status(
    reservation: ReservationModel,
    target: str,
    actor: UserModel,
    reason: Optional[str] = None,
) -> ReservationModel:
    """Valida a transição e carimba o horário correspondente."""
    check_transition(RESERVATION_STATUS_TRANSITIONS, reservation.status.value, target, domain="dining_reservation")

    now = now_trimmed()
    reservation.status = ReservationStatus(target)
    if target == ReservationStatus.CONFIRMED.value:
        reservation.confirmed_at = now
        reservation.confirmed_by = actor.id
    elif target == ReservationStatus.SEATED.value:
        reservation.seated_at = now
    elif target == ReservationStatus.COMPLETED.value:
        reservation.completed_at = now
    elif target == ReservationStatus.CANCELLED.value:
        reservation.cancelled_at = now
        reservation.cancellation_reason = reason
    return reservation


class ReservationService:
    def __init__(self, db: Session):
        self.venues = VenueRepository(db)
        self.repo = ReservationRepository(db)

    def list(
        self,
        venue_id: int,
        user: UserModel,
        status: Optional[ReservationStatus] = None,
        on_date: Optional[date] = None,
    ) -> List[ReservationModel]:
        ensure_owner(self.venues.get_venue(venue_id), user)
        return self.repo.list(venue_id, status=status, on_date=on_date)

    def create(self, user: UserModel, data: ReservationIn) -> ReservationModel:
        venue = ensure_owner(self.venues.get_venue(data.venue_id), user)

        if venue.capacity and data.guest_count > venue.capacity:
            raise validation_error(
                "Guest count exceeds venue capacity",
                details=[{"field": "guest_count", "message": f"Maximum is {venue.capacity}"}],
            )

        if data.table_id is not None:
            table = self.venues.get_table(data.table_id)
            if table.venue_id != venue.id:
                raise validation_error("Table does not belong to this venue")

        code = generate_reservation_code()
        while self.repo.code_exists(code):
            code = generate_reservation_code()

        reservation = ReservationModel(
            **data.model_dump(),
            reservation_code=code,
            status=ReservationStatus.PENDING,
        )
        self.repo.add(reservation)
        self.repo.commit(reservation)
        logger.info(f"[DINING] Reserva {code} criada venue={venue.id} por={user.id}")
        return reservation

    def update_status(self, reservation_id: int, user: UserModel, data: ReservationStatusUpdate) -> ReservationModel:
        reservation = self.repo.get(reservation_id)
        ensure_owner(self.venues.get_venue(reservation.venue_id), user)

        previous = reservation.status.value
        apply_reservation_status(reservation, data.status, user, data.reason)
        self.repo.commit(reservation)
        logger.info(f"[DINING] Reserva {reservation.reservation_code}: {previous} -> {data.status}")
        return reservation


class KitchenService:
    def __init__(self, db: Session):
        self.venues = VenueRepository(db)
        self.repo = KitchenRepository(db)
        self.reservations = ReservationRepository(db)

    def list(self, venue_id: int, user: UserModel, status: Optional[KitchenStatus] = None) -> List[KitchenTicketModel]:
        ensure_owner(self.venues.get_venue(venue_id), user)
        return self.repo.list(venue_id, status=status)

    def create(self, user: UserModel, data: KitchenTicketIn) -> KitchenTicketModel:
        ensure_owner(self.venues.get_venue(data.venue_id), user)

        if data.reservation_id is not None:
            reservation = self.reservations.get(data.reservation_id)
            if reservation.venue_id != data.venue_id:
                raise validation_error(
                    "Reservation does not belong to this venue",
                    details=[{"field": "reservation_id", "message": "Reservation belongs to another venue"}],
                )

        items = [
            {
                "name": i.name,
                "quantity": i.quantity,
                "unit_price": float(i.unit_price),
                "notes": i.notes,
            }
            for i in data.items
        ]
        ticket = KitchenTicketModel(
            venue_id=data.venue_id,
            table_number=data.table_number,
            reservation_id=data.reservation_id,
            priority=data.priority,
            items=items,
            total=ticket_total(items),
            status=KitchenStatus.PENDING,
        )
        self.repo.add(ticket)
        self.repo.commit(ticket)
        return ticket

    def update_status(self, ticket_id: int, user: UserModel, target: KitchenStatus) -> KitchenTicketModel:
        ticket = self.repo.get(ticket_id)
        ensure_owner(self.venues.get_venue(ticket.venue_id), user)
        check_transition(KITCHEN_STATUS_TRANSITIONS, ticket.status.value, target.value, domain="dining_kitchen")

        ticket.status = target
        if target == KitchenStatus.READY:
            ticket.ready_at = now_trimmed()
        elif target == KitchenStatus.SERVED:
            ticket.served_at = now_trimmed()
        self.repo.commit(ticket)
        return ticket
