from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from partnerhub.api.dining.models.model_reservation import (
    KitchenStatus,
    KitchenTicketModel,
    ReservationModel,
)
from partnerhub.core.errors import not_found


class ReservationRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(
        self,
        venue_id: int,
        status: Optional[str] = None,
        on_date: Optional[date] = None,
    ) -> List[ReservationModel]:
        query = self.db.query(ReservationModel).filter(ReservationModel.venue_id == venue_id)
        if status:
            query = query.filter(ReservationModel.status == status)
        if on_date:
            query = query.filter(ReservationModel.reservation_date == on_date)
        return query.order_by(
            ReservationModel.reservation_date.desc(),
            ReservationModel.reservation_time.desc(),
            ReservationModel.id.desc(),
        ).all()

    def get(self, reservation_id: int) -> ReservationModel:
        r = self.db.query(ReservationModel).filter_by(id=reservation_id).first()
        if not r:
            raise not_found("Reservation not found")
        return r

    def code_exists(self, code: str) -> bool:
        return (
            self.db.query(ReservationModel.id).filter(ReservationModel.reservation_code == code).first()
            is not None
        )

    def for_day(self, venue_id: int, day: date) -> List[ReservationModel]:
        return (
            self.db.query(ReservationModel)
            .filter(ReservationModel.venue_id == venue_id, ReservationModel.reservation_date == day)
            .all()
        )

    def add(self, obj):
        self.db.add(obj)
        self.db.flush()
        return obj

    def commit(self, *instances) -> None:
        self.db.commit()
        for obj in instances:
            self.db.refresh(obj)


class KitchenRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self, venue_id: int, status: Optional[str] = None) -> List[KitchenTicketModel]:
        query = self.db.query(KitchenTicketModel).filter(KitchenTicketModel.venue_id == venue_id)
        if status:
            query = query.filter(KitchenTicketModel.status == status)
        return query.order_by(KitchenTicketModel.created_at.asc(), KitchenTicketModel.id.asc()).all()

    def get(self, ticket_id: int) -> KitchenTicketModel:
        t = self.db.query(KitchenTicketModel).filter_by(id=ticket_id).first()
        if not t:
            raise not_found("Kitchen ticket not found")
        return t

    # ---------------- Métricas ----------------
    def served_revenue(self, venue_id: int, start: datetime, end: datetime) -> float:
        total = (
            self.db.query(func.coalesce(func.sum(KitchenTicketModel.total), 0))
            .filter(
                KitchenTicketModel.venue_id == venue_id,
                KitchenTicketModel.status == KitchenStatus.SERVED,
                KitchenTicketModel.served_at >= start,
                KitchenTicketModel.served_at < end,
            )
            .scalar()
        )
        return float(total or 0)

    def count_open(self, venue_id: int) -> int:
        return (
            self.db.query(KitchenTicketModel)
            .filter(
                KitchenTicketModel.venue_id == venue_id,
                KitchenTicketModel.status.in_([KitchenStatus.PENDING, KitchenStatus.PREPARING]),
            )
            .count()
        )

    def count_created(self, venue_id: int, start: datetime, end: datetime) -> int:
        return (
            self.db.query(KitchenTicketModel)
            .filter(
                KitchenTicketModel.venue_id == venue_id,
                KitchenTicketModel.created_at >= start,
                KitchenTicketModel.created_at < end,
            )
            .count()
        )

    def ready_between(self, venue_id: int, start: datetime, end: datetime) -> List[KitchenTicketModel]:
        return (
            self.db.query(KitchenTicketModel)
            .filter(
                KitchenTicketModel.venue_id == venue_id,
                KitchenTicketModel.ready_at.isnot(None),
                KitchenTicketModel.ready_at >= start,
                KitchenTicketModel.ready_at < end,
            )
            .all()
        )

    def add(self, obj):
        self.db.add(obj)
        self.db.flush()
        return obj

    def commit(self, *instances) -> None:
        self.db.commit()
        for obj in instances:
            self.db.refresh(obj)
