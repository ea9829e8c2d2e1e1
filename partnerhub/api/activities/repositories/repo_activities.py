from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from partnerhub.api.activities.models.model_activity import (
    ActivityBookingModel,
    ActivityBookingStatus,
    ActivityModel,
)
from partnerhub.core.errors import not_found


class ActivityRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_by_partner(self, user_id: int) -> List[ActivityModel]:
        return (
            self.db.query(ActivityModel)
            .filter(ActivityModel.partner_user_id == user_id)
            .order_by(ActivityModel.created_at.desc(), ActivityModel.id.desc())
            .all()
        )

    def get_owned(self, user_id: int, activity_id: int) -> ActivityModel:
        activity = self.db.query(ActivityModel).filter_by(id=activity_id, partner_user_id=user_id).first()
        if not activity:
            raise not_found("Activity not found")
        return activity

    def count_bookings(self, activity_id: int) -> int:
        return (
            self.db.query(func.count(ActivityBookingModel.id))
            .filter(ActivityBookingModel.activity_id == activity_id)
            .scalar()
        )

    def confirmed_bookings(
        self,
        activity_ids: List[int],
        since: Optional[datetime] = None,
    ) -> List[ActivityBookingModel]:
        if not activity_ids:
            return []
        query = self.db.query(ActivityBookingModel).filter(
            ActivityBookingModel.activity_id.in_(activity_ids),
            ActivityBookingModel.status == ActivityBookingStatus.CONFIRMED,
        )
        if since is not None:
            query = query.filter(ActivityBookingModel.created_at >= since)
        return query.order_by(ActivityBookingModel.created_at).all()

    def add(self, instance):
        self.db.add(instance)
        self.db.flush()
        return instance

    def delete(self, instance) -> None:
        self.db.delete(instance)
        self.db.commit()

    def commit(self, *instances) -> None:
        self.db.commit()
        for instance in instances:
            self.db.refresh(instance)
