from collections import OrderedDict
from datetime import datetime, time, timedelta
from typing import List

from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.activities.models.model_activity import ActivityModel
from partnerhub.api.activities.repositories.repo_activities import ActivityRepository
from partnerhub.api.activities.schemas.schema_activity import ActivityIn, ActivityUpdate
from partnerhub.core.errors import conflict
from partnerhub.utils.database_utils import today_local
from partnerhub.utils.logger import logger


def as_list_item(activity: ActivityModel) -> dict:
    return {
        "id": activity.id,
        "title": activity.title,
        "location": activity.location,
        "price": float(activity.price or 0),
        "rating": activity.rating or 0,
        "type": "activity",
        "status": "active" if activity.is_active else "inactive",
    }


class ActivityService:
    def __init__(self, db: Session):
        self.repo = ActivityRepository(db)

    def list(self, user: UserModel) -> List[dict]:
        return [as_list_item(a) for a in self.repo.list_by_partner(user.id)]

    def get(self, user: UserModel, activity_id: int) -> ActivityModel:
        return self.repo.get_owned(user.id, activity_id)

    def create(self, user: UserModel, data: ActivityIn) -> ActivityModel:
        payload = data.model_dump()
        images = payload.get("images") or []
        activity = ActivityModel(
            **payload,
            partner_user_id=user.id,
            image_url=images[0] if images else None,
        )
        activity.category = data.category or "Activity"
        activity.images = images
        self.repo.add(activity)
        self.repo.commit(activity)
        logger.info(f"[ACTIVITIES] Atividade criada id={activity.id} partner={user.id}")
        return activity

    def update(self, user: UserModel, activity_id: int, data: ActivityUpdate) -> ActivityModel:
        activity = self.repo.get_owned(user.id, activity_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(activity, field, value)
        if "images" in changes:
            activity.image_url = (changes["images"] or [None])[0]
        self.repo.commit(activity)
        return activity

    def delete(self, user: UserModel, activity_id: int) -> None:
        activity = self.repo.get_owned(user.id, activity_id)
        if self.repo.count_bookings(activity.id):
            raise conflict("Cannot delete activity with existing bookings")
        self.repo.delete(activity)
        logger.info(f"[ACTIVITIES] Atividade removida id={activity_id} partner={user.id}")

    # ---------------- Estatísticas ----------------
    def stats(self, user: UserModel, days: int = 7) -> dict:
        """
        Receita e reservas confirmadas (todo o período), nota média das
        atividades avaliadas e série diária dos últimos `days` dias.
        """
        activities = self.repo.list_by_partner(user.id)
        if not activities:
            return {"revenue": 0, "totalBookings": 0, "averageRating": 0, "activeListings": 0}

        ids = [a.id for a in activities]
        rated = [a.rating for a in activities if (a.rating or 0) > 0]
        average_rating = round(sum(rated) / len(rated), 1) if rated else 0

        all_bookings = self.repo.confirmed_bookings(ids)
        revenue = sum(float(b.total_amount or 0) for b in all_bookings)

        today = today_local()
        first_day = today - timedelta(days=days - 1)
        chart = OrderedDict(
            ((first_day + timedelta(days=i)).isoformat(), {"revenue": 0.0, "bookings": 0})
            for i in range(days)
        )
        for b in self.repo.confirmed_bookings(ids, since=datetime.combine(first_day, time.min)):
            entry = chart.get(b.created_at.date().isoformat())
            if entry is not None:
                entry["revenue"] += float(b.total_amount or 0)
                entry["bookings"] += 1

        return {
            "revenue": revenue,
            "totalBookings": len(all_bookings),
            "averageRating": average_rating,
            "activeListings": len(activities),
            "chartData": [{"date": d, **v} for d, v in chart.items()],
        }
