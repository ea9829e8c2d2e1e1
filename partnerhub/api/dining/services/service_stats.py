from datetime import date, timedelta

from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.dining.repositories.repo_reservations import KitchenRepository, ReservationRepository
from partnerhub.api.dining.repositories.repo_venues import VenueRepository
from partnerhub.api.dining.schemas.schema_reservation import DiningDashboardStats
from partnerhub.api.dining.services.service_venues import ensure_owner
from partnerhub.utils.database_utils import day_bounds, percent_change, today_local


class DiningStatsService:
    """Cards do painel do restaurante: hoje vs ontem."""

    def __init__(self, db: Session):
        self.venues = VenueRepository(db)
        self.reservations = ReservationRepository(db)
        self.kitchen = KitchenRepository(db)

    def _new_customers(self, venue_id: int, day: date) -> int:
        keys = {r.guest_key for r in self.reservations.for_day(venue_id, day)}
        keys.discard("")
        return len(keys)

    def _avg_service_minutes(self, venue_id: int, day: date) -> float:
        start, end = day_bounds(day)
        tickets = self.kitchen.ready_between(venue_id, start, end)
        if not tickets:
            return 0.0
        total = sum((t.ready_at - t.created_at).total_seconds() / 60 for t in tickets)
        return round(total / len(tickets), 1)

    def dashboard(self, venue_id: int, user: UserModel) -> DiningDashboardStats:
        ensure_owner(self.venues.get_venue(venue_id), user)

        today = today_local()
        yesterday = today - timedelta(days=1)
        t_start, t_end = day_bounds(today)
        y_start, y_end = day_bounds(yesterday)

        revenue_today = self.kitchen.served_revenue(venue_id, t_start, t_end)
        revenue_yesterday = self.kitchen.served_revenue(venue_id, y_start, y_end)

        pending = self.kitchen.count_open(venue_id)
        created_today = self.kitchen.count_created(venue_id, t_start, t_end)
        created_yesterday = self.kitchen.count_created(venue_id, y_start, y_end)

        customers_today = self._new_customers(venue_id, today)
        customers_yesterday = self._new_customers(venue_id, yesterday)

        service_today = self._avg_service_minutes(venue_id, today)
        service_yesterday = self._avg_service_minutes(venue_id, yesterday)

        return DiningDashboardStats(
            todayRevenue=revenue_today,
            todayRevenueChange=percent_change(revenue_today, revenue_yesterday),
            pendingOrders=pending,
            pendingOrdersChange=percent_change(created_today, created_yesterday),
            newCustomers=customers_today,
            newCustomersChange=percent_change(customers_today, customers_yesterday),
            avgServiceTime=service_today,
            avgServiceTimeChange=percent_change(service_today, service_yesterday),
        )
