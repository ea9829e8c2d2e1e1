from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.flight.models.model_flight import (
    FlightModel,
    FlightPartnerModel,
    FlightRouteModel,
    PricingRuleModel,
)
from partnerhub.api.flight.repositories.repo_flights import FlightRepository
from partnerhub.api.flight.schemas.schema_flight import (
    FlightIn,
    FlightPartnerIn,
    FlightUpdate,
    PriceQuoteOut,
    PricingRuleIn,
    PricingRuleUpdate,
    RouteIn,
    RouteUpdate,
)
from partnerhub.api.flight.services.calculations import (
    calculate_dynamic_price,
    is_rule_applicable,
    js_weekday,
)
from partnerhub.config.settings import DEFAULT_CURRENCY
from partnerhub.core.errors import conflict, validation_error
from partnerhub.utils.database_utils import today_local
from partnerhub.utils.logger import logger


def duration_minutes(departure_at: datetime, arrival_at: datetime) -> int:
    return int((arrival_at - departure_at).total_seconds() // 60)


def rule_as_dict(rule: PricingRuleModel) -> dict:
    return {
        "id": rule.id,
        "adjustment_type": rule.adjustment_type,
        "adjustment_value": rule.adjustment_value,
        "conditions": rule.conditions or {},
        "priority": rule.priority,
        "is_active": rule.is_active,
    }


class FlightPartnerService:
    def __init__(self, db: Session):
        self.repo = FlightRepository(db)

    def register(self, user: UserModel, data: FlightPartnerIn) -> FlightPartnerModel:
        if self.repo.get_partner_by_owner(user.id):
            raise conflict("User already has an airline", code="ALREADY_PARTNER")
        if self.repo.airline_code_exists(data.airline_code):
            raise conflict(f"Airline code '{data.airline_code}' is already registered")

        partner = FlightPartnerModel(
            owner_user_id=user.id,
            airline_code=data.airline_code,
            name=data.name,
            contact_email=data.contact_email or user.email,
            is_active=True,
        )
        self.repo.add(partner)
        self.repo.commit(partner)
        logger.info(f"[FLIGHT] Companhia {partner.airline_code} cadastrada por user={user.id}")
        return partner


class FlightService:
    def __init__(self, db: Session):
        self.repo = FlightRepository(db)

    def list(self, partner: FlightPartnerModel) -> List[FlightModel]:
        return self.repo.list_flights(partner.id)

    def get(self, partner: FlightPartnerModel, flight_id: int) -> FlightModel:
        return self.repo.get_flight(partner.id, flight_id)

    def create(self, partner: FlightPartnerModel, data: FlightIn) -> FlightModel:
        if data.route_id is not None:
            self.repo.get_route(partner.id, data.route_id)

        payload = data.model_dump()
        payload["currency"] = (payload.get("currency") or DEFAULT_CURRENCY).upper()
        flight = FlightModel(
            **payload,
            partner_id=partner.id,
            airline_code=partner.airline_code,
            duration_minutes=duration_minutes(data.departure_at, data.arrival_at),
        )
        self.repo.add(flight)
        self.repo.commit(flight)
        logger.info(f"[FLIGHT] Voo {flight.flight_number} criado id={flight.id} partner={partner.id}")
        return flight

    def update(self, partner: FlightPartnerModel, flight_id: int, data: FlightUpdate) -> FlightModel:
        flight = self.repo.get_flight(partner.id, flight_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("route_id") is not None:
            self.repo.get_route(partner.id, changes["route_id"])

        for field, value in changes.items():
            setattr(flight, field, value)

        if flight.arrival_at <= flight.departure_at:
            raise validation_error(
                "Arrival must be after departure",
                details=[{"field": "arrival_at", "message": "arrival_at must be after departure_at"}],
            )
        if flight.origin == flight.destination:
            raise validation_error("Origin and destination must differ")
        flight.duration_minutes = duration_minutes(flight.departure_at, flight.arrival_at)

        self.repo.commit(flight)
        return flight

    def delete(self, partner: FlightPartnerModel, flight_id: int) -> None:
        flight = self.repo.get_flight(partner.id, flight_id)
        if self.repo.count_bookings(flight.id):
            raise conflict("Flight has bookings and cannot be deleted")
        self.repo.delete(flight)
        logger.info(f"[FLIGHT] Voo id={flight_id} removido partner={partner.id}")

    # ---------------- Cotação ----------------
    def price_quote(
        self,
        partner: FlightPartnerModel,
        flight_id: int,
        quote_date: Optional[date] = None,
    ) -> PriceQuoteOut:
        """
        Preço dinâmico do voo na data da cotação (padrão: hoje).

        Antecedência conta da data da cotação até a partida; datas e dia da
        semana das regras são avaliados na data de partida.
        """
        flight = self.repo.get_flight(partner.id, flight_id)
        quote_date = quote_date or today_local()
        departure_date = flight.departure_at.date()

        seats_available = max(flight.total_seats - self.repo.seats_booked(flight.id), 0)
        context = {
            "days_before_departure": max((departure_date - quote_date).days, 0),
            "seats_available": seats_available,
            "day_of_week": js_weekday(departure_date),
            "date": departure_date,
        }

        rules = [rule_as_dict(r) for r in self.repo.rules_for_flight(flight)]
        price = calculate_dynamic_price(flight.base_price, rules, context)
        applied = [r["id"] for r in rules if is_rule_applicable(r, context)]

        return PriceQuoteOut(
            flight_id=flight.id,
            base_price=float(flight.base_price),
            price=price,
            currency=flight.currency,
            seats_available=seats_available,
            days_before_departure=context["days_before_departure"],
            applied_rules=applied,
        )


class RouteService:
    def __init__(self, db: Session):
        self.repo = FlightRepository(db)

    def list(self, partner: FlightPartnerModel) -> List[FlightRouteModel]:
        return self.repo.list_routes(partner.id)

    def get(self, partner: FlightPartnerModel, route_id: int) -> FlightRouteModel:
        return self.repo.get_route(partner.id, route_id)

    def create(self, partner: FlightPartnerModel, data: RouteIn) -> FlightRouteModel:
        route = FlightRouteModel(**data.model_dump(), partner_id=partner.id)
        self.repo.add(route)
        self.repo.commit(route)
        return route

    def update(self, partner: FlightPartnerModel, route_id: int, data: RouteUpdate) -> FlightRouteModel:
        route = self.repo.get_route(partner.id, route_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(route, field, value)
        if route.origin == route.destination:
            raise validation_error("Origin and destination must differ")
        self.repo.commit(route)
        return route

    def delete(self, partner: FlightPartnerModel, route_id: int) -> None:
        self.repo.delete(self.repo.get_route(partner.id, route_id))


class PricingRuleService:
    def __init__(self, db: Session):
        self.repo = FlightRepository(db)

    def list(self, partner: FlightPartnerModel) -> List[PricingRuleModel]:
        return self.repo.list_rules(partner.id)

    def get(self, partner: FlightPartnerModel, rule_id: int) -> PricingRuleModel:
        return self.repo.get_rule(partner.id, rule_id)

    def create(self, partner: FlightPartnerModel, data: PricingRuleIn) -> PricingRuleModel:
        if data.route_id is not None:
            self.repo.get_route(partner.id, data.route_id)

        payload = data.model_dump(exclude={"conditions"})
        rule = PricingRuleModel(
            **payload,
            partner_id=partner.id,
            conditions=data.conditions.model_dump(mode="json", exclude_none=True),
        )
        self.repo.add(rule)
        self.repo.commit(rule)
        logger.info(f"[FLIGHT] Regra de preço '{rule.name}' criada partner={partner.id}")
        return rule

    def update(self, partner: FlightPartnerModel, rule_id: int, data: PricingRuleUpdate) -> PricingRuleModel:
        rule = self.repo.get_rule(partner.id, rule_id)
        changes = data.model_dump(exclude_unset=True, exclude={"conditions"})

        if changes.get("route_id") is not None:
            self.repo.get_route(partner.id, changes["route_id"])

        for field, value in changes.items():
            setattr(rule, field, value)
        if data.conditions is not None:
            rule.conditions = data.conditions.model_dump(mode="json", exclude_none=True)

        self.repo.commit(rule)
        return rule

    def delete(self, partner: FlightPartnerModel, rule_id: int) -> None:
        self.repo.delete(self.repo.get_rule(partner.id, rule_id))
