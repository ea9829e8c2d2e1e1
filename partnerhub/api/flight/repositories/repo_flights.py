from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from partnerhub.api.flight.models.model_booking import SEAT_HOLDING_STATUSES, FlightBookingModel
from partnerhub.api.flight.models.model_flight import (
    FlightModel,
    FlightPartnerModel,
    FlightRouteModel,
    PricingRuleModel,
)
from partnerhub.core.errors import not_found


class FlightRepository:
    """Companhia, voos, rotas e regras de preço, sempre no escopo do parceiro."""

    def __init__(self, db: Session):
        self.db = db

    # ---------------- Companhia ----------------
    def get_partner_by_owner(self, user_id: int) -> Optional[FlightPartnerModel]:
        return self.db.query(FlightPartnerModel).filter_by(owner_user_id=user_id).first()

    def airline_code_exists(self, code: str) -> bool:
        return self.db.query(FlightPartnerModel.id).filter(FlightPartnerModel.airline_code == code).first() is not None

    # ---------------- Voos ----------------
    def list_flights(self, partner_id: int) -> List[FlightModel]:
        return (
            self.db.query(FlightModel)
            .filter(FlightModel.partner_id == partner_id)
            .order_by(FlightModel.departure_at, FlightModel.id)
            .all()
        )

    def get_flight(self, partner_id: int, flight_id: int) -> FlightModel:
        flight = self.db.query(FlightModel).filter_by(id=flight_id, partner_id=partner_id).first()
        if not flight:
            raise not_found("Flight not found")
        return flight

    def count_bookings(self, flight_id: int) -> int:
        return self.db.query(func.count(FlightBookingModel.id)).filter(FlightBookingModel.flight_id == flight_id).scalar()

    def seats_booked(self, flight_id: int) -> int:
        """Passageiros em reservas que ocupam assento."""
        total = (
            self.db.query(func.coalesce(func.sum(FlightBookingModel.passenger_count), 0))
            .filter(
                FlightBookingModel.flight_id == flight_id,
                FlightBookingModel.status.in_(SEAT_HOLDING_STATUSES),
            )
            .scalar()
        )
        return int(total or 0)

    # ---------------- Rotas ----------------
    def list_routes(self, partner_id: int) -> List[FlightRouteModel]:
        return (
            self.db.query(FlightRouteModel)
            .filter(FlightRouteModel.partner_id == partner_id)
            .order_by(FlightRouteModel.origin, FlightRouteModel.destination, FlightRouteModel.id)
            .all()
        )

    def get_route(self, partner_id: int, route_id: int) -> FlightRouteModel:
        route = self.db.query(FlightRouteModel).filter_by(id=route_id, partner_id=partner_id).first()
        if not route:
            raise not_found("Route not found")
        return route

    # ---------------- Regras de preço ----------------
    def list_rules(self, partner_id: int) -> List[PricingRuleModel]:
        return (
            self.db.query(PricingRuleModel)
            .filter(PricingRuleModel.partner_id == partner_id)
            .order_by(PricingRuleModel.priority.desc(), PricingRuleModel.id)
            .all()
        )

    def rules_for_flight(self, flight: FlightModel) -> List[PricingRuleModel]:
        """Regras ativas do parceiro: gerais e as da rota do voo."""
        query = self.db.query(PricingRuleModel).filter(
            PricingRuleModel.partner_id == flight.partner_id,
            PricingRuleModel.is_active.is_(True),
        )
        if flight.route_id:
            query = query.filter(
                (PricingRuleModel.route_id.is_(None)) | (PricingRuleModel.route_id == flight.route_id)
            )
        else:
            query = query.filter(PricingRuleModel.route_id.is_(None))
        return query.order_by(PricingRuleModel.priority.desc(), PricingRuleModel.id).all()

    def get_rule(self, partner_id: int, rule_id: int) -> PricingRuleModel:
        rule = self.db.query(PricingRuleModel).filter_by(id=rule_id, partner_id=partner_id).first()
        if not rule:
            raise not_found("Pricing rule not found")
        return rule

    # ---------------- Escrita ----------------
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
