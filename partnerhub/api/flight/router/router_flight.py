from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.flight.models.model_booking import BookingStatus
from partnerhub.api.flight.models.model_flight import FlightPartnerModel
from partnerhub.api.flight.schemas.schema_analytics import CapacityOverviewOut, FlightDashboardOut
from partnerhub.api.flight.schemas.schema_booking import BookingDetailOut, BookingOut, BookingStatusUpdate
from partnerhub.api.flight.schemas.schema_flight import (
    FlightIn,
    FlightOut,
    FlightPartnerIn,
    FlightPartnerOut,
    FlightUpdate,
    PriceQuoteOut,
    PricingRuleIn,
    PricingRuleOut,
    PricingRuleUpdate,
    RouteIn,
    RouteOut,
    RouteUpdate,
)
from partnerhub.api.flight.services.dependencies import get_flight_partner
from partnerhub.api.flight.services.service_analytics import FlightAnalyticsService
from partnerhub.api.flight.services.service_bookings import BookingService
from partnerhub.api.flight.services.service_flights import (
    FlightPartnerService,
    FlightService,
    PricingRuleService,
    RouteService,
)
from partnerhub.api.shared.schemas import Page
from partnerhub.core.auth_dependencies import get_current_user
from partnerhub.database.db_connection import get_db

router = APIRouter(
    prefix="/api/partner/flight",
    tags=["Partner - Companhia Aérea"],
    dependencies=[Depends(get_current_user)],
)


def get_flight_service(db: Session = Depends(get_db)) -> FlightService:
    return FlightService(db)


def get_route_service(db: Session = Depends(get_db)) -> RouteService:
    return RouteService(db)


def get_rule_service(db: Session = Depends(get_db)) -> PricingRuleService:
    return PricingRuleService(db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


# ---------------- Companhia ----------------
@router.post("/partner", response_model=FlightPartnerOut, status_code=status.HTTP_201_CREATED)
def cadastrar_companhia(
    body: FlightPartnerIn,
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FlightPartnerService(db).register(current_user, body)


@router.get("/partner", response_model=FlightPartnerOut)
def minha_companhia(partner: FlightPartnerModel = Depends(get_flight_partner)):
    return partner


# ---------------- Voos ----------------
@router.get("/flights", response_model=List[FlightOut])
def listar_voos(
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: FlightService = Depends(get_flight_service),
):
    return svc.list(partner)


@router.post("/flights", response_model=FlightOut, status_code=status.HTTP_201_CREATED)
def criar_voo(
    body: FlightIn,
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: FlightService = Depends(get_flight_service),
):
    return svc.create(partner, body)


@router.get("/flights/{flight_id}", response_model=FlightOut)
def obter_voo(
    flight_id: int = Path(...),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: FlightService = Depends(get_flight_service),
):
    return svc.get(partner, flight_id)


@router.patch("/flights/{flight_id}", response_model=FlightOut)
def atualizar_voo(
    body: FlightUpdate,
    flight_id: int = Path(...),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: FlightService = Depends(get_flight_service),
):
    return svc.update(partner, flight_id, body)


@router.delete("/flights/{flight_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_voo(
    flight_id: int = Path(...),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: FlightService = Depends(get_flight_service),
):
    svc.delete(partner, flight_id)
    return None


@router.get("/flights/{flight_id}/price-quote", response_model=PriceQuoteOut)
def cotar_preco(
    flight_id: int = Path(...),
    quote_date: Optional[date] = Query(None, alias="date", description="Data da cotação (padrão: hoje)"),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: FlightService = Depends(get_flight_service),
):
    return svc.price_quote(partner, flight_id, quote_date)


# ---------------- Rotas ----------------
@router.get("/routes", response_model=List[RouteOut])
def listar_rotas(
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: RouteService = Depends(get_route_service),
):
    return svc.list(partner)


@router.post("/routes", response_model=RouteOut, status_code=status.HTTP_201_CREATED)
def criar_rota(
    body: RouteIn,
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: RouteService = Depends(get_route_service),
):
    return svc.create(partner, body)


@router.get("/routes/{route_id}", response_model=RouteOut)
def obter_rota(
    route_id: int = Path(...),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: RouteService = Depends(get_route_service),
):
    return svc.get(partner, route_id)


@router.patch("/routes/{route_id}", response_model=RouteOut)
def atualizar_rota(
    body: RouteUpdate,
    route_id: int = Path(...),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: RouteService = Depends(get_route_service),
):
    return svc.update(partner, route_id, body)


@router.delete("/routes/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_rota(
    route_id: int = Path(...),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: RouteService = Depends(get_route_service),
):
    svc.delete(partner, route_id)
    return None


# ---------------- Regras de preço ----------------
@router.get("/pricing-rules", response_model=List[PricingRuleOut])
def listar_regras(
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: PricingRuleService = Depends(get_rule_service),
):
    return svc.list(partner)


@router.post("/pricing-rules", response_model=PricingRuleOut, status_code=status.HTTP_201_CREATED)
def criar_regra(
    body: PricingRuleIn,
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: PricingRuleService = Depends(get_rule_service),
):
    return svc.create(partner, body)


@router.get("/pricing-rules/{rule_id}", response_model=PricingRuleOut)
def obter_regra(
    rule_id: int = Path(...),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: PricingRuleService = Depends(get_rule_service),
):
    return svc.get(partner, rule_id)


@router.patch("/pricing-rules/{rule_id}", response_model=PricingRuleOut)
def atualizar_regra(
    body: PricingRuleUpdate,
    rule_id: int = Path(...),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: PricingRuleService = Depends(get_rule_service),
):
    return svc.update(partner, rule_id, body)


@router.delete("/pricing-rules/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_regra(
    rule_id: int = Path(...),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: PricingRuleService = Depends(get_rule_service),
):
    svc.delete(partner, rule_id)
    return None


# ---------------- Reservas ----------------
@router.get("/bookings", response_model=Page[BookingOut])
def listar_reservas(
    flight_id: Optional[int] = Query(None),
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    passenger_name: Optional[str] = Query(None),
    booking_reference: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: BookingService = Depends(get_booking_service),
):
    return svc.list(
        partner,
        flight_id=flight_id,
        status=status_filter,
        passenger_name=passenger_name,
        booking_reference=booking_reference,
        limit=limit,
        offset=offset,
    )


@router.get("/bookings/{booking_id}", response_model=BookingDetailOut)
def obter_reserva(
    booking_id: int = Path(...),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: BookingService = Depends(get_booking_service),
):
    return svc.get(partner, booking_id)


@router.patch("/bookings/{booking_id}/status", response_model=BookingOut)
def atualizar_status_reserva(
    body: BookingStatusUpdate,
    booking_id: int = Path(...),
    current_user: UserModel = Depends(get_current_user),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    svc: BookingService = Depends(get_booking_service),
):
    return svc.update_status(partner, booking_id, current_user, body)


# ---------------- Analytics ----------------
@router.get("/analytics/dashboard", response_model=FlightDashboardOut)
def dashboard(
    period: Optional[str] = Query("last_30_days"),
    partner: FlightPartnerModel = Depends(get_flight_partner),
    db: Session = Depends(get_db),
):
    return FlightAnalyticsService(db).dashboard(partner, period)


@router.get("/analytics/capacity", response_model=CapacityOverviewOut)
def capacidade(
    partner: FlightPartnerModel = Depends(get_flight_partner),
    db: Session = Depends(get_db),
):
    return FlightAnalyticsService(db).capacity(partner)
