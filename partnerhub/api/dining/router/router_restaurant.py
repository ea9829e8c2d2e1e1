from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.dining.models.model_reservation import KitchenStatus, ReservationStatus
from partnerhub.api.dining.schemas.schema_reservation import (
    DiningDashboardStats,
    KitchenStatusUpdate,
    KitchenTicketIn,
    KitchenTicketOut,
    ReservationIn,
    ReservationOut,
    ReservationStatusUpdate,
)
from partnerhub.api.dining.schemas.schema_venue import (
    MenuItemIn,
    MenuItemOut,
    MenuItemUpdate,
    TableIn,
    TableOut,
    TableUpdate,
    VenueIn,
    VenueOut,
    VenueUpdate,
)
from partnerhub.api.dining.services.service_reservations import KitchenService, ReservationService
from partnerhub.api.dining.services.service_stats import DiningStatsService
from partnerhub.api.dining.services.service_venues import VenueService
from partnerhub.core.auth_dependencies import get_current_user
from partnerhub.database.db_connection import get_db
from partnerhub.utils.logger import logger

router = APIRouter(
    prefix="/api/partner/restaurant",
    tags=["Partner - Restaurante"],
    dependencies=[Depends(get_current_user)],
)


def get_venue_service(db: Session = Depends(get_db)) -> VenueService:
    return VenueService(db)


# ---------------- Restaurantes ----------------
@router.get("/venues", response_model=List[VenueOut])
def listar_meus_restaurantes(
    current_user: UserModel = Depends(get_current_user),
    svc: VenueService = Depends(get_venue_service),
):
    return svc.list_mine(current_user)


@router.post("/register", response_model=VenueOut, status_code=status.HTTP_201_CREATED)
def registrar_restaurante(
    body: VenueIn,
    current_user: UserModel = Depends(get_current_user),
    svc: VenueService = Depends(get_venue_service),
):
    """Cadastra o restaurante (inativo e não verificado até revisão)."""
    return svc.register(current_user, body)


@router.put("/venues/{venue_id}", response_model=VenueOut)
def atualizar_restaurante(
    body: VenueUpdate,
    venue_id: int = Path(...),
    current_user: UserModel = Depends(get_current_user),
    svc: VenueService = Depends(get_venue_service),
):
    return svc.update(venue_id, current_user, body)


# ---------------- Dashboard ----------------
@router.get("/stats", response_model=DiningDashboardStats)
def estatisticas(
    venue_id: int = Query(..., description="ID do restaurante"),
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return DiningStatsService(db).dashboard(venue_id, current_user)


# ---------------- Reservas ----------------
@router.get("/reservations", response_model=List[ReservationOut])
def listar_reservas(
    venue_id: int = Query(...),
    status_filter: Optional[ReservationStatus] = Query(None, alias="status"),
    on_date: Optional[date] = Query(None, alias="date"),
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ReservationService(db).list(venue_id, current_user, status=status_filter, on_date=on_date)


@router.post("/reservations", response_model=ReservationOut, status_code=status.HTTP_201_CREATED)
def criar_reserva(
    body: ReservationIn,
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Reserva lançada pela equipe (walk-in/telefone)."""
    return ReservationService(db).create(current_user, body)


@router.put("/reservations/{reservation_id}", response_model=ReservationOut)
def atualizar_status_reserva(
    body: ReservationStatusUpdate,
    reservation_id: int = Path(...),
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ReservationService(db).update_status(reservation_id, current_user, body)


# ---------------- Cardápio ----------------
@router.get("/menu", response_model=List[MenuItemOut])
def listar_cardapio(
    venue_id: int = Query(...),
    current_user: UserModel = Depends(get_current_user),
    svc: VenueService = Depends(get_venue_service),
):
    """Inclui itens indisponíveis."""
    return svc.list_menu(venue_id, current_user)


@router.post("/menu", response_model=MenuItemOut, status_code=status.HTTP_201_CREATED)
def criar_item_cardapio(
    body: MenuItemIn,
    current_user: UserModel = Depends(get_current_user),
    svc: VenueService = Depends(get_venue_service),
):
    return svc.create_menu_item(current_user, body)


@router.put("/menu/{item_id}", response_model=MenuItemOut)
def atualizar_item_cardapio(
    body: MenuItemUpdate,
    item_id: int = Path(...),
    current_user: UserModel = Depends(get_current_user),
    svc: VenueService = Depends(get_venue_service),
):
    return svc.update_menu_item(item_id, current_user, body)


@router.delete("/menu/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_item_cardapio(
    item_id: int = Path(...),
    current_user: UserModel = Depends(get_current_user),
    svc: VenueService = Depends(get_venue_service),
):
    logger.info(f"[DINING] Deletando item de cardápio ID={item_id}")
    svc.delete_menu_item(item_id, current_user)
    return None


# ---------------- Mesas ----------------
@router.get("/tables", response_model=List[TableOut])
def listar_mesas(
    venue_id: int = Query(...),
    current_user: UserModel = Depends(get_current_user),
    svc: VenueService = Depends(get_venue_service),
):
    return svc.list_tables(venue_id, current_user)


@router.post("/tables", response_model=TableOut, status_code=status.HTTP_201_CREATED)
def criar_mesa(
    body: TableIn,
    current_user: UserModel = Depends(get_current_user),
    svc: VenueService = Depends(get_venue_service),
):
    return svc.create_table(current_user, body)


@router.put("/tables/{table_id}", response_model=TableOut)
def atualizar_mesa(
    body: TableUpdate,
    table_id: int = Path(...),
    current_user: UserModel = Depends(get_current_user),
    svc: VenueService = Depends(get_venue_service),
):
    return svc.update_table(table_id, current_user, body)


@router.delete("/tables/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_mesa(
    table_id: int = Path(...),
    current_user: UserModel = Depends(get_current_user),
    svc: VenueService = Depends(get_venue_service),
):
    svc.delete_table(table_id, current_user)
    return None


# ---------------- Cozinha (KDS) ----------------
@router.get("/kitchen", response_model=List[KitchenTicketOut])
def listar_tickets_cozinha(
    venue_id: int = Query(...),
    status_filter: Optional[KitchenStatus] = Query(None, alias="status"),
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return KitchenService(db).list(venue_id, current_user, status=status_filter)


@router.post("/kitchen", response_model=KitchenTicketOut, status_code=status.HTTP_201_CREATED)
def criar_ticket_cozinha(
    body: KitchenTicketIn,
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return KitchenService(db).create(current_user, body)


@router.patch("/kitchen/{ticket_id}", response_model=KitchenTicketOut)
def atualizar_ticket_cozinha(
    body: KitchenStatusUpdate,
    ticket_id: int = Path(...),
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """pending -> preparing -> ready -> served, um passo por vez."""
    return KitchenService(db).update_status(ticket_id, current_user, body.status)
