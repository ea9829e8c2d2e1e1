from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from partnerhub.api.shared.schemas import LocalDateTime, Page
from partnerhub.api.shop.models.model_order import OrderStatus
from partnerhub.api.shop.schemas.schema_order import OrderStatusUpdate, PartnerOrderOut
from partnerhub.api.shop.services.dependencies import PartnerContext, require_permission
from partnerhub.api.shop.services.service_orders import ShopOrderService
from partnerhub.database.db_connection import get_db

router = APIRouter(prefix="/api/shop/partners/orders", tags=["Shop - Pedidos"])

orders_access = require_permission("orders")


@router.get("", response_model=Page[PartnerOrderOut])
def listar_pedidos(
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    date_from: Optional[LocalDateTime] = Query(None, alias="from"),
    date_to: Optional[LocalDateTime] = Query(None, alias="to"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    ctx: PartnerContext = Depends(orders_access),
    db: Session = Depends(get_db),
):
    """Pedidos que contêm itens do parceiro (somente esses itens)."""
    return ShopOrderService(db).list(
        ctx.partner.id,
        status=status_filter,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
        offset=offset,
    )


@router.get("/{order_id}", response_model=PartnerOrderOut)
def obter_pedido(
    order_id: int = Path(...),
    ctx: PartnerContext = Depends(orders_access),
    db: Session = Depends(get_db),
):
    return ShopOrderService(db).get(ctx.partner.id, order_id)


@router.patch("/{order_id}/status", response_model=PartnerOrderOut)
def atualizar_status_pedido(
    body: OrderStatusUpdate,
    order_id: int = Path(...),
    ctx: PartnerContext = Depends(orders_access),
    db: Session = Depends(get_db),
):
    return ShopOrderService(db).update_status(ctx.partner.id, order_id, body.status)
