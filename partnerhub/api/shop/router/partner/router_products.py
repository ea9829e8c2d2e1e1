from typing import Literal, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from partnerhub.api.shared.schemas import Page
from partnerhub.api.shop.schemas.schema_product import (
    ImageOrderIn,
    PartnerProductOut,
    ProductImageIn,
    ProductImageOut,
    ProductIn,
    ProductUpdate,
    VariantIn,
    VariantOut,
    VariantUpdate,
)
from partnerhub.api.shop.services.dependencies import PartnerContext, require_permission
from partnerhub.api.shop.services.service_products import ProductService
from partnerhub.database.db_connection import get_db
from partnerhub.utils.logger import logger

router = APIRouter(prefix="/api/shop/partners/products", tags=["Shop - Produtos"])

products_access = require_permission("products")


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


# ---------------- Produtos ----------------
@router.get("", response_model=Page[PartnerProductOut])
def listar_produtos(
    status_filter: Optional[str] = Query(None, alias="status", description="active|draft|archived|flagged|all"),
    search: Optional[str] = Query(None, description="Busca em título/slug"),
    sort: Literal["newest", "oldest", "title"] = Query("newest"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    return svc.list(
        ctx.partner.id, status=status_filter, search=search, sort=sort, limit=limit, offset=offset
    )


@router.post("", response_model=PartnerProductOut, status_code=status.HTTP_201_CREATED)
def criar_produto(
    body: ProductIn,
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    """Cria o produto como rascunho."""
    return svc.create(ctx.partner, body)


@router.get("/{product_id}", response_model=PartnerProductOut)
def obter_produto(
    product_id: int = Path(...),
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    return svc.get(ctx.partner.id, product_id)


@router.patch("/{product_id}", response_model=PartnerProductOut)
def atualizar_produto(
    body: ProductUpdate,
    product_id: int = Path(...),
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    return svc.update(ctx.partner.id, product_id, body)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_produto(
    product_id: int = Path(...),
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    logger.info(f"[SHOP] Deletando produto ID={product_id}")
    svc.delete(ctx.partner.id, product_id)
    return None


@router.post("/{product_id}/publish", response_model=PartnerProductOut)
def publicar_produto(
    product_id: int = Path(...),
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    return svc.publish(ctx.partner.id, product_id)


@router.post("/{product_id}/archive", response_model=PartnerProductOut)
def arquivar_produto(
    product_id: int = Path(...),
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    return svc.archive(ctx.partner.id, product_id)


# ---------------- Variantes ----------------
@router.post("/{product_id}/variants", response_model=VariantOut, status_code=status.HTTP_201_CREATED)
def criar_variante(
    body: VariantIn,
    product_id: int = Path(...),
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    return svc.add_variant(ctx.partner.id, product_id, body)


@router.patch("/{product_id}/variants/{variant_id}", response_model=VariantOut)
def atualizar_variante(
    body: VariantUpdate,
    product_id: int = Path(...),
    variant_id: int = Path(...),
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    return svc.update_variant(ctx.partner.id, product_id, variant_id, body)


@router.delete("/{product_id}/variants/{variant_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_variante(
    product_id: int = Path(...),
    variant_id: int = Path(...),
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    svc.delete_variant(ctx.partner.id, product_id, variant_id)
    return None


# ---------------- Imagens (rotas mais específicas primeiro) ----------------
@router.put("/{product_id}/images/order", response_model=PartnerProductOut)
def reordenar_imagens(
    body: ImageOrderIn,
    product_id: int = Path(...),
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    return svc.reorder_images(ctx.partner.id, product_id, body)


@router.post("/{product_id}/images", response_model=ProductImageOut, status_code=status.HTTP_201_CREATED)
def adicionar_imagem(
    body: ProductImageIn,
    product_id: int = Path(...),
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    return svc.add_image(ctx.partner.id, product_id, body)


@router.delete("/{product_id}/images/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
def deletar_imagem(
    product_id: int = Path(...),
    image_id: int = Path(...),
    ctx: PartnerContext = Depends(products_access),
    svc: ProductService = Depends(get_product_service),
):
    svc.delete_image(ctx.partner.id, product_id, image_id)
    return None
