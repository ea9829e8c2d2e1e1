from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from partnerhub.api.shop.models.model_partner import ShopPartnerModel
from partnerhub.api.shop.models.model_product import (
    ProductImageModel,
    ProductModel,
    ProductStatus,
    VariantModel,
    VariantOptionModel,
)
from partnerhub.api.shop.repositories.repo_products import ProductRepository
from partnerhub.api.shop.schemas.schema_product import (
    ImageOrderIn,
    ProductImageIn,
    ProductIn,
    ProductUpdate,
    VariantIn,
    VariantUpdate,
)
from partnerhub.core.errors import PartnerError, conflict, forbidden, validation_error
from partnerhub.utils.logger import logger
from partnerhub.utils.slug_utils import make_owned_slug, unique_slug

PUBLISH_MIN_TITLE = 3
PUBLISH_MIN_DESCRIPTION = 50


def validate_variant_prices(price: Optional[Decimal], compare_at_price: Optional[Decimal]) -> None:
    if price is not None and price <= 0:
        raise validation_error("Price must be greater than 0")
    if compare_at_price is not None and price is not None and compare_at_price <= price:
        raise validation_error("Compare at price must be greater than regular price")


def publish_errors(product: ProductModel) -> list[dict]:
    """Lista de pendências que impedem a publicação (vazia = pode publicar)."""
    errors = []
    if not product.title or len(product.title) < PUBLISH_MIN_TITLE:
        errors.append({"field": "title", "message": "Title must be at least 3 characters"})
    if not product.description or len(product.description) < PUBLISH_MIN_DESCRIPTION:
        errors.append({"field": "description", "message": "Description must be at least 50 characters"})
    if not product.variants:
        errors.append({"field": "variants", "message": "At least 1 variant with price required"})
    if not product.images:
        errors.append({"field": "images", "message": "At least 1 image required"})
    if product.variants and not any((v.price or 0) > 0 for v in product.variants):
        errors.append({"field": "variants", "message": "At least 1 variant must have a price > 0"})
    return errors


class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository(db)

    def _unique_slug(self, title: str, partner_id: int, exclude_id: Optional[int] = None) -> str:
        return unique_slug(
            make_owned_slug(title, partner_id, fallback="product"),
            lambda s: self.repo.slug_exists(s, exclude_id=exclude_id),
        )

    # ---------------- Produtos ----------------
    def list(self, partner_id: int, **filters):
        rows, total = self.repo.list_products(partner_id, **filters)
        return {"data": rows, "total": total}

    def get(self, partner_id: int, product_id: int) -> ProductModel:
        return self.repo.get_product(partner_id, product_id)

    def create(self, partner: ShopPartnerModel, data: ProductIn) -> ProductModel:
        product = ProductModel(
            partner_id=partner.id,
            brand_id=partner.brand_id,
            slug=self._unique_slug(data.title, partner.id),
            title=data.title,
            description=data.description or "",
            category=data.category,
            product_type=data.product_type,
            status=ProductStatus.DRAFT,
        )
        self.repo.add(product)
        self.repo.commit(product)
        logger.info(f"[SHOP] Produto criado id={product.id} partner={partner.id}")
        return product

    def update(self, partner_id: int, product_id: int, data: ProductUpdate) -> ProductModel:
        product = self.repo.get_product(partner_id, product_id)
        if product.status == ProductStatus.FLAGGED:
            raise forbidden("Cannot edit a flagged product")

        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(product, field, value)
        if changes.get("title"):
            product.slug = self._unique_slug(changes["title"], partner_id, exclude_id=product.id)

        self.repo.commit(product)
        return product

    def publish(self, partner_id: int, product_id: int) -> ProductModel:
        product = self.repo.get_product(partner_id, product_id)
        if product.status not in (ProductStatus.DRAFT, ProductStatus.ARCHIVED):
            raise validation_error(f"Cannot publish product with status '{product.status.value}'")

        errors = publish_errors(product)
        if errors:
            raise validation_error("Product cannot be published", details=errors)

        product.status = ProductStatus.ACTIVE
        self.repo.commit(product)
        logger.info(f"[SHOP] Produto publicado id={product.id}")
        return product

    def archive(self, partner_id: int, product_id: int) -> ProductModel:
        product = self.repo.get_product(partner_id, product_id)
        product.status = ProductStatus.ARCHIVED
        self.repo.commit(product)
        return product

    def delete(self, partner_id: int, product_id: int) -> None:
        product = self.repo.get_product(partner_id, product_id)
        if self.repo.count_order_items(product.id) > 0:
            raise conflict("Cannot delete product with existing orders", code="HAS_ORDERS")
        self.repo.delete(product)
        self.db.commit()
        logger.info(f"[SHOP] Produto removido id={product_id} partner={partner_id}")

    # ---------------- Variantes ----------------
    def add_variant(self, partner_id: int, product_id: int, data: VariantIn) -> VariantModel:
        product = self.repo.get_product(partner_id, product_id)
        validate_variant_prices(data.price, data.compare_at_price)

        variant = VariantModel(
            product_id=product.id,
            sku=data.sku,
            title=data.title,
            price=data.price,
            compare_at_price=data.compare_at_price,
            stock_on_hand=data.stock_on_hand,
            is_active=True,
            options=[VariantOptionModel(name=o.name, value=o.value) for o in data.options],
        )
        self.repo.add(variant)
        self.repo.commit(variant)
        return variant

    def update_variant(self, partner_id: int, product_id: int, variant_id: int, data: VariantUpdate) -> VariantModel:
        product = self.repo.get_product(partner_id, product_id)
        variant = self.repo.get_variant(product, variant_id)

        changes = data.model_dump(exclude_unset=True)
        price = changes.get("price", variant.price)
        compare_at = changes.get("compare_at_price", variant.compare_at_price)
        if "price" in changes or "compare_at_price" in changes:
            validate_variant_prices(price, compare_at)

        for field, value in changes.items():
            setattr(variant, field, value)
        self.repo.commit(variant)
        return variant

    def delete_variant(self, partner_id: int, product_id: int, variant_id: int) -> None:
        product = self.repo.get_product(partner_id, product_id)
        variant = self.repo.get_variant(product, variant_id)
        product.variants.remove(variant)
        self.db.commit()

    # ---------------- Imagens ----------------
    def add_image(self, partner_id: int, product_id: int, data: ProductImageIn) -> ProductImageModel:
        product = self.repo.get_product(partner_id, product_id)
        next_order = max((i.sort_order for i in product.images), default=-1) + 1

        image = ProductImageModel(
            product_id=product.id,
            url=data.url,
            alt=data.alt or "",
            sort_order=next_order,
            is_primary=not product.images,
        )
        self.repo.add(image)
        self.repo.commit(image)
        return image

    def delete_image(self, partner_id: int, product_id: int, image_id: int) -> None:
        product = self.repo.get_product(partner_id, product_id)
        image = self.repo.get_image(product, image_id)
        was_primary = image.is_primary
        product.images.remove(image)
        # promove a próxima imagem a principal
        if was_primary and product.images:
            product.images[0].is_primary = True
        self.db.commit()

    def reorder_images(self, partner_id: int, product_id: int, data: ImageOrderIn) -> ProductModel:
        product = self.repo.get_product(partner_id, product_id)
        by_id = {i.id: i for i in product.images}

        unknown = [i for i in data.image_ids if i not in by_id]
        if unknown:
            raise PartnerError(
                "VALIDATION_ERROR",
                "Some images do not belong to this product",
                details=[{"field": "image_ids", "message": f"Unknown image ids: {unknown}"}],
            )

        for index, image_id in enumerate(data.image_ids):
            by_id[image_id].sort_order = index
            by_id[image_id].is_primary = index == 0
        self.db.commit()
        self.db.refresh(product)
        return product
