from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from partnerhub.api.shop.models.model_order import OrderItemModel
from partnerhub.api.shop.models.model_product import (
    ProductModel,
    VariantModel,
    ProductImageModel,
)
from partnerhub.core.errors import not_found


class ProductRepository:
    """Repository de produtos sempre escopado ao parceiro dono."""

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self, partner_id: int):
        return (
            self.db.query(ProductModel)
            .options(
                selectinload(ProductModel.variants).selectinload(VariantModel.options),
                selectinload(ProductModel.images),
            )
            .filter(ProductModel.partner_id == partner_id)
        )

    def list_products(
        self,
        partner_id: int,
        status: Optional[str] = None,
        search: Optional[str] = None,
        sort: str = "newest",
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[ProductModel], int]:
        query = self._base_query(partner_id)

        if status and status != "all":
            query = query.filter(ProductModel.status == status)

        if search:
            like = f"%{search}%"
            query = query.filter(or_(ProductModel.title.ilike(like), ProductModel.slug.ilike(like)))

        total = query.count()

        if sort == "oldest":
            query = query.order_by(ProductModel.created_at.asc(), ProductModel.id.asc())
        elif sort == "title":
            query = query.order_by(ProductModel.title.asc())
        else:
            query = query.order_by(ProductModel.created_at.desc(), ProductModel.id.desc())

        return query.offset(offset).limit(limit).all(), total

    def get_product(self, partner_id: int, product_id: int) -> ProductModel:
        product = self._base_query(partner_id).filter(ProductModel.id == product_id).first()
        if not product:
            raise not_found("Product not found")
        return product

    def slug_exists(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(ProductModel.id).filter(ProductModel.slug == slug)
        if exclude_id:
            query = query.filter(ProductModel.id != exclude_id)
        return query.first() is not None

    def add(self, obj):
        self.db.add(obj)
        self.db.flush()
        return obj

    def delete(self, obj) -> None:
        self.db.delete(obj)
        self.db.flush()

    def count_order_items(self, product_id: int) -> int:
        return self.db.query(OrderItemModel).filter(OrderItemModel.product_id == product_id).count()

    def get_variant(self, product: ProductModel, variant_id: int) -> VariantModel:
        variant = next((v for v in product.variants if v.id == variant_id), None)
        if not variant:
            raise not_found("Variant not found")
        return variant

    def get_image(self, product: ProductModel, image_id: int) -> ProductImageModel:
        image = next((i for i in product.images if i.id == image_id), None)
        if not image:
            raise not_found("Image not found")
        return image

    def commit(self, *instances) -> None:
        self.db.commit()
        for obj in instances:
            self.db.refresh(obj)
