import enum

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text, Numeric, ForeignKey, Enum as SAEnum,
)
from sqlalchemy.orm import relationship

from partnerhub.config.settings import DEFAULT_CURRENCY
from partnerhub.database.db_connection import Base
from partnerhub.utils.database_utils import now_trimmed


class ProductStatus(str, enum.Enum):
    ACTIVE = "active"
    DRAFT = "draft"
    ARCHIVED = "archived"
    FLAGGED = "flagged"


class ProductType(str, enum.Enum):
    PHYSICAL = "physical"
    DIGITAL = "digital"


class ProductModel(Base):
    __tablename__ = "shop_products"

    id = Column(Integer, primary_key=True)
    partner_id = Column(Integer, ForeignKey("shop_partners.id", ondelete="CASCADE"), nullable=False, index=True)
    partner = relationship("ShopPartnerModel", back_populates="products")
    brand_id = Column(Integer, ForeignKey("shop_brands.id", ondelete="SET NULL"), nullable=True)

    slug = Column(String(200), nullable=False, unique=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(100), nullable=True)
    product_type = Column(
        SAEnum(ProductType, name="shop_product_type_enum", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ProductType.PHYSICAL,
    )
    status = Column(
        SAEnum(ProductStatus, name="shop_product_status_enum", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ProductStatus.DRAFT,
    )
    is_featured = Column(Boolean, nullable=False, default=False)
    rating_avg = Column(Numeric(3, 2), nullable=False, default=0)
    review_count = Column(Integer, nullable=False, default=0)
    review_notes = Column(Text, nullable=True)

    variants = relationship(
        "VariantModel", back_populates="product", cascade="all, delete-orphan", order_by="VariantModel.id"
    )
    images = relationship(
        "ProductImageModel", back_populates="product", cascade="all, delete-orphan", order_by="ProductImageModel.sort_order"
    )

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    @property
    def stock_total(self) -> int:
        return sum(v.stock_on_hand or 0 for v in self.variants)


class VariantModel(Base):
    __tablename__ = "shop_product_variants"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("shop_products.id", ondelete="CASCADE"), nullable=False, index=True)
    product = relationship("ProductModel", back_populates="variants")

    sku = Column(String(80), nullable=False)
    title = Column(String(200), nullable=False)
    price = Column(Numeric(18, 2), nullable=False)
    compare_at_price = Column(Numeric(18, 2), nullable=True)
    currency = Column(String(3), nullable=False, default=DEFAULT_CURRENCY)
    stock_on_hand = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    options = relationship("VariantOptionModel", back_populates="variant", cascade="all, delete-orphan")


class VariantOptionModel(Base):
    __tablename__ = "shop_variant_options"

    id = Column(Integer, primary_key=True)
    variant_id = Column(Integer, ForeignKey("shop_product_variants.id", ondelete="CASCADE"), nullable=False, index=True)
    variant = relationship("VariantModel", back_populates="options")

    name = Column(String(60), nullable=False)
    value = Column(String(120), nullable=False)


class ProductImageModel(Base):
    __tablename__ = "shop_product_images"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("shop_products.id", ondelete="CASCADE"), nullable=False, index=True)
    product = relationship("ProductModel", back_populates="images")

    url = Column(String(500), nullable=False)
    alt = Column(String(255), nullable=False, default="")
    sort_order = Column(Integer, nullable=False, default=0)
    is_primary = Column(Boolean, nullable=False, default=False)
