from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text, Numeric, JSON, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from partnerhub.config.settings import DEFAULT_CURRENCY
from partnerhub.database.db_connection import Base
from partnerhub.utils.database_utils import now_trimmed


# ----------------------
# RESTAURANTE
# ----------------------
class VenueModel(Base):
    __tablename__ = "dining_venues"

    id = Column(Integer, primary_key=True)
    owner_user_id = Column(Integer, ForeignKey("accounts_users.id", ondelete="SET NULL"), nullable=True, index=True)

    name = Column(String(200), nullable=False)
    slug = Column(String(220), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    address = Column(String(255), nullable=True)
    city = Column(String(120), nullable=True)
    district = Column(String(120), nullable=True)
    phone = Column(String(30), nullable=True)
    email = Column(String(255), nullable=True)
    website = Column(String(255), nullable=True)
    cuisine_type = Column(JSON, nullable=True)
    price_range = Column(String(20), nullable=True)
    capacity = Column(Integer, nullable=False, default=0)
    operating_hours = Column(JSON, nullable=True)
    amenities = Column(JSON, nullable=True)
    tags = Column(JSON, nullable=True)
    cover_image_url = Column(String(500), nullable=True)

    is_active = Column(Boolean, nullable=False, default=False)
    is_verified = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    average_rating = Column(Numeric(3, 2), nullable=False, default=0)
    review_count = Column(Integer, nullable=False, default=0)

    menu_items = relationship("MenuItemModel", back_populates="venue", cascade="all, delete-orphan")
    tables = relationship("TableModel", back_populates="venue", cascade="all, delete-orphan")

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)


# ----------------------
# CARDÁPIO
# ----------------------
class MenuItemModel(Base):
    __tablename__ = "dining_menu_items"

    id = Column(Integer, primary_key=True)
    venue_id = Column(Integer, ForeignKey("dining_venues.id", ondelete="CASCADE"), nullable=False, index=True)
    venue = relationship("VenueModel", back_populates="menu_items")

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(18, 2), nullable=False)
    original_price = Column(Numeric(18, 2), nullable=True)
    currency = Column(String(3), nullable=False, default=DEFAULT_CURRENCY)
    category = Column(String(100), nullable=True)
    dietary_tags = Column(JSON, nullable=True)
    allergens = Column(JSON, nullable=True)
    image_url = Column(String(500), nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_popular = Column(Boolean, nullable=False, default=False)
    display_order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)


# ----------------------
# MESAS
# ----------------------
class TableModel(Base):
    __tablename__ = "dining_tables"
    __table_args__ = (
        UniqueConstraint("venue_id", "table_number", name="uq_dining_table_venue_number"),
    )

    id = Column(Integer, primary_key=True)
    venue_id = Column(Integer, ForeignKey("dining_venues.id", ondelete="CASCADE"), nullable=False, index=True)
    venue = relationship("VenueModel", back_populates="tables")

    table_number = Column(String(20), nullable=False)
    name = Column(String(100), nullable=True)
    min_capacity = Column(Integer, nullable=False, default=1)
    max_capacity = Column(Integer, nullable=False, default=4)
    section = Column(String(60), nullable=True)
    floor = Column(Integer, nullable=False, default=1)
    features = Column(JSON, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    is_reservable = Column(Boolean, nullable=False, default=True)
    premium_charge = Column(Numeric(18, 2), nullable=False, default=0)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)
