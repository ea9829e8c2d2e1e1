import enum

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text, Numeric, JSON, ForeignKey,
    UniqueConstraint, Enum as SAEnum,
)
from sqlalchemy.orm import relationship

from partnerhub.database.db_connection import Base
from partnerhub.utils.database_utils import now_trimmed


def _enum_values(e):
    return [m.value for m in e]


class ShopPartnerStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    SUSPENDED = "suspended"
    BANNED = "banned"


class BusinessType(str, enum.Enum):
    INDIVIDUAL = "individual"
    BUSINESS = "business"
    ENTERPRISE = "enterprise"


class MemberRole(str, enum.Enum):
    OWNER = "owner"
    STAFF = "staff"


class MemberStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    REMOVED = "removed"


OWNER_PERMISSIONS = {"products": True, "orders": True, "analytics": True}
DEFAULT_STAFF_PERMISSIONS = {"products": True, "orders": True, "analytics": False}


# ----------------------
# BRAND
# ----------------------
class BrandModel(Base):
    """Vitrine pública do parceiro na loja."""
    __tablename__ = "shop_brands"

    id = Column(Integer, primary_key=True)
    slug = Column(String(160), nullable=False, unique=True)
    name = Column(String(160), nullable=False)
    logo_url = Column(String(500), nullable=True)
    cover_url = Column(String(500), nullable=True)
    tagline = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)


# ----------------------
# PARCEIRO
# ----------------------
class ShopPartnerModel(Base):
    __tablename__ = "shop_partners"

    id = Column(Integer, primary_key=True)
    slug = Column(String(160), nullable=False, unique=True)
    business_name = Column(String(160), nullable=False)
    display_name = Column(String(160), nullable=True)
    description = Column(Text, nullable=True)
    logo_url = Column(String(500), nullable=True)
    cover_url = Column(String(500), nullable=True)
    email = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=True)
    website = Column(String(255), nullable=True)
    business_type = Column(
        SAEnum(BusinessType, name="shop_business_type_enum", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=BusinessType.INDIVIDUAL,
    )
    business_registration_number = Column(String(60), nullable=True)
    tax_id = Column(String(60), nullable=True)
    address_line1 = Column(String(255), nullable=True)
    city = Column(String(120), nullable=True)
    country_code = Column(String(2), nullable=False, default="VN")

    status = Column(
        SAEnum(ShopPartnerStatus, name="shop_partner_status_enum", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=ShopPartnerStatus.PENDING,
    )
    verified_at = Column(DateTime, nullable=True)
    verified_by = Column(Integer, ForeignKey("accounts_users.id", ondelete="SET NULL"), nullable=True)
    rejection_reason = Column(Text, nullable=True)
    commission_rate = Column(Numeric(5, 2), nullable=False, default=10)

    brand_id = Column(Integer, ForeignKey("shop_brands.id", ondelete="SET NULL"), nullable=True)
    brand = relationship("BrandModel", lazy="joined")

    members = relationship("PartnerMemberModel", back_populates="partner", cascade="all, delete-orphan")
    products = relationship("ProductModel", back_populates="partner", cascade="all, delete-orphan")

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)
    deleted_at = Column(DateTime, nullable=True)

    @property
    def product_count(self) -> int:
        return len(self.products)


# ----------------------
# MEMBROS DA EQUIPE
# ----------------------
class PartnerMemberModel(Base):
    __tablename__ = "shop_partner_members"
    __table_args__ = (
        UniqueConstraint("partner_id", "user_id", name="uq_shop_member_partner_user"),
    )

    id = Column(Integer, primary_key=True)
    partner_id = Column(Integer, ForeignKey("shop_partners.id", ondelete="CASCADE"), nullable=False, index=True)
    partner = relationship("ShopPartnerModel", back_populates="members")

    user_id = Column(Integer, ForeignKey("accounts_users.id", ondelete="CASCADE"), nullable=False, index=True)
    user = relationship("UserModel", foreign_keys=[user_id], lazy="joined")

    role = Column(
        SAEnum(MemberRole, name="shop_member_role_enum", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=MemberRole.STAFF,
    )
    permissions = Column(JSON, nullable=False, default=lambda: dict(DEFAULT_STAFF_PERMISSIONS))
    status = Column(
        SAEnum(MemberStatus, name="shop_member_status_enum", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=MemberStatus.PENDING,
    )
    invited_by = Column(Integer, ForeignKey("accounts_users.id", ondelete="SET NULL"), nullable=True)
    invited_at = Column(DateTime, nullable=True)
    accepted_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)

    @property
    def user_email(self):
        return self.user.email if self.user else None

    @property
    def user_name(self):
        return self.user.name if self.user else None

    def can(self, permission: str) -> bool:
        if self.role == MemberRole.OWNER:
            return True
        return bool((self.permissions or {}).get(permission))


# ----------------------
# AUDITORIA
# ----------------------
class PartnerAuditLogModel(Base):
    __tablename__ = "shop_partner_audit_logs"

    id = Column(Integer, primary_key=True)
    partner_id = Column(Integer, ForeignKey("shop_partners.id", ondelete="CASCADE"), nullable=False, index=True)
    admin_user_id = Column(Integer, ForeignKey("accounts_users.id", ondelete="SET NULL"), nullable=True)
    action = Column(String(20), nullable=False)
    previous_status = Column(String(20), nullable=True)
    new_status = Column(String(20), nullable=False)
    reason = Column(Text, nullable=True)

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
