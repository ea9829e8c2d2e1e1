import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum as SAEnum

from partnerhub.database.db_connection import Base
from partnerhub.utils.database_utils import now_trimmed


class PartnerStatus(str, enum.Enum):
    """Status de parceiro no nível do usuário (vertical de atividades)."""
    NONE = "none"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# ----------------------
# USUÁRIO
# ----------------------
class UserModel(Base):
    """Espelho local do usuário do provedor de identidade."""
    __tablename__ = "accounts_users"

    id = Column(Integer, primary_key=True)
    external_id = Column(String(128), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=True, unique=True, index=True)
    name = Column(String(255), nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)
    partner_status = Column(
        SAEnum(PartnerStatus, name="partner_status_enum", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=PartnerStatus.NONE,
    )

    created_at = Column(DateTime, default=now_trimmed, nullable=False)
    updated_at = Column(DateTime, default=now_trimmed, onupdate=now_trimmed, nullable=False)
