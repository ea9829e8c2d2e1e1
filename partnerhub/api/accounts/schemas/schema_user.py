from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from partnerhub.api.accounts.models.model_user import PartnerStatus


class UserResponse(BaseModel):
    id: int
    external_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    is_admin: bool
    partner_status: PartnerStatus
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class PartnerStatusUpdate(BaseModel):
    partner_status: PartnerStatus
