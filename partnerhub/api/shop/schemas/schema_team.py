from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr

from partnerhub.api.shop.models.model_partner import MemberRole, MemberStatus
from partnerhub.api.shop.schemas.schema_partner import PartnerPermissions


class TeamInviteIn(BaseModel):
    email: EmailStr
    role: MemberRole = MemberRole.STAFF
    permissions: Optional[PartnerPermissions] = None


class TeamMemberUpdate(BaseModel):
    permissions: PartnerPermissions


class PartnerMemberOut(BaseModel):
    id: int
    partner_id: int
    user_id: int
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    role: MemberRole
    permissions: PartnerPermissions
    status: MemberStatus
    invited_by: Optional[int] = None
    invited_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
