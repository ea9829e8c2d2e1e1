from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.accounts.repositories.repo_users import UserRepository
from partnerhub.api.shop.models.model_partner import (
    DEFAULT_STAFF_PERMISSIONS,
    OWNER_PERMISSIONS,
    MemberRole,
    MemberStatus,
    PartnerMemberModel,
)
from partnerhub.api.shop.repositories.repo_partners import ShopPartnerRepository
from partnerhub.api.shop.schemas.schema_team import TeamInviteIn, TeamMemberUpdate
from partnerhub.api.shop.services.dependencies import PartnerContext
from partnerhub.core.errors import conflict, forbidden, not_found
from partnerhub.utils.database_utils import now_trimmed
from partnerhub.utils.logger import logger


class TeamService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ShopPartnerRepository(db)
        self.users = UserRepository(db)

    def list(self, partner_id: int):
        return self.repo.list_team(partner_id)

    def invite(self, ctx: PartnerContext, data: TeamInviteIn) -> PartnerMemberModel:
        user = self.users.get_by_email(str(data.email))
        if not user:
            raise not_found("User with this email not found")

        existing = self.repo.find_member(ctx.partner.id, user.id)
        if existing and existing.status != MemberStatus.REMOVED:
            raise conflict("User is already a team member", code="ALREADY_PARTNER")

        if data.permissions is not None:
            permissions = data.permissions.model_dump()
        elif data.role == MemberRole.OWNER:
            permissions = dict(OWNER_PERMISSIONS)
        else:
            permissions = dict(DEFAULT_STAFF_PERMISSIONS)

        now = now_trimmed()
        if existing:
            # reconvite de quem já foi removido reaproveita a linha (unique partner/user)
            member = existing
            member.role = data.role
            member.permissions = permissions
            member.status = MemberStatus.PENDING
            member.invited_by = ctx.user.id
            member.invited_at = now
            member.accepted_at = None
        else:
            member = self.repo.add_member(
                PartnerMemberModel(
                    partner_id=ctx.partner.id,
                    user_id=user.id,
                    role=data.role,
                    permissions=permissions,
                    status=MemberStatus.PENDING,
                    invited_by=ctx.user.id,
                    invited_at=now,
                )
            )

        self.repo.commit(member)
        logger.info(f"[SHOP][TEAM] Convite partner={ctx.partner.id} user={user.id} por={ctx.user.id}")
        return member

    def update(self, partner_id: int, member_id: int, data: TeamMemberUpdate) -> PartnerMemberModel:
        member = self.repo.get_member(partner_id, member_id)
        member.permissions = data.permissions.model_dump()
        self.repo.commit(member)
        return member

    def remove(self, partner_id: int, member_id: int) -> None:
        member = self.repo.get_member(partner_id, member_id)
        if member.role == MemberRole.OWNER:
            raise forbidden("Cannot remove the partner owner")
        member.status = MemberStatus.REMOVED
        self.db.commit()
        logger.info(f"[SHOP][TEAM] Membro removido id={member_id} partner={partner_id}")

    def accept(self, user: UserModel, member_id: int) -> PartnerMemberModel:
        member = self.repo.get_member_by_id(member_id)
        if not member or member.user_id != user.id or member.status != MemberStatus.PENDING:
            raise not_found("Invitation not found")

        if self.repo.get_active_membership(user.id):
            raise conflict("User already has a partner account", code="ALREADY_PARTNER")

        member.status = MemberStatus.ACTIVE
        member.accepted_at = now_trimmed()
        self.repo.commit(member)
        logger.info(f"[SHOP][TEAM] Convite aceito member={member.id} user={user.id}")
        return member
