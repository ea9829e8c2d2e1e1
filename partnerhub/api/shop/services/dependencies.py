from dataclasses import dataclass

from fastapi import Depends, status
from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.shop.models.model_partner import (
    MemberRole,
    PartnerMemberModel,
    ShopPartnerModel,
    ShopPartnerStatus,
)
from partnerhub.api.shop.repositories.repo_partners import ShopPartnerRepository
from partnerhub.core.auth_dependencies import get_current_user
from partnerhub.core.errors import PartnerError, forbidden
from partnerhub.database.db_connection import get_db
from partnerhub.utils.logger import logger


@dataclass
class PartnerContext:
    user: UserModel
    partner: ShopPartnerModel
    member: PartnerMemberModel

    @property
    def is_owner(self) -> bool:
        return self.member.role == MemberRole.OWNER


def get_partner_membership(
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PartnerContext:
    """Vínculo ativo do usuário com um parceiro, sem checar o status do parceiro."""
    member = ShopPartnerRepository(db).get_active_membership(current_user.id)
    if not member:
        raise PartnerError("NOT_PARTNER", "User is not a partner", status.HTTP_404_NOT_FOUND)
    return PartnerContext(user=current_user, partner=member.partner, member=member)


def get_partner_context(ctx: PartnerContext = Depends(get_partner_membership)) -> PartnerContext:
    """
    Exige parceiro aprovado.

    pending -> PARTNER_PENDING, suspended/banned -> PARTNER_SUSPENDED.
    """
    partner_status = ctx.partner.status
    if partner_status == ShopPartnerStatus.PENDING:
        raise PartnerError("PARTNER_PENDING", "Partner application is pending review", status.HTTP_403_FORBIDDEN)
    if partner_status == ShopPartnerStatus.SUSPENDED:
        raise PartnerError("PARTNER_SUSPENDED", "Partner account is suspended", status.HTTP_403_FORBIDDEN)
    if partner_status == ShopPartnerStatus.BANNED:
        raise PartnerError("PARTNER_SUSPENDED", "Partner account is banned", status.HTTP_403_FORBIDDEN)
    return ctx


def require_owner(ctx: PartnerContext = Depends(get_partner_context)) -> PartnerContext:
    if not ctx.is_owner:
        logger.warning(f"[SHOP] user_id={ctx.user.id} tentou ação exclusiva do dono (partner={ctx.partner.id})")
        raise forbidden("Only partner owner can perform this action")
    return ctx


def require_permission(permission: str):
    """Factory de dependency: exige `permissions[permission]` (dono sempre pode)."""

    def _dependency(ctx: PartnerContext = Depends(get_partner_context)) -> PartnerContext:
        if not ctx.member.can(permission):
            raise forbidden(f"Missing '{permission}' permission")
        return ctx

    return _dependency
