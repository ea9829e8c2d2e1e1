from typing import Optional

from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.shop.models.model_partner import (
    BrandModel,
    MemberRole,
    MemberStatus,
    OWNER_PERMISSIONS,
    PartnerAuditLogModel,
    PartnerMemberModel,
    ShopPartnerModel,
    ShopPartnerStatus,
)
from partnerhub.api.shop.repositories.repo_partners import ShopPartnerRepository
from partnerhub.api.shop.schemas.schema_partner import (
    PartnerApplicationIn,
    PartnerProfileUpdate,
    PartnerReviewIn,
    PartnerWithMembershipOut,
    ShopPartnerOut,
)
from partnerhub.api.shop.services.dependencies import PartnerContext
from partnerhub.core.errors import conflict
from partnerhub.utils.database_utils import now_trimmed
from partnerhub.utils.logger import logger
from partnerhub.utils.slug_utils import make_owned_slug

# action do admin -> status final do parceiro
REVIEW_STATUS_MAP = {
    "approve": ShopPartnerStatus.APPROVED,
    "reject": ShopPartnerStatus.BANNED,
    "suspend": ShopPartnerStatus.SUSPENDED,
    "ban": ShopPartnerStatus.BANNED,
}

# campos do perfil espelhados na brand
_BRAND_SYNC = {
    "display_name": "name",
    "logo_url": "logo_url",
    "description": "description",
    "cover_url": "cover_url",
}


class ShopPartnerService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ShopPartnerRepository(db)

    # ---------------- Candidatura ----------------
    def apply(self, user: UserModel, data: PartnerApplicationIn) -> ShopPartnerModel:
        """
        Cria o parceiro já aprovado, o vínculo de dono e a brand vinculada.
        """
        if self.repo.get_active_membership(user.id):
            raise conflict("User already has a partner account", code="ALREADY_PARTNER")

        now = now_trimmed()
        display_name = data.display_name or data.business_name

        partner = ShopPartnerModel(
            # slug provisório até termos o id
            slug=f"pending-{user.id}-{int(now.timestamp())}",
            business_name=data.business_name,
            display_name=display_name,
            description=data.description,
            email=str(data.email),
            phone=data.phone,
            website=data.website,
            business_type=data.business_type,
            business_registration_number=data.business_registration_number,
            tax_id=data.tax_id,
            address_line1=data.address_line1,
            city=data.city,
            country_code=data.country_code.upper(),
            status=ShopPartnerStatus.APPROVED,
            verified_at=now,
        )
        self.repo.add_partner(partner)
        partner.slug = make_owned_slug(data.business_name, partner.id)

        self.repo.add_member(
            PartnerMemberModel(
                partner_id=partner.id,
                user_id=user.id,
                role=MemberRole.OWNER,
                status=MemberStatus.ACTIVE,
                accepted_at=now,
                permissions=dict(OWNER_PERMISSIONS),
            )
        )

        brand = self.repo.add_brand(
            BrandModel(
                slug=partner.slug,
                name=display_name,
                is_active=True,
                tagline=(data.description or "")[:100] or None,
                description=data.description,
            )
        )
        partner.brand_id = brand.id

        self.repo.commit(partner)
        logger.info(f"[SHOP] Parceiro criado id={partner.id} slug={partner.slug} owner={user.id}")
        return partner

    # ---------------- Perfil ----------------
    @staticmethod
    def with_membership(ctx: PartnerContext) -> PartnerWithMembershipOut:
        base = ShopPartnerOut.model_validate(ctx.partner).model_dump()
        return PartnerWithMembershipOut(
            **base,
            role=ctx.member.role,
            permissions=ctx.member.permissions or {},
        )

    def update_profile(self, ctx: PartnerContext, data: PartnerProfileUpdate) -> ShopPartnerModel:
        partner = ctx.partner
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(partner, field, value)

        if partner.brand:
            for field, brand_field in _BRAND_SYNC.items():
                if changes.get(field):
                    setattr(partner.brand, brand_field, changes[field])

        self.repo.commit(partner)
        return partner

    def get_public(self, slug: str) -> ShopPartnerModel:
        return self.repo.get_public_by_slug(slug)

    # ---------------- Admin ----------------
    def admin_list(self, status: Optional[ShopPartnerStatus], limit: int, offset: int):
        rows, total = self.repo.list_partners(status=status, limit=limit, offset=offset)
        return {"data": rows, "total": total}

    def review(self, admin: UserModel, partner_id: int, data: PartnerReviewIn) -> ShopPartnerModel:
        partner = self.repo.get_partner(partner_id)
        previous = partner.status
        new_status = REVIEW_STATUS_MAP[data.action]

        partner.status = new_status
        partner.verified_by = admin.id
        if data.action == "approve":
            partner.verified_at = now_trimmed()
        elif data.reason:
            partner.rejection_reason = data.reason

        if data.action == "approve" and partner.brand:
            partner.brand.is_active = True

        if data.action in ("suspend", "ban"):
            if partner.brand:
                partner.brand.is_active = False
            archived = self.repo.archive_active_products(partner.id)
            logger.info(f"[SHOP] {archived} produto(s) arquivado(s) do parceiro {partner.id}")

        self.repo.add_audit_log(
            PartnerAuditLogModel(
                partner_id=partner.id,
                admin_user_id=admin.id,
                action=f"partner_{data.action}",
                previous_status=previous.value if previous else None,
                new_status=new_status.value,
                reason=data.reason,
            )
        )
        self.repo.commit(partner)
        logger.info(f"[SHOP][ADMIN] partner={partner.id} {previous.value} -> {new_status.value} por admin={admin.id}")
        return partner
