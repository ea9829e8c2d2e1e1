from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from partnerhub.api.shop.models.model_partner import (
    BrandModel,
    ShopPartnerModel,
    PartnerMemberModel,
    PartnerAuditLogModel,
    MemberStatus,
    ShopPartnerStatus,
)
from partnerhub.api.shop.models.model_product import ProductModel, ProductStatus
from partnerhub.core.errors import not_found


class ShopPartnerRepository:
    def __init__(self, db: Session):
        self.db = db

    # Parceiros
    def add_partner(self, partner: ShopPartnerModel) -> ShopPartnerModel:
        self.db.add(partner)
        self.db.flush()
        return partner

    def get_partner(self, partner_id: int) -> ShopPartnerModel:
        p = (
            self.db.query(ShopPartnerModel)
            .filter(ShopPartnerModel.id == partner_id, ShopPartnerModel.deleted_at.is_(None))
            .first()
        )
        if not p:
            raise not_found("Partner not found")
        return p

    def get_public_by_slug(self, slug: str) -> ShopPartnerModel:
        p = (
            self.db.query(ShopPartnerModel)
            .filter(
                ShopPartnerModel.slug == slug,
                ShopPartnerModel.status == ShopPartnerStatus.APPROVED,
                ShopPartnerModel.deleted_at.is_(None),
            )
            .first()
        )
        if not p:
            raise not_found("Partner not found")
        return p

    def list_partners(
        self, status: Optional[ShopPartnerStatus] = None, limit: int = 20, offset: int = 0
    ) -> Tuple[List[ShopPartnerModel], int]:
        query = self.db.query(ShopPartnerModel).filter(ShopPartnerModel.deleted_at.is_(None))
        if status:
            query = query.filter(ShopPartnerModel.status == status)
        total = query.count()
        rows = (
            query.order_by(ShopPartnerModel.created_at.desc(), ShopPartnerModel.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total

    def archive_active_products(self, partner_id: int) -> int:
        return (
            self.db.query(ProductModel)
            .filter(ProductModel.partner_id == partner_id, ProductModel.status == ProductStatus.ACTIVE)
            .update({ProductModel.status: ProductStatus.ARCHIVED}, synchronize_session="fetch")
        )

    # Brands
    def add_brand(self, brand: BrandModel) -> BrandModel:
        self.db.add(brand)
        self.db.flush()
        return brand

    # Membros
    def get_active_membership(self, user_id: int) -> Optional[PartnerMemberModel]:
        return (
            self.db.query(PartnerMemberModel)
            .options(joinedload(PartnerMemberModel.partner))
            .join(ShopPartnerModel, ShopPartnerModel.id == PartnerMemberModel.partner_id)
            .filter(
                PartnerMemberModel.user_id == user_id,
                PartnerMemberModel.status == MemberStatus.ACTIVE,
                ShopPartnerModel.deleted_at.is_(None),
            )
            .first()
        )

    def add_member(self, member: PartnerMemberModel) -> PartnerMemberModel:
        self.db.add(member)
        self.db.flush()
        return member

    def find_member(self, partner_id: int, user_id: int) -> Optional[PartnerMemberModel]:
        return (
            self.db.query(PartnerMemberModel)
            .filter_by(partner_id=partner_id, user_id=user_id)
            .first()
        )

    def get_member(self, partner_id: int, member_id: int) -> PartnerMemberModel:
        m = (
            self.db.query(PartnerMemberModel)
            .filter(
                PartnerMemberModel.id == member_id,
                PartnerMemberModel.partner_id == partner_id,
                PartnerMemberModel.status != MemberStatus.REMOVED,
            )
            .first()
        )
        if not m:
            raise not_found("Team member not found")
        return m

    def get_member_by_id(self, member_id: int) -> Optional[PartnerMemberModel]:
        return self.db.query(PartnerMemberModel).filter_by(id=member_id).first()

    def list_team(self, partner_id: int) -> List[PartnerMemberModel]:
        return (
            self.db.query(PartnerMemberModel)
            .filter(
                PartnerMemberModel.partner_id == partner_id,
                PartnerMemberModel.status != MemberStatus.REMOVED,
            )
            .order_by(PartnerMemberModel.id)
            .all()
        )

    # Auditoria
    def add_audit_log(self, log: PartnerAuditLogModel) -> None:
        self.db.add(log)

    def list_audit_logs(self, partner_id: int) -> List[PartnerAuditLogModel]:
        return (
            self.db.query(PartnerAuditLogModel)
            .filter_by(partner_id=partner_id)
            .order_by(PartnerAuditLogModel.id)
            .all()
        )

    def commit(self, *instances) -> None:
        self.db.commit()
        for obj in instances:
            self.db.refresh(obj)
