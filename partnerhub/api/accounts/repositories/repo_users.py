# partnerhub/api/accounts/repositories/repo_users.py
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel, PartnerStatus
from partnerhub.core.errors import not_found


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(UserModel.id == user_id).first()

    def get_by_external_id(self, external_id: str) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(UserModel.external_id == external_id).first()

    def get_by_email(self, email: str) -> Optional[UserModel]:
        return (
            self.db.query(UserModel)
            .filter(func.lower(UserModel.email) == email.lower())
            .first()
        )

    def get_or_404(self, user_id: int) -> UserModel:
        user = self.get_by_id(user_id)
        if not user:
            raise not_found("User not found")
        return user

    def create(self, external_id: str, email: Optional[str], name: Optional[str], is_admin: bool) -> UserModel:
        user = UserModel(external_id=external_id, email=email, name=name, is_admin=is_admin)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_profile(self, user: UserModel, email: Optional[str], name: Optional[str]) -> UserModel:
        changed = False
        if email and user.email != email:
            user.email = email
            changed = True
        if name and user.name != name:
            user.name = name
            changed = True
        if changed:
            self.db.commit()
            self.db.refresh(user)
        return user

    def set_partner_status(self, user_id: int, partner_status: PartnerStatus) -> UserModel:
        user = self.get_or_404(user_id)
        user.partner_status = partner_status
        self.db.commit()
        self.db.refresh(user)
        return user
