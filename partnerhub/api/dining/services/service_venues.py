from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.dining.models.model_venue import MenuItemModel, TableModel, VenueModel
from partnerhub.api.dining.repositories.repo_venues import VenueRepository
from partnerhub.api.dining.schemas.schema_venue import (
    MenuItemIn,
    MenuItemUpdate,
    TableIn,
    TableUpdate,
    VenueIn,
    VenueUpdate,
)
from partnerhub.core.errors import conflict, forbidden, validation_error
from partnerhub.utils.logger import logger
from partnerhub.utils.slug_utils import make_slug, unique_slug


def ensure_owner(venue: VenueModel, user: UserModel) -> VenueModel:
    if venue.owner_user_id != user.id:
        logger.warning(f"[DINING] user_id={user.id} sem acesso ao venue {venue.id}")
        raise forbidden("You do not manage this venue")
    return venue


class VenueService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = VenueRepository(db)

    def owned_venue(self, venue_id: int, user: UserModel) -> VenueModel:
        return ensure_owner(self.repo.get_venue(venue_id), user)

    # ---------------- Restaurantes ----------------
    def list_mine(self, user: UserModel) -> List[VenueModel]:
        return self.repo.list_by_owner(user.id)

    def register(self, user: UserModel, data: VenueIn) -> VenueModel:
        slug = unique_slug(make_slug(data.name) or "venue", self.repo.slug_exists)

        venue = VenueModel(
            **data.model_dump(),
            slug=slug,
            owner_user_id=user.id,
            is_active=False,
            is_verified=False,
        )
        self.repo.add(venue)
        self.repo.commit(venue)
        logger.info(f"[DINING] Restaurante registrado id={venue.id} slug={venue.slug} owner={user.id}")
        return venue

    def update(self, venue_id: int, user: UserModel, data: VenueUpdate) -> VenueModel:
        venue = self.owned_venue(venue_id, user)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(venue, field, value)
        self.repo.commit(venue)
        return venue

    # ---------------- Cardápio ----------------
    def list_menu(self, venue_id: int, user: UserModel) -> List[MenuItemModel]:
        self.owned_venue(venue_id, user)
        return self.repo.list_menu(venue_id)

    def create_menu_item(self, user: UserModel, data: MenuItemIn) -> MenuItemModel:
        self.owned_venue(data.venue_id, user)
        item = self.repo.add(MenuItemModel(**data.model_dump()))
        self.repo.commit(item)
        return item

    def update_menu_item(self, item_id: int, user: UserModel, data: MenuItemUpdate) -> MenuItemModel:
        item = self.repo.get_menu_item(item_id)
        self.owned_venue(item.venue_id, user)

        changes = data.model_dump(exclude_unset=True)
        price = changes.get("price", item.price)
        original = changes.get("original_price", item.original_price)
        if price is not None and original is not None and Decimal(original) < Decimal(price):
            raise validation_error("original_price must be greater than or equal to price")

        for field, value in changes.items():
            setattr(item, field, value)
        self.repo.commit(item)
        return item

    def delete_menu_item(self, item_id: int, user: UserModel) -> None:
        item = self.repo.get_menu_item(item_id)
        self.owned_venue(item.venue_id, user)
        self.repo.delete(item)

    # ---------------- Mesas ----------------
    def list_tables(self, venue_id: int, user: UserModel) -> List[TableModel]:
        self.owned_venue(venue_id, user)
        return self.repo.list_tables(venue_id)

    def create_table(self, user: UserModel, data: TableIn) -> TableModel:
        self.owned_venue(data.venue_id, user)
        if self.repo.find_table_number(data.venue_id, data.table_number):
            raise conflict(f"Table '{data.table_number}' already exists in this venue")
        table = self.repo.add(TableModel(**data.model_dump()))
        self.repo.commit(table)
        return table

    def update_table(self, table_id: int, user: UserModel, data: TableUpdate) -> TableModel:
        table = self.repo.get_table(table_id)
        self.owned_venue(table.venue_id, user)

        changes = data.model_dump(exclude_unset=True)
        min_cap = changes.get("min_capacity", table.min_capacity)
        max_cap = changes.get("max_capacity", table.max_capacity)
        if min_cap > max_cap:
            raise validation_error("min_capacity cannot be greater than max_capacity")

        number = changes.get("table_number")
        if number and self.repo.find_table_number(table.venue_id, number, exclude_id=table.id):
            raise conflict(f"Table '{number}' already exists in this venue")

        for field, value in changes.items():
            setattr(table, field, value)
        self.repo.commit(table)
        return table

    def delete_table(self, table_id: int, user: UserModel) -> None:
        table = self.repo.get_table(table_id)
        self.owned_venue(table.venue_id, user)
        self.repo.delete(table)
