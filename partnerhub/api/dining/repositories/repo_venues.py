from typing import List, Optional

from sqlalchemy.orm import Session

from partnerhub.api.dining.models.model_venue import MenuItemModel, TableModel, VenueModel
from partnerhub.core.errors import not_found


class VenueRepository:
    """Restaurantes, cardápio e mesas."""

    def __init__(self, db: Session):
        self.db = db

    # ---------------- Restaurantes ----------------
    def list_by_owner(self, user_id: int) -> List[VenueModel]:
        return (
            self.db.query(VenueModel)
            .filter(VenueModel.owner_user_id == user_id)
            .order_by(VenueModel.created_at.desc(), VenueModel.id.desc())
            .all()
        )

    def get_venue(self, venue_id: int) -> VenueModel:
        venue = self.db.query(VenueModel).filter_by(id=venue_id).first()
        if not venue:
            raise not_found("Venue not found")
        return venue

    def slug_exists(self, slug: str) -> bool:
        return self.db.query(VenueModel.id).filter(VenueModel.slug == slug).first() is not None

    # ---------------- Cardápio ----------------
    def list_menu(self, venue_id: int) -> List[MenuItemModel]:
        return (
            self.db.query(MenuItemModel)
            .filter(MenuItemModel.venue_id == venue_id)
            .order_by(MenuItemModel.display_order, MenuItemModel.id)
            .all()
        )

    def get_menu_item(self, item_id: int) -> MenuItemModel:
        item = self.db.query(MenuItemModel).filter_by(id=item_id).first()
        if not item:
            raise not_found("Menu item not found")
        return item

    # ---------------- Mesas ----------------
    def list_tables(self, venue_id: int) -> List[TableModel]:
        return (
            self.db.query(TableModel)
            .filter(TableModel.venue_id == venue_id)
            .order_by(TableModel.floor, TableModel.table_number)
            .all()
        )

    def get_table(self, table_id: int) -> TableModel:
        table = self.db.query(TableModel).filter_by(id=table_id).first()
        if not table:
            raise not_found("Table not found")
        return table

    def find_table_number(self, venue_id: int, table_number: str, exclude_id: Optional[int] = None) -> Optional[TableModel]:
        query = self.db.query(TableModel).filter(
            TableModel.venue_id == venue_id, TableModel.table_number == table_number
        )
        if exclude_id:
            query = query.filter(TableModel.id != exclude_id)
        return query.first()

    def add(self, obj):
        self.db.add(obj)
        self.db.flush()
        return obj

    def delete(self, obj) -> None:
        self.db.delete(obj)
        self.db.commit()

    def commit(self, *instances) -> None:
        self.db.commit()
        for obj in instances:
            self.db.refresh(obj)
