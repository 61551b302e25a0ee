import logging
import math
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from database import store_errors
from errors import ForbiddenError, InvalidArgumentError, NotFoundError
from helper import natural_sort_key
from models import TableCreate, TableDB, TableUpdate, User
from services.ownership import OwnershipVerifier

logger = logging.getLogger(__name__)


def normalize_capacity(value: Optional[float]) -> int:
    """Whole seats, at least one."""
    if value is None or not math.isfinite(value):
        raise InvalidArgumentError("Capacity must be a number")
    return max(1, int(value))


class TableDirectory:
    """
    The bookable tables of each restaurant.

    Every mutation requires the caller to own the restaurant. Deleting a
    table leaves its reservations in place with a dangling tableId.
    """

    def __init__(self, db: Session, ownership: OwnershipVerifier):
        self.db = db
        self.ownership = ownership

    def get(self, table_id: str) -> Optional[TableDB]:
        with store_errors(self.db, "table lookup"):
            return self.db.query(TableDB).filter(TableDB.id == table_id).first()

    def tables_for(self, restaurant_id: str) -> list[TableDB]:
        """All tables of a restaurant in natural name order. No ownership check."""
        with store_errors(self.db, "table list"):
            tables = self.db.query(TableDB).filter(TableDB.restaurant_id == restaurant_id).all()
        return sorted(tables, key=lambda t: natural_sort_key(t.name))

    def create(self, requester: User, table: TableCreate) -> TableDB:
        self.ownership.require_owner(requester.uid, table.restaurant_id)
        capacity = normalize_capacity(table.capacity if table.capacity is not None else table.seats)

        db_table = TableDB(
            id=uuid.uuid4().hex,
            restaurant_id=table.restaurant_id,
            name=table.name,
            capacity=capacity,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        with store_errors(self.db, "table create"):
            self.db.add(db_table)
            self.db.commit()
            self.db.refresh(db_table)

        logger.info("Table %s (%s, %d seats) created for restaurant %s",
                    db_table.id, db_table.name, db_table.capacity, db_table.restaurant_id)
        return db_table

    def list(self, requester: User, restaurant_id: Optional[str]) -> list[TableDB]:
        self.ownership.require_owner(requester.uid, restaurant_id)
        return self.tables_for(restaurant_id)

    def update(self, requester: User, table_id: str, updated_table: TableUpdate) -> TableDB:
        db_table = self.get(table_id)
        if db_table is None:
            raise NotFoundError("Table not found")

        # the id in the path could belong to another tenant
        if db_table.restaurant_id != updated_table.restaurant_id:
            logger.warning("Table %s update rejected: restaurant %s does not match %s",
                           table_id, updated_table.restaurant_id, db_table.restaurant_id)
            raise ForbiddenError("Mismatch in restaurant ID")
        self.ownership.require_owner(requester.uid, db_table.restaurant_id)

        if updated_table.name is not None:
            db_table.name = updated_table.name
        if updated_table.capacity is not None:
            db_table.capacity = normalize_capacity(updated_table.capacity)

        with store_errors(self.db, "table update"):
            self.db.commit()
            self.db.refresh(db_table)

        logger.info("Table %s updated", table_id)
        return db_table

    def delete(self, requester: User, table_id: str) -> None:
        db_table = self.get(table_id)
        if db_table is None:
            return

        self.ownership.require_owner(requester.uid, db_table.restaurant_id)
        with store_errors(self.db, "table delete"):
            self.db.delete(db_table)
            self.db.commit()

        logger.info("Table %s deleted from restaurant %s", table_id, db_table.restaurant_id)
