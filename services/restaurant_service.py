import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import store_errors
from errors import ConflictError, InvalidArgumentError, NotFoundError
from helper import slugify
from models import RestaurantDB, User

logger = logging.getLogger(__name__)


class RestaurantRegistry:
    """Tenants: creation by an owner and lookup by URL slug."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, owner: User, name: Optional[str]) -> RestaurantDB:
        if not name or not name.strip():
            raise InvalidArgumentError("Restaurant name is required")

        with store_errors(self.db, "restaurant create"):
            slug = self._unique_slug(slugify(name))
            restaurant = RestaurantDB(
                id=uuid.uuid4().hex,
                name=name.strip(),
                slug=slug,
                owner_id=owner.uid,
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            self.db.add(restaurant)
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                raise ConflictError(f"Slug {slug!r} was taken concurrently") from e
            self.db.refresh(restaurant)

        logger.info("Restaurant %s (%s) created by %s", restaurant.id, slug, owner.uid)
        return restaurant

    def _unique_slug(self, base: str) -> str:
        slug = base
        counter = 1
        while self.db.query(RestaurantDB.id).filter(RestaurantDB.slug == slug).first() is not None:
            slug = f"{base}-{counter}"
            counter += 1
        return slug

    def owned_by(self, owner: User) -> list[RestaurantDB]:
        with store_errors(self.db, "restaurant list"):
            return (
                self.db.query(RestaurantDB)
                .filter(RestaurantDB.owner_id == owner.uid)
                .order_by(RestaurantDB.created_at.asc())
                .all()
            )

    def get_by_slug(self, slug: str) -> RestaurantDB:
        with store_errors(self.db, "restaurant lookup"):
            restaurant = self.db.query(RestaurantDB).filter(RestaurantDB.slug == slug).first()
        if restaurant is None:
            raise NotFoundError("Restaurant not found")
        return restaurant
