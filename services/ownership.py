import logging
from typing import Optional

from sqlalchemy.orm import Session

from database import store_errors
from errors import ForbiddenError, InvalidArgumentError, NotFoundError
from models import RestaurantDB

logger = logging.getLogger(__name__)


class OwnershipVerifier:
    """Answers whether a caller owns a restaurant, by comparing uid and ownerId."""

    def __init__(self, db: Session):
        self.db = db

    def get_restaurant(self, restaurant_id: str) -> Optional[RestaurantDB]:
        with store_errors(self.db, "restaurant lookup"):
            return self.db.query(RestaurantDB).filter(RestaurantDB.id == restaurant_id).first()

    def require_owner(self, uid: str, restaurant_id: Optional[str]) -> RestaurantDB:
        if not restaurant_id:
            raise InvalidArgumentError("Restaurant ID is required")

        restaurant = self.get_restaurant(restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant not found")
        if restaurant.owner_id != uid:
            logger.warning("User %s denied access to restaurant %s", uid, restaurant_id)
            raise ForbiddenError("Unauthorized access to this restaurant")
        return restaurant
