import logging

from fastapi import APIRouter, Depends, status

from auth import get_current_user
from errors import InternalError, ServiceError
from models import Restaurant, RestaurantCreate, User
from services import get_restaurant_registry
from services.restaurant_service import RestaurantRegistry

logger = logging.getLogger(__name__)

restaurant_router = APIRouter(
    prefix="/api/restaurants",
    tags=["Restaurant"]
)


def _restaurant_dict(restaurant) -> dict:
    return Restaurant.model_validate(restaurant).model_dump(by_alias=True)


@restaurant_router.post("", status_code=status.HTTP_201_CREATED, tags=["Restaurant"])
def create_restaurant(
    restaurant: RestaurantCreate,
    current_user: User = Depends(get_current_user),
    registry: RestaurantRegistry = Depends(get_restaurant_registry),
):
    """Creates a restaurant owned by the caller; the slug is derived from the name."""
    try:
        db_restaurant = registry.create(current_user, restaurant.name)
        return {"success": True, "data": _restaurant_dict(db_restaurant)}
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("Create restaurant error")
        raise InternalError("Internal server error") from e


@restaurant_router.get("/mine", tags=["Restaurant"])
def get_my_restaurants(
    current_user: User = Depends(get_current_user),
    registry: RestaurantRegistry = Depends(get_restaurant_registry),
):
    try:
        restaurants = registry.owned_by(current_user)
        return {"success": True, "data": [_restaurant_dict(r) for r in restaurants]}
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("List restaurants error")
        raise InternalError("Internal server error") from e


@restaurant_router.get("/slug/{slug}", tags=["Restaurant"])
def get_restaurant_by_slug(slug: str, registry: RestaurantRegistry = Depends(get_restaurant_registry)):
    try:
        restaurant = registry.get_by_slug(slug)
        return {"success": True, "data": _restaurant_dict(restaurant)}
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("Get restaurant by slug error")
        raise InternalError("Internal server error") from e
