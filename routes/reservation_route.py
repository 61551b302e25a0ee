import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from auth import get_current_user, get_optional_user
from errors import InternalError, ServiceError
from models import ReservationCreate, ReservationStatusUpdate, User, serialize_reservation
from services import get_reservation_ledger
from services.reservation_service import ReservationLedger

logger = logging.getLogger(__name__)

reservation_router = APIRouter(
    prefix="/api/reservations",
    tags=["Reservation"]
)


@reservation_router.get("", tags=["Reservation"])
def get_reservations(
    restaurant_id: Optional[str] = Query(None, alias="restaurantId"),
    current_user: User = Depends(get_current_user),
    ledger: ReservationLedger = Depends(get_reservation_ledger),
):
    """
    Lists all reservations of a restaurant, newest date first.

    Only the restaurant's owner may read them.
    """
    try:
        reservations = ledger.list(current_user, restaurant_id)
        return {"success": True, "data": [serialize_reservation(r) for r in reservations]}
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("Get reservations error")
        raise InternalError("Internal server error") from e


@reservation_router.post("", status_code=status.HTTP_201_CREATED, tags=["Reservation"])
def create_reservation(
    reservation: ReservationCreate,
    current_user: Optional[User] = Depends(get_optional_user),
    ledger: ReservationLedger = Depends(get_reservation_ledger),
):
    """
    Requests a reservation. Open to anonymous guests; always starts as pending.

    Returns 409 when the chosen table was booked for an overlapping seating
    in the meantime.
    """
    try:
        db_res = ledger.create(reservation, current_user)
        return {"success": True, "data": serialize_reservation(db_res)}
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("Create reservation error")
        raise InternalError("Internal server error") from e


@reservation_router.put("/{id}", tags=["Reservation"])
def update_reservation_status(
    id: str,
    update: ReservationStatusUpdate,
    current_user: User = Depends(get_current_user),
    ledger: ReservationLedger = Depends(get_reservation_ledger),
):
    try:
        db_res = ledger.update_status(current_user, id, update.status)
        return {"success": True, "data": serialize_reservation(db_res)}
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("Update reservation error")
        raise InternalError("Internal server error") from e
