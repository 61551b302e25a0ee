import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from auth import get_current_user
from errors import InternalError, ServiceError
from models import Table, TableCreate, TableUpdate, User
from services import get_availability_engine, get_table_directory
from services.availability_service import AvailabilityEngine
from services.table_service import TableDirectory

logger = logging.getLogger(__name__)

table_router = APIRouter(
    prefix="/api/tables",
    tags=["Table"]
)


def _table_dict(table) -> dict:
    return Table.model_validate(table).model_dump(by_alias=True)


@table_router.get("/available", tags=["Table"])
def get_available_tables(
    restaurant_id: Optional[str] = Query(None, alias="restaurantId"),
    date: Optional[str] = Query(None),
    time: Optional[str] = Query(None),
    min_capacity: Optional[int] = Query(None, alias="minCapacity"),
    engine: AvailabilityEngine = Depends(get_availability_engine),
):
    """
    Lists the tables free for a 3-hour seating starting at the given time.

    Public, so guests can check before signing in. ``date`` must be the
    exact value reservations were stored with; ``time`` looks like "7:00 PM".
    An empty list means nothing fits, not an error.
    """
    try:
        tables = engine.find_available(restaurant_id, date, time, min_capacity)
        return {"success": True, "data": [_table_dict(t) for t in tables]}
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("Availability check error")
        raise InternalError("Internal server error") from e


@table_router.post("", status_code=status.HTTP_201_CREATED, tags=["Table"])
def create_table(
    table: TableCreate,
    current_user: User = Depends(get_current_user),
    directory: TableDirectory = Depends(get_table_directory),
):
    try:
        db_table = directory.create(current_user, table)
        return {"success": True, "data": _table_dict(db_table)}
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("Create table error")
        raise InternalError("Internal server error") from e


@table_router.get("", tags=["Table"])
def get_tables(
    restaurant_id: Optional[str] = Query(None, alias="restaurantId"),
    current_user: User = Depends(get_current_user),
    directory: TableDirectory = Depends(get_table_directory),
):
    try:
        tables = directory.list(current_user, restaurant_id)
        return {"success": True, "data": [_table_dict(t) for t in tables]}
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("List tables error")
        raise InternalError("Internal server error") from e


@table_router.put("/{id}", tags=["Table"])
def update_table(
    id: str,
    updated_table: TableUpdate,
    current_user: User = Depends(get_current_user),
    directory: TableDirectory = Depends(get_table_directory),
):
    try:
        db_table = directory.update(current_user, id, updated_table)
        return {"success": True, "data": _table_dict(db_table)}
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("Update table error")
        raise InternalError("Internal server error") from e


@table_router.delete("/{id}", tags=["Table"])
def delete_table(
    id: str,
    current_user: User = Depends(get_current_user),
    directory: TableDirectory = Depends(get_table_directory),
):
    try:
        directory.delete(current_user, id)
        return {"success": True}
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("Delete table error")
        raise InternalError("Internal server error") from e
