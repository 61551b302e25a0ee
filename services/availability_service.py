import logging
from typing import Iterable, Optional

from errors import InternalError, InvalidArgumentError
from helper import parse_time, seating_window, windows_overlap
from models import INACTIVE_STATUSES, ReservationDB, TableDB

logger = logging.getLogger(__name__)


def is_active(reservation: ReservationDB) -> bool:
    return reservation.status not in INACTIVE_STATUSES


def reservation_window(reservation: ReservationDB) -> tuple[int, int]:
    try:
        return seating_window(parse_time(reservation.time))
    except InvalidArgumentError as e:
        logger.error("Reservation %s has malformed time %r", reservation.id, reservation.time)
        raise InternalError(f"Reservation {reservation.id} has malformed time") from e


def find_conflict(reservations: Iterable[ReservationDB], table_id: str,
                  requested: tuple[int, int]) -> Optional[ReservationDB]:
    """
    Returns the first active reservation on the table whose seating window
    overlaps the requested one, or None when the table is free.

    Cancelled and rejected reservations never block a table.
    """
    for reservation in reservations:
        if reservation.table_id != table_id or not is_active(reservation):
            continue
        if windows_overlap(requested, reservation_window(reservation)):
            return reservation
    return None


class AvailabilityEngine:
    """
    Read-only computation of the tables free for one seating.

    Reservations are matched on the exact date value the client stored
    them with. Windows that run past midnight are not carried over to the
    next date.
    """

    def __init__(self, tables, reservations):
        self.tables = tables
        self.reservations = reservations

    def find_available(self, restaurant_id: Optional[str], date: Optional[str], time: Optional[str],
                       min_capacity: Optional[int] = None) -> list[TableDB]:
        if not restaurant_id or not date or not time:
            raise InvalidArgumentError("Missing required params")

        requested = seating_window(parse_time(time))

        tables = self.tables.tables_for(restaurant_id)
        if not tables:
            return []

        reservations = self.reservations.reservations_on(restaurant_id, date)

        free = [table for table in tables if find_conflict(reservations, table.id, requested) is None]
        if min_capacity is not None:
            free = [table for table in free if table.capacity >= min_capacity]

        logger.debug("Restaurant %s on %s at %s: %d of %d tables free",
                     restaurant_id, date, time, len(free), len(tables))
        return free
