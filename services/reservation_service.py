import logging
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from database import store_errors
from errors import ConflictError, InvalidArgumentError, NotFoundError, ServiceError
from helper import parse_time, seating_window
from models import INACTIVE_STATUSES, ReservationCreate, ReservationDB, ReservationStatus, TableDB, User
from services.availability_service import find_conflict, reservation_window
from services.ownership import OwnershipVerifier

logger = logging.getLogger(__name__)

# striped locks keyed by (restaurantId, tableId, date)
_SLOT_LOCKS = [threading.Lock() for _ in range(64)]


@contextmanager
def slot_lock(restaurant_id: str, table_id: str, date: str):
    lock = _SLOT_LOCKS[hash((restaurant_id, table_id, date)) % len(_SLOT_LOCKS)]
    with lock:
        yield


class ReservationLedger:
    """
    Booking records of each restaurant.

    A reservation bound to a table is only written after re-checking the
    table's seating windows for that date, under a lock on the
    (restaurant, table, date) slot and a row lock on the table. This keeps
    two guests who saw the same free table from both booking it.
    """

    def __init__(self, db: Session, ownership: OwnershipVerifier):
        self.db = db
        self.ownership = ownership

    def get(self, reservation_id: str) -> Optional[ReservationDB]:
        with store_errors(self.db, "reservation lookup"):
            return self.db.query(ReservationDB).filter(ReservationDB.id == reservation_id).first()

    def reservations_on(self, restaurant_id: str, date: str) -> list[ReservationDB]:
        """Reservations whose stored date equals the given value exactly."""
        with store_errors(self.db, "reservation lookup"):
            return (
                self.db.query(ReservationDB)
                .filter(ReservationDB.restaurant_id == restaurant_id, ReservationDB.date == date)
                .all()
            )

    def create(self, reservation: ReservationCreate, requester: Optional[User] = None) -> ReservationDB:
        if not reservation.restaurant_id:
            raise InvalidArgumentError("Restaurant ID is required")

        db_res = ReservationDB(
            id=uuid.uuid4().hex,
            restaurant_id=reservation.restaurant_id,
            table_id=reservation.table_id,
            date=reservation.date,
            time=reservation.time,
            guests=reservation.guests,
            status=ReservationStatus.PENDING.value,
            user_id=requester.uid if requester else None,
            user_name=reservation.user_name,
            user_phone=reservation.user_phone,
            user_email=reservation.user_email,
            notes=reservation.notes,
            extra=reservation.extra_fields(),
            created_at=datetime.now(timezone.utc).isoformat(),
        )

        if not db_res.table_id:
            with store_errors(self.db, "reservation create"):
                self.db.add(db_res)
                self.db.commit()
                self.db.refresh(db_res)
            logger.info("Reservation %s created for restaurant %s", db_res.id, db_res.restaurant_id)
            return db_res

        if not db_res.date:
            raise InvalidArgumentError("Date is required when booking a table")
        requested = seating_window(parse_time(db_res.time))

        with slot_lock(db_res.restaurant_id, db_res.table_id, db_res.date):
            try:
                with store_errors(self.db, "reservation create"):
                    self._ensure_slot_free(db_res.restaurant_id, db_res.table_id, db_res.date, requested)
                    self.db.add(db_res)
                    self.db.commit()
                    self.db.refresh(db_res)
            except ServiceError:
                self.db.rollback()
                raise

        logger.info("Reservation %s created for table %s on %s at %s",
                    db_res.id, db_res.table_id, db_res.date, db_res.time)
        return db_res

    def _ensure_slot_free(self, restaurant_id: str, table_id: str, date: str,
                          requested: tuple[int, int], exclude_id: Optional[str] = None) -> None:
        # FOR UPDATE serializes bookings of the same table across processes (no-op on SQLite)
        table = (
            self.db.query(TableDB)
            .filter(TableDB.id == table_id)
            .with_for_update()
            .first()
        )
        if table is None or table.restaurant_id != restaurant_id:
            raise InvalidArgumentError("Table not found for this restaurant")

        others = [r for r in self.reservations_on(restaurant_id, date) if r.id != exclude_id]
        conflict = find_conflict(others, table_id, requested)
        if conflict is not None:
            logger.warning("Table %s on %s already booked at %s (reservation %s)",
                           table_id, date, conflict.time, conflict.id)
            raise ConflictError("Table is already booked for this time")

    def list(self, requester: User, restaurant_id: Optional[str]) -> list[ReservationDB]:
        self.ownership.require_owner(requester.uid, restaurant_id)
        with store_errors(self.db, "reservation list"):
            return (
                self.db.query(ReservationDB)
                .filter(ReservationDB.restaurant_id == restaurant_id)
                .order_by(ReservationDB.date.desc())
                .all()
            )

    def update_status(self, requester: User, reservation_id: str, new_status: Optional[str]) -> ReservationDB:
        try:
            status = ReservationStatus(new_status)
        except ValueError:
            raise InvalidArgumentError(
                f"Invalid status {new_status!r}, expected one of "
                + ", ".join(s.value for s in ReservationStatus)
            )

        db_res = self.get(reservation_id)
        if db_res is None:
            raise NotFoundError("Reservation not found")
        self.ownership.require_owner(requester.uid, db_res.restaurant_id)

        reactivated = db_res.status in INACTIVE_STATUSES and status.value not in INACTIVE_STATUSES
        if reactivated and db_res.table_id:
            requested = reservation_window(db_res)
            with slot_lock(db_res.restaurant_id, db_res.table_id, db_res.date):
                try:
                    with store_errors(self.db, "reservation status update"):
                        self._ensure_slot_free(db_res.restaurant_id, db_res.table_id, db_res.date,
                                               requested, exclude_id=db_res.id)
                        db_res.status = status.value
                        self.db.commit()
                        self.db.refresh(db_res)
                except ServiceError:
                    self.db.rollback()
                    raise
        else:
            with store_errors(self.db, "reservation status update"):
                db_res.status = status.value
                self.db.commit()
                self.db.refresh(db_res)

        logger.info("Reservation %s is now %s", reservation_id, status.value)
        return db_res
