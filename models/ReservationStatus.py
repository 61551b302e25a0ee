from enum import Enum


class ReservationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


# reservations in these states never block a table
INACTIVE_STATUSES = frozenset({ReservationStatus.CANCELLED.value, ReservationStatus.REJECTED.value})
