from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# set by the server, never taken from the request body
SERVER_FIELDS = {"id", "status", "createdAt", "userId"}


class ReservationCreate(BaseModel):
    """
    Booking request as sent by the storefront.

    Unknown fields (occasion, tableName, ...) are accepted and kept as-is.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    restaurant_id: Optional[str] = None
    table_id: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    guests: Optional[int] = None
    user_name: Optional[str] = None
    user_phone: Optional[str] = None
    user_email: Optional[str] = None
    notes: Optional[str] = None

    def extra_fields(self) -> dict:
        """Free-form fields, minus anything spelled like a server or model field (userId or user_id)."""
        taken = SERVER_FIELDS | {to_camel(name) for name in type(self).model_fields}
        return {k: v for k, v in (self.model_extra or {}).items() if k not in taken and to_camel(k) not in taken}


class ReservationStatusUpdate(BaseModel):
    status: Optional[str] = None


class Reservation(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    restaurant_id: str
    table_id: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    guests: Optional[int] = None
    status: str
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    user_phone: Optional[str] = None
    user_email: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None


def serialize_reservation(reservation) -> dict:
    """Flattens a stored reservation, merging the free-form fields back in."""
    data = dict(reservation.extra or {})
    data.update(Reservation.model_validate(reservation).model_dump(by_alias=True))
    return data
