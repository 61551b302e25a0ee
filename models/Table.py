from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TableCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    restaurant_id: Optional[str] = None
    name: Optional[str] = None
    capacity: Optional[float] = None
    # older clients send the seat count as "seats"
    seats: Optional[float] = None


class TableUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    restaurant_id: Optional[str] = None
    name: Optional[str] = None
    capacity: Optional[float] = None


class Table(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    restaurant_id: str
    name: Optional[str] = None
    capacity: int
    created_at: Optional[str] = None
