from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RestaurantCreate(BaseModel):
    name: Optional[str] = None


class Restaurant(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    name: str
    slug: str
    owner_id: str
    created_at: Optional[str] = None
