from typing import Optional

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """Identity of a verified caller."""
    uid: str
    email: Optional[str] = None
    role: str = "user"

    model_config = ConfigDict(from_attributes=True)
