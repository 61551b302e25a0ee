from sqlalchemy import Column, String

from models.Base import Base


class RestaurantDB(Base):
    __tablename__ = "restaurants"

    id = Column(String(32), primary_key=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    owner_id = Column(String, index=True, nullable=False)
    created_at = Column(String)
