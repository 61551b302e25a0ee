from sqlalchemy import Column, Integer, String

from models.Base import Base


class TableDB(Base):
    __tablename__ = "tables"

    id = Column(String(32), primary_key=True, index=True)
    # no foreign key: tables and reservations are flat records grouped by restaurant
    restaurant_id = Column(String(32), index=True, nullable=False)
    name = Column(String)
    capacity = Column(Integer, nullable=False)
    created_at = Column(String)
