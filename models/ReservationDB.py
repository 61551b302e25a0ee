from sqlalchemy import JSON, Column, Integer, String, Text

from models.Base import Base


class ReservationDB(Base):
    __tablename__ = "reservations"

    id = Column(String(32), primary_key=True, index=True)
    restaurant_id = Column(String(32), index=True, nullable=False)
    # dangling once the table is deleted
    table_id = Column(String(32), index=True, nullable=True)
    date = Column(String, index=True)
    time = Column(String)
    guests = Column(Integer)
    status = Column(String, nullable=False, default="pending")
    user_id = Column(String, nullable=True)
    user_name = Column(String)
    user_phone = Column(String)
    user_email = Column(String)
    notes = Column(Text)
    extra = Column(JSON)
    created_at = Column(String)
