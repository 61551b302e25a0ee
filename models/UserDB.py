from sqlalchemy import Column, String

from models.Base import Base


class UserDB(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, index=True)
    role = Column(String, nullable=False, default="user")
