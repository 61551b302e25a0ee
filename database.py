import logging
import os
from contextlib import contextmanager

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from errors import InternalError
from models import Base

load_dotenv()

logger = logging.getLogger(__name__)

TESTING = os.getenv("TESTING") == "1"
DATABASE_URL = os.getenv("DATABASE_URL")

if TESTING:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
else:
    if not DATABASE_URL:
        raise RuntimeError("DATABASE_URL is not set")
    engine = create_engine(DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def store_errors(db: Session, action: str):
    """
    Rolls back and reports a failed store call as an InternalError.

    Errors raised by the services themselves pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store failure during %s", action)
        raise InternalError(f"Store failure during {action}") from e

# create missing tables (idempotent, also in tests)
Base.metadata.create_all(bind=engine)
