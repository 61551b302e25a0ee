import os
import uuid
from datetime import datetime, timezone

import pytest

# must be set before the app and database modules are imported
os.environ["TESTING"] = "1"
os.environ["DATABASE_URL"] = "sqlite://"

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app import app
from database import SessionLocal
from models import Base, ReservationDB, RestaurantDB, TableDB, UserDB

DATE = "2024-06-01T00:00:00.000Z"
OWNER = "owner-uid"
STRANGER = "stranger-uid"


@pytest.fixture(autouse=True)
def setup_db():
    db = SessionLocal()
    Base.metadata.drop_all(bind=db.bind)
    Base.metadata.create_all(bind=db.bind)
    yield
    db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


def auth_headers(uid=OWNER, email=None):
    token = app.state.token_verifier.create_access_token(uid, email=email)
    return {"Authorization": f"Bearer {token}"}


def create_test_user(db: Session, uid=OWNER, email="owner@mail.com", role="user"):
    user = UserDB(id=uid, email=email, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_test_restaurant(db: Session, name="Trattoria", owner_id=OWNER, slug=None):
    restaurant = RestaurantDB(
        id=uuid.uuid4().hex,
        name=name,
        slug=slug or uuid.uuid4().hex[:8],
        owner_id=owner_id,
        created_at=datetime.now(timezone.utc).isoformat(),
    )
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def create_test_table(db: Session, restaurant_id, name="Table 1", capacity=4):
    table = TableDB(
        id=uuid.uuid4().hex,
        restaurant_id=restaurant_id,
        name=name,
        capacity=capacity,
        created_at=datetime.now(timezone.utc).isoformat(),
    )
    db.add(table)
    db.commit()
    db.refresh(table)
    return table


def create_test_reservation(db: Session, restaurant_id, table_id=None, time="7:00 PM", date=DATE,
                            status="confirmed", guests=2, user_name="John Doe"):
    reservation = ReservationDB(
        id=uuid.uuid4().hex,
        restaurant_id=restaurant_id,
        table_id=table_id,
        date=date,
        time=time,
        guests=guests,
        status=status,
        user_name=user_name,
        extra={},
        created_at=datetime.now(timezone.utc).isoformat(),
    )
    db.add(reservation)
    db.commit()
    db.refresh(reservation)
    return reservation
