from fastapi import Depends
from sqlalchemy.orm import Session

from database import get_db
from services.availability_service import AvailabilityEngine
from services.ownership import OwnershipVerifier
from services.reservation_service import ReservationLedger
from services.restaurant_service import RestaurantRegistry
from services.table_service import TableDirectory


def get_table_directory(db: Session = Depends(get_db)) -> TableDirectory:
    return TableDirectory(db, OwnershipVerifier(db))


def get_reservation_ledger(db: Session = Depends(get_db)) -> ReservationLedger:
    return ReservationLedger(db, OwnershipVerifier(db))


def get_availability_engine(
    tables: TableDirectory = Depends(get_table_directory),
    reservations: ReservationLedger = Depends(get_reservation_ledger),
) -> AvailabilityEngine:
    return AvailabilityEngine(tables, reservations)


def get_restaurant_registry(db: Session = Depends(get_db)) -> RestaurantRegistry:
    return RestaurantRegistry(db)
