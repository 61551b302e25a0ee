from .Base import Base
from .ErrorCode import ErrorCode
from .ReservationStatus import INACTIVE_STATUSES, ReservationStatus
from .Restaurant import Restaurant, RestaurantCreate
from .RestaurantDB import RestaurantDB
from .Table import Table, TableCreate, TableUpdate
from .TableDB import TableDB
from .Reservation import Reservation, ReservationCreate, ReservationStatusUpdate, serialize_reservation
from .ReservationDB import ReservationDB
from .User import User
from .UserDB import UserDB
