"""Seat inventory, reservations and refunds for scheduled flights."""
from .catalog import Flight, FlightCatalog
from .exceptions import (
    BookingError,
    ClassUnavailable,
    FlightNotFound,
    InvalidSeatClass,
    PassengerNotFound,
    PersistenceError,
    ReservationNotFound,
    SeatUnavailable,
)
from .inventory import SeatInventory
from .ledger import Reservation, ReservationLedger
from .models import Passenger, SeatClass
from .refunds import refund_amount, refund_fraction
from .storage import load_catalog, save_catalog

__all__ = [
    "BookingError",
    "ClassUnavailable",
    "Flight",
    "FlightCatalog",
    "FlightNotFound",
    "InvalidSeatClass",
    "Passenger",
    "PassengerNotFound",
    "PersistenceError",
    "Reservation",
    "ReservationLedger",
    "ReservationNotFound",
    "SeatClass",
    "SeatInventory",
    "SeatUnavailable",
    "load_catalog",
    "refund_amount",
    "refund_fraction",
    "save_catalog",
]
