"""Error types raised by the flight reservation system."""
from __future__ import annotations


class BookingError(RuntimeError):
    """Base class for recoverable booking and cancellation failures."""


class FlightNotFound(BookingError):
    """Raised when no flight matches the requested flight number."""

    def __init__(self, flight_number: str):
        super().__init__(f"Flight '{flight_number}' not found.")
        self.flight_number = flight_number


class InvalidSeatClass(BookingError):
    """Raised when a seat class string does not name a known class."""

    def __init__(self, value: object):
        super().__init__(f"Invalid seat class '{value}'. Choose Economy, Business or FirstClass.")
        self.value = value


class ClassUnavailable(BookingError):
    def __init__(self, flight_number: str, seat_class):
        super().__init__(f"No available seats in {seat_class.label} class on flight {flight_number}.")
        self.flight_number = flight_number
        self.seat_class = seat_class


class SeatUnavailable(BookingError):
    def __init__(self, flight_number: str, seat_class, seat_id: str):
        super().__init__(
            f"Seat {seat_id} is not available in {seat_class.label} class on flight {flight_number}."
        )
        self.flight_number = flight_number
        self.seat_class = seat_class
        self.seat_id = seat_id


class PassengerNotFound(BookingError):
    def __init__(self, passenger_name: str):
        super().__init__(f"No reservation found for passenger: {passenger_name}")
        self.passenger_name = passenger_name


class ReservationNotFound(BookingError):
    def __init__(self, reservation_id: str):
        super().__init__(f"No active reservation with id '{reservation_id}'.")
        self.reservation_id = reservation_id


class PersistenceError(RuntimeError):
    """Raised when catalog data cannot be read or written."""
