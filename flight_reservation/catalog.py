"""Flights and the catalog used to search, book and cancel."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterator, List, Optional, Union

from .exceptions import (
    ClassUnavailable,
    FlightNotFound,
    ReservationNotFound,
    SeatUnavailable,
)
from .inventory import SeatInventory
from .ledger import Reservation, ReservationLedger, by_passenger_name, by_reservation_id
from .models import Passenger, SeatClass

logger = logging.getLogger(__name__)


@dataclass
class Flight:
    flight_number: str
    origin: str
    destination: str
    departure_time: datetime
    ticket_price: float
    seats: Dict[SeatClass, SeatInventory]
    ledger: ReservationLedger = field(default_factory=ReservationLedger)

    @classmethod
    def create(
        cls,
        flight_number: str,
        origin: str,
        destination: str,
        departure_time: datetime,
        *,
        economy_seats: int,
        business_seats: int,
        first_class_seats: int,
        ticket_price: float,
    ) -> "Flight":
        """Build a flight with fresh pools numbered from 1 in every class."""

        return cls(
            flight_number=flight_number,
            origin=origin,
            destination=destination,
            departure_time=departure_time,
            ticket_price=ticket_price,
            seats={
                SeatClass.ECONOMY: SeatInventory(economy_seats),
                SeatClass.BUSINESS: SeatInventory(business_seats),
                SeatClass.FIRST_CLASS: SeatInventory(first_class_seats),
            },
        )

    def inventory(self, seat_class: Union[SeatClass, str]) -> SeatInventory:
        return self.seats[SeatClass.parse(seat_class)]

    def has_available_seats(self, seat_class: Union[SeatClass, str]) -> bool:
        return self.inventory(seat_class).has_available()

    def available_seats(self, seat_class: Union[SeatClass, str]) -> List[str]:
        return self.inventory(seat_class).list()

    @property
    def is_full(self) -> bool:
        return not any(pool.has_available() for pool in self.seats.values())

    @property
    def route(self) -> str:
        return f"{self.origin}-{self.destination}"

    def reservations(self) -> List[Reservation]:
        return self.ledger.list_by_flight()


class FlightCatalog:
    """Ordered collection of flights keyed by flight number."""

    def __init__(self, flights: Optional[List[Flight]] = None) -> None:
        self._flights: List[Flight] = []
        for flight in flights or []:
            self.add_flight(flight)

    def __len__(self) -> int:
        return len(self._flights)

    def __iter__(self) -> Iterator[Flight]:
        return iter(list(self._flights))

    def add_flight(self, flight: Flight) -> Flight:
        if self.find_by_number(flight.flight_number) is not None:
            raise ValueError(f"duplicate flight number '{flight.flight_number}'")
        self._flights.append(flight)
        return flight

    def all_flights(self) -> List[Flight]:
        return list(self._flights)

    def find_by_number(self, flight_number: str) -> Optional[Flight]:
        wanted = flight_number.strip().upper()
        for flight in self._flights:
            if flight.flight_number.upper() == wanted:
                return flight
        return None

    def available_flights(self) -> List[Flight]:
        return [flight for flight in self._flights if not flight.is_full]

    def search(
        self,
        *,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
        departure_date: Optional[Union[date, datetime]] = None,
    ) -> List[Flight]:
        if isinstance(departure_date, datetime):
            departure_date = departure_date.date()
        matches = []
        for flight in self._flights:
            if origin and flight.origin.upper() != origin.strip().upper():
                continue
            if destination and flight.destination.upper() != destination.strip().upper():
                continue
            if departure_date and flight.departure_time.date() != departure_date:
                continue
            matches.append(flight)
        return matches

    def book_seat(
        self,
        flight_number: str,
        seat_class: Union[SeatClass, str],
        seat_id: str,
        passenger: Passenger,
    ) -> Reservation:
        """Book ``seat_id`` and record the reservation as one step.

        Raises :class:`FlightNotFound`, :class:`InvalidSeatClass`,
        :class:`ClassUnavailable` or :class:`SeatUnavailable` depending on the
        stage that failed. Nothing is changed when an error is raised.
        """

        flight = self.find_by_number(flight_number)
        if flight is None:
            raise FlightNotFound(flight_number)
        seat_class = SeatClass.parse(seat_class)
        inventory = flight.inventory(seat_class)
        if not inventory.has_available():
            raise ClassUnavailable(flight.flight_number, seat_class)
        seat_id = str(seat_id).strip()
        if not inventory.book(seat_id):
            raise SeatUnavailable(flight.flight_number, seat_class, seat_id)
        try:
            reservation = flight.ledger.create(passenger, flight, seat_class, seat_id)
        except Exception:
            inventory.release(seat_id)
            raise
        logger.info(
            "Booked %s seat %s on %s for %s (%s)",
            seat_class.label,
            seat_id,
            flight.flight_number,
            passenger.name,
            reservation.reservation_id,
        )
        return reservation

    def cancel_reservation(self, passenger_name: str) -> Optional[Reservation]:
        """Cancel the first active reservation held under ``passenger_name``.

        Flights are scanned in catalog order and the scan stops at the first
        match anywhere in the catalog.
        """

        predicate = by_passenger_name(passenger_name)
        for flight in self._flights:
            reservation = flight.ledger.cancel(predicate)
            if reservation is not None:
                return reservation
        logger.debug("No active reservation for passenger %r", passenger_name)
        return None

    def cancel_by_id(self, reservation_id: str) -> Reservation:
        predicate = by_reservation_id(reservation_id)
        for flight in self._flights:
            reservation = flight.ledger.cancel(predicate)
            if reservation is not None:
                return reservation
        raise ReservationNotFound(reservation_id)

    def find_reservation(self, reservation_id: str) -> Optional[Reservation]:
        predicate = by_reservation_id(reservation_id)
        for flight in self._flights:
            reservation = flight.ledger.find(predicate)
            if reservation is not None:
                return reservation
        return None

    def reservations(self) -> List[Reservation]:
        return [reservation for flight in self._flights for reservation in flight.reservations()]
