from __future__ import annotations

from datetime import datetime

import pytest

from flight_reservation.catalog import Flight, FlightCatalog
from flight_reservation.models import Passenger


def make_flight(
    flight_number: str = "AA100",
    *,
    economy: int = 2,
    business: int = 1,
    first_class: int = 1,
    price: float = 500.0,
    origin: str = "JFK",
    destination: str = "LAX",
    departure: datetime = datetime(2025, 3, 14, 9, 30),
) -> Flight:
    return Flight.create(
        flight_number,
        origin,
        destination,
        departure,
        economy_seats=economy,
        business_seats=business,
        first_class_seats=first_class,
        ticket_price=price,
    )


def make_passenger(name: str = "Alice") -> Passenger:
    return Passenger(name=name, email=f"{name.lower()}@example.com", phone="+1-555-0100")


@pytest.fixture
def catalog() -> FlightCatalog:
    return FlightCatalog([make_flight()])
