"""Sample catalogs for demos and tests."""
from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Optional, Sequence

from .catalog import Flight, FlightCatalog
from .exceptions import BookingError
from .models import Passenger, SeatClass

AIRPORTS: Sequence[str] = (
    "ATL",
    "PEK",
    "DXB",
    "LAX",
    "HND",
    "ORD",
    "LHR",
    "HKG",
    "PVG",
    "CDG",
)
FIRST_NAMES = ("Ava", "Noah", "Liam", "Mia", "Lucas", "Emma", "Ethan", "Isabella")
LAST_NAMES = ("Johnson", "Williams", "Smith", "Brown", "Garcia", "Lee")


def _random_departure(rng: random.Random, start: datetime) -> datetime:
    day = start + timedelta(days=rng.randint(1, 10))
    hour = rng.randint(5, 22)
    minute = rng.choice((0, 15, 30, 45))
    return day.replace(hour=hour, minute=minute, second=0, microsecond=0)


def generate_sample_catalog(
    *,
    flights: int = 5,
    bookings: int = 10,
    seed: int = 42,
    start: Optional[datetime] = None,
) -> FlightCatalog:
    """Build a deterministic pseudo-random catalog with a few bookings."""

    rng = random.Random(seed)
    start = start or datetime(2025, 1, 1)
    catalog = FlightCatalog()
    for index in range(flights):
        origin, destination = rng.sample(AIRPORTS, 2)
        catalog.add_flight(
            Flight.create(
                f"AR{1000 + index}",
                origin,
                destination,
                _random_departure(rng, start),
                economy_seats=rng.choice((30, 60, 120)),
                business_seats=rng.choice((8, 12, 20)),
                first_class_seats=rng.choice((4, 6, 8)),
                ticket_price=float(rng.choice((120, 180, 220, 450))),
            )
        )

    all_flights = catalog.all_flights()
    if not all_flights:
        return catalog
    for index in range(bookings):
        flight = rng.choice(all_flights)
        seat_class = rng.choice(list(SeatClass))
        available = flight.available_seats(seat_class)
        if not available:
            continue
        name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
        passenger = Passenger(
            name=name,
            email=f"test{index}@example.com",
            phone=f"+1-555-{index:04d}",
        )
        try:
            catalog.book_seat(flight.flight_number, seat_class, rng.choice(available), passenger)
        except BookingError:
            continue
    return catalog
