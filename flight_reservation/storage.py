"""Flat-file persistence for the flight catalog.

Each line holds one flight::

    flightNumber,origin,destination,yyyy-MM-dd HH:mm:ss,economy,business,firstClass,ticketPrice

The seat counts are the seats still available when the catalog was saved,
so reloading a partly booked flight yields smaller pools numbered from 1.
Reservations are not written to this file; use :mod:`flight_reservation.database`
when they need to survive a restart.
"""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Union

from .catalog import Flight, FlightCatalog
from .config import DATETIME_FORMAT
from .exceptions import PersistenceError
from .models import SeatClass

logger = logging.getLogger(__name__)

_FIELD_COUNT = 8


def parse_flight_line(line: str) -> Flight:
    parts = [part.strip() for part in line.strip().split(",")]
    if len(parts) != _FIELD_COUNT:
        raise PersistenceError(f"expected {_FIELD_COUNT} fields, found {len(parts)}")
    number, origin, destination, departure_text, economy, business, first_class, price = parts
    if not number:
        raise PersistenceError("missing flight number")
    try:
        departure_time = datetime.strptime(departure_text.strip('"'), DATETIME_FORMAT)
    except ValueError as exc:
        raise PersistenceError(f"bad departure timestamp {departure_text!r}") from exc
    try:
        counts = [int(economy), int(business), int(first_class)]
        ticket_price = float(price)
    except ValueError as exc:
        raise PersistenceError(f"bad numeric field: {exc}") from exc
    if any(count < 0 for count in counts):
        raise PersistenceError("seat counts must not be negative")
    return Flight.create(
        number,
        origin,
        destination,
        departure_time,
        economy_seats=counts[0],
        business_seats=counts[1],
        first_class_seats=counts[2],
        ticket_price=ticket_price,
    )


def format_flight_line(flight: Flight) -> str:
    remaining = [len(flight.seats[seat_class]) for seat_class in SeatClass]
    return ",".join(
        [
            flight.flight_number,
            flight.origin,
            flight.destination,
            flight.departure_time.strftime(DATETIME_FORMAT),
            *(str(count) for count in remaining),
            str(float(flight.ticket_price)),
        ]
    )


def load_catalog(path: Union[str, Path]) -> FlightCatalog:
    """Read a catalog, skipping (and logging) lines that cannot be parsed.

    A missing file yields an empty catalog, and lines that are not valid
    UTF-8 are skipped like any other bad line. Other I/O failures raise
    :class:`PersistenceError`.
    """

    path = Path(path)
    catalog = FlightCatalog()
    if not path.exists():
        logger.warning("Flights file %s not found, starting with an empty catalog", path)
        return catalog
    try:
        with path.open("rb") as fh:
            lines = fh.readlines()
    except OSError as exc:
        raise PersistenceError(f"cannot read {path}: {exc}") from exc

    for line_number, raw in enumerate(lines, start=1):
        try:
            line = raw.decode("utf-8")
            if not line.strip():
                continue
            flight = parse_flight_line(line)
            catalog.add_flight(flight)
        except (PersistenceError, ValueError) as exc:
            logger.warning("Skipping %s line %d: %s", path, line_number, exc)
    logger.info("Loaded %d flights from %s", len(catalog), path)
    return catalog


def save_catalog(catalog: FlightCatalog, path: Union[str, Path]) -> None:
    path = Path(path)
    try:
        with path.open("w", encoding="utf-8") as fh:
            for flight in catalog.all_flights():
                fh.write(format_flight_line(flight) + "\n")
    except OSError as exc:
        raise PersistenceError(f"cannot write {path}: {exc}") from exc
    logger.info("Saved %d flights to %s", len(catalog), path)
