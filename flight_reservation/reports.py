"""Reservation reports rendered as tables or exported through pandas."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Union

import pandas as pd
from tabulate import tabulate

from .catalog import Flight, FlightCatalog
from .exceptions import PersistenceError
from .models import SeatClass

RESERVATION_COLUMNS = (
    "Reservation",
    "Flight",
    "Route",
    "Passenger",
    "Seat Class",
    "Seat",
    "Ticket Price",
    "Refund",
    "Cancelled",
)

FLIGHT_HEADERS = ("Flight", "Route", "Departure", "Economy", "Business", "First Class", "Price")


def _format_money(value: float) -> str:
    return f"{value:,.2f}"


def reservation_rows(catalog: FlightCatalog) -> List[Dict[str, Union[str, float, bool]]]:
    rows: List[Dict[str, Union[str, float, bool]]] = []
    for reservation in catalog.reservations():
        flight = reservation.flight
        rows.append(
            {
                "Reservation": reservation.reservation_id,
                "Flight": flight.flight_number,
                "Route": flight.route,
                "Passenger": reservation.passenger.name,
                "Seat Class": reservation.seat_class.label,
                "Seat": reservation.seat_id,
                "Ticket Price": flight.ticket_price,
                "Refund": reservation.refund_amount(),
                "Cancelled": reservation.cancelled,
            }
        )
    return rows


def reservations_frame(catalog: FlightCatalog) -> pd.DataFrame:
    return pd.DataFrame(reservation_rows(catalog), columns=list(RESERVATION_COLUMNS))


def flight_rows(flights: Iterable[Flight]) -> List[List[str]]:
    rows = []
    for flight in flights:
        rows.append(
            [
                flight.flight_number,
                f"{flight.origin} -> {flight.destination}",
                flight.departure_time.strftime("%Y-%m-%d %H:%M"),
                *(str(len(flight.seats[seat_class])) for seat_class in SeatClass),
                _format_money(flight.ticket_price),
            ]
        )
    return rows


def render_table(rows: Sequence[Sequence[object]], headers: Sequence[str]) -> str:
    return tabulate(rows, headers=list(headers), tablefmt="github", disable_numparse=True)


def render_reservations(catalog: FlightCatalog) -> str:
    """Tabulate every reservation, one section per flight."""

    sections = []
    for flight in catalog.all_flights():
        title = f"Flight: {flight.flight_number} - {flight.origin} to {flight.destination}"
        reservations = flight.reservations()
        if not reservations:
            sections.append(f"{title}\nNo reservations for this flight.")
            continue
        rows = [
            [
                reservation.reservation_id,
                reservation.passenger.name,
                reservation.seat_class.label,
                reservation.seat_id,
                _format_money(flight.ticket_price),
                _format_money(reservation.refund_amount()),
                "Yes" if reservation.cancelled else "No",
            ]
            for reservation in reservations
        ]
        table = render_table(
            rows, ["Reservation", "Passenger", "Seat Class", "Seat", "Ticket Price", "Refund", "Cancelled"]
        )
        sections.append(f"{title}\n{table}")
    return "\n\n".join(sections)


def export_reservations(catalog: FlightCatalog, path: Union[str, Path]) -> Path:
    path = Path(path)
    try:
        reservations_frame(catalog).to_csv(path, index=False)
    except OSError as exc:
        raise PersistenceError(f"cannot write {path}: {exc}") from exc
    return path
