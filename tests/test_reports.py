import pandas as pd
import pytest

from conftest import make_flight, make_passenger
from flight_reservation.catalog import FlightCatalog
from flight_reservation.dataset import generate_sample_catalog
from flight_reservation.reports import (
    FLIGHT_HEADERS,
    RESERVATION_COLUMNS,
    export_reservations,
    flight_rows,
    render_reservations,
    render_table,
    reservations_frame,
)


def _catalog():
    catalog = FlightCatalog([make_flight(price=1000.0), make_flight("BA200")])
    catalog.book_seat("AA100", "FirstClass", "1", make_passenger("Alice"))
    catalog.book_seat("AA100", "Economy", "2", make_passenger("Bob"))
    catalog.cancel_reservation("Alice")
    return catalog


def test_reservations_frame_includes_cancelled_entries():
    frame = reservations_frame(_catalog())

    assert list(frame.columns) == list(RESERVATION_COLUMNS)
    assert frame["Passenger"].tolist() == ["Alice", "Bob"]
    assert frame["Cancelled"].tolist() == [True, False]
    assert frame["Refund"].tolist() == pytest.approx([200.0, 100.0])


def test_render_reservations_lists_every_flight():
    text = render_reservations(_catalog())

    assert "Flight: AA100 - JFK to LAX" in text
    assert "200.00" in text
    assert "1,000.00" in text
    assert "No reservations for this flight." in text


def test_export_reservations_writes_csv(tmp_path):
    path = export_reservations(_catalog(), tmp_path / "report.csv")

    frame = pd.read_csv(path)
    assert frame["Reservation"].tolist() == ["AA100-0001", "AA100-0002"]


def test_empty_catalog_frame_has_columns():
    frame = reservations_frame(FlightCatalog())
    assert frame.empty
    assert list(frame.columns) == list(RESERVATION_COLUMNS)


def test_sample_catalog_is_deterministic_and_consistent():
    first = generate_sample_catalog(flights=4, bookings=12, seed=7)
    second = generate_sample_catalog(flights=4, bookings=12, seed=7)

    assert [f.flight_number for f in first.all_flights()] == ["AR1000", "AR1001", "AR1002", "AR1003"]
    assert [r.reservation_id for r in first.reservations()] == [
        r.reservation_id for r in second.reservations()
    ]
    assert 0 < len(first.reservations()) <= 12
    for flight in first.all_flights():
        for seat_class, pool in flight.seats.items():
            held = [r.seat_id for r in flight.ledger.active() if r.seat_class is seat_class]
            assert len(held) == len(set(held))
            assert set(held).isdisjoint(pool.list())
            assert len(held) + len(pool) == pool.capacity


def test_flight_table_keeps_currency_formatting():
    table = render_table(flight_rows([make_flight(price=500)]), FLIGHT_HEADERS)
    assert "500.00" in table
    assert "| AA100 " in table
