from datetime import date, datetime

import pytest

from conftest import make_flight, make_passenger
from flight_reservation.catalog import FlightCatalog
from flight_reservation.exceptions import (
    ClassUnavailable,
    FlightNotFound,
    InvalidSeatClass,
    ReservationNotFound,
    SeatUnavailable,
)
from flight_reservation.models import SeatClass


def _active_seats(flight, seat_class):
    return {
        reservation.seat_id
        for reservation in flight.ledger.active()
        if reservation.seat_class is seat_class
    }


def test_end_to_end_book_rebook_and_cancel(catalog):
    flight = catalog.find_by_number("AA100")

    reservation = catalog.book_seat("AA100", "Economy", "1", make_passenger("Alice"))
    assert reservation.reservation_id == "AA100-0001"
    assert flight.available_seats("economy") == ["2"]

    with pytest.raises(SeatUnavailable):
        catalog.book_seat("AA100", "economy", "1", make_passenger("Bob"))
    assert flight.available_seats("economy") == ["2"]

    cancelled = catalog.cancel_reservation("Alice")
    assert cancelled is reservation
    assert cancelled.cancelled
    assert set(flight.available_seats("economy")) == {"1", "2"}
    assert cancelled.refund_amount() == pytest.approx(50.0)


def test_availability_tracks_bookings_without_losing_seats():
    catalog = FlightCatalog([make_flight(economy=10)])
    flight = catalog.find_by_number("AA100")
    initial = set(flight.available_seats(SeatClass.ECONOMY))

    for index, seat_id in enumerate(["3", "7", "1", "10"], start=1):
        catalog.book_seat("AA100", SeatClass.ECONOMY, seat_id, make_passenger(f"P{index}"))
        available = set(flight.available_seats(SeatClass.ECONOMY))
        reserved = _active_seats(flight, SeatClass.ECONOMY)
        assert len(available) == 10 - index
        assert available.isdisjoint(reserved)
        assert available | reserved == initial

    catalog.cancel_reservation("P2")
    available = flight.available_seats(SeatClass.ECONOMY)
    assert available.count("7") == 1
    assert set(available) | _active_seats(flight, SeatClass.ECONOMY) == initial


def test_booking_errors_are_specific(catalog):
    with pytest.raises(FlightNotFound):
        catalog.book_seat("ZZ999", "economy", "1", make_passenger())
    with pytest.raises(InvalidSeatClass):
        catalog.book_seat("AA100", "premium", "1", make_passenger())

    catalog.book_seat("aa100", "business", "1", make_passenger())
    with pytest.raises(ClassUnavailable):
        catalog.book_seat("AA100", "Business", "1", make_passenger("Bob"))
    with pytest.raises(SeatUnavailable):
        catalog.book_seat("AA100", "economy", "9", make_passenger("Bob"))

    flight = catalog.find_by_number("AA100")
    assert len(flight.ledger) == 1
    assert flight.available_seats("economy") == ["1", "2"]


def test_failed_ledger_insert_releases_the_seat(catalog, monkeypatch):
    flight = catalog.find_by_number("AA100")

    def broken_create(*args, **kwargs):
        raise RuntimeError("ledger unavailable")

    monkeypatch.setattr(flight.ledger, "create", broken_create)
    with pytest.raises(RuntimeError):
        catalog.book_seat("AA100", "economy", "1", make_passenger())
    assert flight.available_seats("economy") == ["1", "2"]


def test_duplicate_names_cancel_first_active_reservation_only():
    catalog = FlightCatalog([make_flight("AA100"), make_flight("BA200")])
    first = catalog.book_seat("BA200", "economy", "1", make_passenger("Sam"))
    second = catalog.book_seat("AA100", "economy", "2", make_passenger("Sam"))
    third = catalog.book_seat("BA200", "economy", "2", make_passenger("sam"))

    # AA100 comes first in the catalog, so its reservation is matched first.
    assert catalog.cancel_reservation("SAM") is second
    assert not first.cancelled
    assert not third.cancelled

    assert catalog.cancel_reservation("sam") is first
    assert not third.cancelled


def test_cancelling_twice_does_not_release_twice(catalog):
    flight = catalog.find_by_number("AA100")
    reservation = catalog.book_seat("AA100", "economy", "1", make_passenger())

    assert catalog.cancel_reservation("Alice") is reservation
    assert catalog.cancel_reservation("Alice") is None
    assert reservation.cancel() is False
    assert flight.available_seats("economy") == ["1", "2"]
    assert len(flight.reservations()) == 1


def test_cancelled_seat_can_be_booked_again(catalog):
    flight = catalog.find_by_number("AA100")
    catalog.book_seat("AA100", "economy", "1", make_passenger("Alice"))
    catalog.cancel_reservation("Alice")
    rebooked = catalog.book_seat("AA100", "economy", "1", make_passenger("Bob"))

    assert rebooked.reservation_id == "AA100-0002"
    assert [r.passenger.name for r in flight.reservations()] == ["Alice", "Bob"]
    assert [r.cancelled for r in flight.reservations()] == [True, False]


def test_cancel_by_id(catalog):
    reservation = catalog.book_seat("AA100", "FirstClass", "1", make_passenger())
    assert catalog.find_reservation("aa100-0001") is reservation
    assert catalog.cancel_by_id("AA100-0001") is reservation
    with pytest.raises(ReservationNotFound):
        catalog.cancel_by_id("AA100-0001")


def test_full_flag_requires_every_class_to_be_empty():
    catalog = FlightCatalog([make_flight(economy=1, business=1, first_class=1)])
    flight = catalog.find_by_number("AA100")

    catalog.book_seat("AA100", "economy", "1", make_passenger("A"))
    assert not flight.is_full
    catalog.book_seat("AA100", "business", "1", make_passenger("B"))
    catalog.book_seat("AA100", "firstclass", "1", make_passenger("C"))
    assert flight.is_full
    assert catalog.available_flights() == []

    catalog.cancel_reservation("B")
    assert not flight.is_full


def test_lookup_and_search():
    catalog = FlightCatalog(
        [
            make_flight("AA100", origin="JFK", destination="LAX"),
            make_flight("UA7", origin="SFO", destination="JFK", departure=datetime(2025, 3, 15, 7, 0)),
        ]
    )
    assert catalog.find_by_number(" ua7 ").flight_number == "UA7"
    assert catalog.find_by_number("UA8") is None
    assert [f.flight_number for f in catalog.search(origin="jfk")] == ["AA100"]
    assert [f.flight_number for f in catalog.search(destination="JFK")] == ["UA7"]
    assert [f.flight_number for f in catalog.search(departure_date=date(2025, 3, 14))] == ["AA100"]
    assert len(catalog.search()) == 2

    with pytest.raises(ValueError):
        catalog.add_flight(make_flight("aa100"))
