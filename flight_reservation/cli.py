"""Menu driven command line interface for the flight reservation system."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, List, Optional, TextIO

from . import database, storage
from .auth import User, authenticate, load_users
from .catalog import FlightCatalog
from .config import Settings
from .dataset import generate_sample_catalog
from .exceptions import (
    BookingError,
    ClassUnavailable,
    FlightNotFound,
    PassengerNotFound,
    PersistenceError,
)
from .models import Passenger, SeatClass
from .reports import FLIGHT_HEADERS, export_reservations, flight_rows, render_reservations, render_table

logger = logging.getLogger(__name__)

MENU = """
Welcome to Flight Reservation System
1. Search Flights
2. Make Reservation
3. Display Reservations
4. Cancel Reservation
5. Logout
6. Exit
Enter your choice: """


def configure_logging(level: str = "WARNING") -> None:
    log_level = getattr(logging, level.upper(), logging.WARNING)
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    if not root_logger.handlers:
        root_logger.addHandler(handler)


class ReservationShell:
    """Interactive session over one catalog.

    The session owns the logged-in user; nothing is kept in module state.
    """

    def __init__(
        self,
        catalog: FlightCatalog,
        *,
        users: Optional[List[User]] = None,
        require_login: bool = True,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.catalog = catalog
        self.users = users or []
        self.require_login = require_login
        self.current_user: Optional[User] = None
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def _write(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def _prompt(self, text: str) -> str:
        self.stdout.write(text)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def login(self) -> bool:
        username = self._prompt("Enter username: ")
        password = self._prompt("Enter password: ")
        user = authenticate(self.users, username, password)
        if user is None:
            self._write("Invalid username or password. Please try again.")
            return False
        self.current_user = user
        self._write("Login successful!")
        return True

    def logout(self) -> None:
        self.current_user = None
        self._write("Logout successful!")

    def run(self) -> None:
        """Process menu choices until the user exits or input ends."""

        actions = {
            "1": self.search_flights,
            "2": self.make_reservation,
            "3": self.display_reservations,
            "4": self.cancel_reservation,
            "5": self.logout,
        }
        try:
            while True:
                if self.require_login and self.current_user is None:
                    if not self.login():
                        continue
                choice = self._prompt(MENU).strip()
                if choice == "6":
                    return
                action = actions.get(choice)
                if action is None:
                    self._write("Invalid choice. Please enter a valid option.")
                    continue
                action()
        except EOFError:
            logger.debug("Input closed, leaving the menu")

    def search_flights(self) -> None:
        origin = self._prompt("Origin (blank for any): ").strip() or None
        destination = self._prompt("Destination (blank for any): ").strip() or None
        flights = self.catalog.search(origin=origin, destination=destination)
        if not flights:
            self._write("No flights match your search.")
            return
        self._write(render_table(flight_rows(flights), FLIGHT_HEADERS))

    def make_reservation(self) -> None:
        self._write("Available Flights:")
        self._write(render_table(flight_rows(self.catalog.all_flights()), FLIGHT_HEADERS))
        try:
            flight_number = self._prompt("Enter the flight number you want to book: ").strip()
            flight = self.catalog.find_by_number(flight_number)
            if flight is None:
                raise FlightNotFound(flight_number)

            passenger = Passenger(
                name=self._prompt("Enter passenger name: ").strip(),
                email=self._prompt("Enter passenger email: ").strip(),
                phone=self._prompt("Enter passenger phone number: ").strip(),
                special_request=self._prompt("Enter any special request (optional): ").strip() or None,
            )
            seat_class = SeatClass.parse(self._prompt("Enter seat class (Economy/Business/FirstClass): "))
            if not flight.has_available_seats(seat_class):
                raise ClassUnavailable(flight.flight_number, seat_class)

            self._write(f"Available seats in {seat_class.label} class:")
            self._write(" ".join(flight.available_seats(seat_class)))
            seat_id = self._prompt("Enter the seat number you want to book: ").strip()
            reservation = self.catalog.book_seat(flight.flight_number, seat_class, seat_id, passenger)
        except BookingError as exc:
            self._write(str(exc))
            return

        self._write("Reservation successful! Your reservation details:")
        self._write(f"Reservation: {reservation.reservation_id}")
        self._write(f"Flight: {flight.flight_number} - {flight.origin} to {flight.destination}")
        self._write(f"Departure Date: {flight.departure_time:%Y-%m-%d %H:%M}")
        self._write(f"Passenger: {passenger.name}")
        self._write(f"Seat Class: {seat_class.label}")
        self._write(f"Seat Number: {reservation.seat_id}")

    def display_reservations(self) -> None:
        self._write(render_reservations(self.catalog))

    def cancel_reservation(self) -> None:
        name = self._prompt("Enter passenger name: ").strip()
        try:
            reservation = self.catalog.cancel_reservation(name)
            if reservation is None:
                raise PassengerNotFound(name)
        except BookingError as exc:
            self._write(str(exc))
            return
        self._write(
            f"Reservation cancelled for passenger: {name} "
            f"(flight {reservation.flight.flight_number}, refund {reservation.refund_amount():.2f})"
        )


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Book and cancel seats on scheduled flights.")
    parser.add_argument(
        "--store",
        choices=["file", "db"],
        default="file",
        help="Where the catalog is loaded from and saved to (default: file).",
    )
    parser.add_argument("--flights-file", default=settings.flights_file, help="Flat catalog file.")
    parser.add_argument("--users-file", default=settings.users_file, help="Credential file.")
    parser.add_argument("--db-url", default=settings.db_url, help="SQLAlchemy URL used with --store db.")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level (default: WARNING).")
    parser.add_argument(
        "--no-login",
        action="store_true",
        help="Skip the username/password prompt.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Generate this many sample flights when the loaded catalog is empty.",
    )
    parser.add_argument(
        "--export",
        metavar="PATH",
        help="Write the reservation report as CSV to PATH and exit.",
    )
    return parser.parse_args(list(argv))


def load_catalog(args: argparse.Namespace) -> FlightCatalog:
    """Load the catalog, degrading to an empty one when the store is unusable."""

    try:
        if args.store == "db":
            session_factory = database.init_db(args.db_url)
            with database.session_scope(session_factory) as session:
                catalog = database.load_catalog(session)
        else:
            catalog = storage.load_catalog(args.flights_file)
    except PersistenceError as exc:
        logger.error("Error loading flights data: %s", exc)
        catalog = FlightCatalog()
    if not len(catalog) and args.seed > 0:
        logger.info("Catalog is empty, generating %d sample flights", args.seed)
        catalog = generate_sample_catalog(flights=args.seed)
    return catalog


def save_catalog(catalog: FlightCatalog, args: argparse.Namespace) -> bool:
    """Persist the catalog; failures are logged and reported as ``False``."""

    try:
        if args.store == "db":
            session_factory = database.init_db(args.db_url)
            with database.session_scope(session_factory) as session:
                database.save_catalog(session, catalog)
        else:
            storage.save_catalog(catalog, args.flights_file)
    except PersistenceError as exc:
        logger.error("Error saving flights data: %s", exc)
        return False
    return True


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log_level)
    catalog = load_catalog(args)

    if args.export:
        try:
            path = export_reservations(catalog, args.export)
        except PersistenceError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        print(f"Wrote {len(catalog.reservations())} reservations to {path}")
        return 0

    users: List[User] = []
    if not args.no_login:
        try:
            users = load_users(args.users_file)
        except PersistenceError as exc:
            logger.error("Error reading user database: %s", exc)

    shell = ReservationShell(catalog, users=users, require_login=not args.no_login)
    shell.run()
    save_catalog(catalog, args)
    print("Thank you for using Flight Reservation System. Goodbye!")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
