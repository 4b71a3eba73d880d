"""Environment driven settings for the flight reservation system."""
from __future__ import annotations

import os
from dataclasses import dataclass

FLIGHTS_FILE = os.environ.get("FLIGHT_RESERVATION_FLIGHTS_FILE", "flights.csv")
USERS_FILE = os.environ.get("FLIGHT_RESERVATION_USERS_FILE", "users.csv")
DB_URL = os.environ.get("FLIGHT_RESERVATION_DB_URL", "sqlite+pysqlite:///flight_reservation.db")
LOG_LEVEL = os.environ.get("FLIGHT_RESERVATION_LOG_LEVEL", "WARNING")

# Timestamp layout used by the flat catalog file.
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class Settings:
    flights_file: str = FLIGHTS_FILE
    users_file: str = USERS_FILE
    db_url: str = DB_URL
    log_level: str = LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings at call time so tests can patch the environment."""

        return cls(
            flights_file=os.environ.get("FLIGHT_RESERVATION_FLIGHTS_FILE", FLIGHTS_FILE),
            users_file=os.environ.get("FLIGHT_RESERVATION_USERS_FILE", USERS_FILE),
            db_url=os.environ.get("FLIGHT_RESERVATION_DB_URL", DB_URL),
            log_level=os.environ.get("FLIGHT_RESERVATION_LOG_LEVEL", LOG_LEVEL),
        )
