"""SQLAlchemy store that keeps the full catalog state between runs.

Unlike the flat file, the database keeps original capacities and every
reservation (cancelled ones included), so a reload rebuilds identical seat
pools and ledgers.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Tuple

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
    delete,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, relationship, sessionmaker
from sqlalchemy.pool import StaticPool

from .catalog import Flight, FlightCatalog
from .exceptions import BookingError, PersistenceError
from .models import Passenger, SeatClass

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class FlightRecord(Base):
    __tablename__ = "flights"
    __table_args__ = (
        UniqueConstraint("flight_number", name="uq_flight_number"),
        CheckConstraint("economy_capacity >= 0", name="ck_economy_non_negative"),
        CheckConstraint("business_capacity >= 0", name="ck_business_non_negative"),
        CheckConstraint("first_class_capacity >= 0", name="ck_first_class_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    flight_number: Mapped[str] = mapped_column(String(16), nullable=False)
    origin: Mapped[str] = mapped_column(String(64), nullable=False)
    destination: Mapped[str] = mapped_column(String(64), nullable=False)
    departure_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    ticket_price: Mapped[float] = mapped_column(Float, nullable=False)
    economy_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    business_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    first_class_capacity: Mapped[int] = mapped_column(Integer, nullable=False)

    reservations: Mapped[List["ReservationRecord"]] = relationship(
        back_populates="flight",
        cascade="all, delete-orphan",
        order_by="ReservationRecord.position",
    )


class ReservationRecord(Base):
    __tablename__ = "reservations"
    __table_args__ = (UniqueConstraint("reservation_id", name="uq_reservation_id"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    flight_id: Mapped[int] = mapped_column(ForeignKey("flights.id", ondelete="CASCADE"))
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    reservation_id: Mapped[str] = mapped_column(String(32), nullable=False)
    passenger_name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(120), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    special_request: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    seat_class: Mapped[str] = mapped_column(
        Enum(*(seat_class.value for seat_class in SeatClass), name="seat_class"), nullable=False
    )
    seat_number: Mapped[str] = mapped_column(String(8), nullable=False)
    cancelled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)

    flight: Mapped[FlightRecord] = relationship(back_populates="reservations")


def create_session_factory(
    db_url: str = "sqlite+pysqlite:///flight_reservation.db",
    *,
    echo: bool = False,
    connect_args: Dict[str, object] | None = None,
) -> Tuple[Engine, sessionmaker[Session]]:
    """Return an engine/session factory pair configured for SQLite by default."""

    if db_url.startswith("sqlite"):
        final_connect_args = {"check_same_thread": False}
        if connect_args:
            final_connect_args.update(connect_args)
    else:
        final_connect_args = connect_args or {}

    engine_kwargs = {"echo": echo, "future": True, "connect_args": final_connect_args}
    if db_url.endswith(":memory:"):
        engine_kwargs["poolclass"] = StaticPool
    engine = create_engine(db_url, **engine_kwargs)
    session_factory = sessionmaker(bind=engine, expire_on_commit=False, future=True)
    return engine, session_factory


def init_db(db_url: str = "sqlite+pysqlite:///flight_reservation.db", *, echo: bool = False) -> sessionmaker[Session]:
    """Create all tables and return a session factory."""

    try:
        engine, session_factory = create_session_factory(db_url, echo=echo)
        Base.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise PersistenceError(f"cannot initialise database {db_url}: {exc}") from exc
    return session_factory


@contextmanager
def session_scope(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = session_factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise PersistenceError(f"database transaction failed: {exc}") from exc
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def _flight_to_record(position: int, flight: Flight) -> FlightRecord:
    record = FlightRecord(
        position=position,
        flight_number=flight.flight_number,
        origin=flight.origin,
        destination=flight.destination,
        departure_time=flight.departure_time,
        ticket_price=flight.ticket_price,
        economy_capacity=flight.seats[SeatClass.ECONOMY].capacity,
        business_capacity=flight.seats[SeatClass.BUSINESS].capacity,
        first_class_capacity=flight.seats[SeatClass.FIRST_CLASS].capacity,
    )
    for index, reservation in enumerate(flight.reservations()):
        passenger = reservation.passenger
        record.reservations.append(
            ReservationRecord(
                position=index,
                reservation_id=reservation.reservation_id,
                passenger_name=passenger.name,
                email=passenger.email,
                phone=passenger.phone,
                special_request=passenger.special_request,
                seat_class=reservation.seat_class.value,
                seat_number=reservation.seat_id,
                cancelled=reservation.cancelled,
                created_at=reservation.created_at,
            )
        )
    return record


def _record_to_flight(record: FlightRecord) -> Flight:
    flight = Flight.create(
        record.flight_number,
        record.origin,
        record.destination,
        record.departure_time,
        economy_seats=record.economy_capacity,
        business_seats=record.business_capacity,
        first_class_seats=record.first_class_capacity,
        ticket_price=record.ticket_price,
    )
    for row in record.reservations:
        seat_class = SeatClass.parse(row.seat_class)
        # Active reservations must still own their seat once replayed.
        if not row.cancelled and not flight.inventory(seat_class).book(row.seat_number):
            raise PersistenceError(
                f"reservation {row.reservation_id} holds unavailable seat "
                f"{seat_class.label} {row.seat_number} on {record.flight_number}"
            )
        flight.ledger.create(
            Passenger(
                name=row.passenger_name,
                email=row.email,
                phone=row.phone,
                special_request=row.special_request,
            ),
            flight,
            seat_class,
            row.seat_number,
            reservation_id=row.reservation_id,
            created_at=row.created_at,
            cancelled=row.cancelled,
        )
    return flight


def save_catalog(session: Session, catalog: FlightCatalog) -> None:
    """Replace the stored catalog with the state of ``catalog``."""

    try:
        session.execute(delete(ReservationRecord))
        session.execute(delete(FlightRecord))
        for position, flight in enumerate(catalog.all_flights()):
            session.add(_flight_to_record(position, flight))
        session.flush()
    except SQLAlchemyError as exc:
        raise PersistenceError(f"cannot save catalog: {exc}") from exc
    logger.info("Stored %d flights in the database", len(catalog))


def load_catalog(session: Session) -> FlightCatalog:
    try:
        records = list(session.scalars(select(FlightRecord).order_by(FlightRecord.position)))
        catalog = FlightCatalog([_record_to_flight(record) for record in records])
    except (SQLAlchemyError, LookupError, BookingError, ValueError) as exc:
        raise PersistenceError(f"cannot load catalog: {exc}") from exc
    logger.info("Loaded %d flights from the database", len(catalog))
    return catalog
