"""Reservations and the per-flight ledger that records them."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional

from .models import Passenger, SeatClass
from .refunds import refund_amount

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from .catalog import Flight

logger = logging.getLogger(__name__)

ReservationPredicate = Callable[["Reservation"], bool]


@dataclass
class Reservation:
    """One passenger holding one seat on one flight.

    A reservation starts active and can be cancelled once. Cancelled
    reservations stay in the ledger for reporting.
    """

    reservation_id: str
    passenger: Passenger
    flight: "Flight" = field(repr=False, compare=False)
    seat_class: SeatClass
    seat_id: str
    cancelled: bool = False
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def active(self) -> bool:
        return not self.cancelled

    def cancel(self) -> bool:
        """Cancel and release the seat; returns ``False`` if already cancelled."""

        if self.cancelled:
            return False
        self.flight.inventory(self.seat_class).release(self.seat_id)
        self.cancelled = True
        return True

    def refund_amount(self) -> float:
        return refund_amount(self.seat_class, self.flight.ticket_price)


def by_passenger_name(name: str) -> ReservationPredicate:
    wanted = name.strip().casefold()
    return lambda reservation: reservation.passenger.name.strip().casefold() == wanted


def by_reservation_id(reservation_id: str) -> ReservationPredicate:
    wanted = reservation_id.strip().upper()
    return lambda reservation: reservation.reservation_id.upper() == wanted


class ReservationLedger:
    """Insertion-ordered reservations for a single flight."""

    def __init__(self) -> None:
        self._reservations: List[Reservation] = []

    def __len__(self) -> int:
        return len(self._reservations)

    def __iter__(self) -> Iterator[Reservation]:
        return iter(list(self._reservations))

    def next_reservation_id(self, flight: "Flight") -> str:
        return f"{flight.flight_number}-{len(self._reservations) + 1:04d}"

    def create(
        self,
        passenger: Passenger,
        flight: "Flight",
        seat_class: SeatClass,
        seat_id: str,
        *,
        reservation_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
        cancelled: bool = False,
    ) -> Reservation:
        """Record a reservation for a seat the caller has already booked."""

        reservation = Reservation(
            reservation_id=reservation_id or self.next_reservation_id(flight),
            passenger=passenger,
            flight=flight,
            seat_class=seat_class,
            seat_id=seat_id,
            cancelled=cancelled,
            created_at=created_at or datetime.now(),
        )
        self._reservations.append(reservation)
        return reservation

    def cancel(self, predicate: ReservationPredicate) -> Optional[Reservation]:
        """Cancel the first active reservation matching ``predicate``."""

        for reservation in self._reservations:
            if reservation.cancelled or not predicate(reservation):
                continue
            reservation.cancel()
            logger.info(
                "Cancelled reservation %s (%s seat %s)",
                reservation.reservation_id,
                reservation.seat_class.label,
                reservation.seat_id,
            )
            return reservation
        return None

    def find(self, predicate: ReservationPredicate) -> Optional[Reservation]:
        for reservation in self._reservations:
            if predicate(reservation):
                return reservation
        return None

    def list_by_flight(self) -> List[Reservation]:
        return list(self._reservations)

    def active(self) -> List[Reservation]:
        return [reservation for reservation in self._reservations if not reservation.cancelled]
