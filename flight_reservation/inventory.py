"""Per-class seat pools for a single flight."""
from __future__ import annotations

from typing import Iterable, List, Optional


class SeatInventory:
    """Set of bookable seat ids ``"1".."capacity"`` for one seat class.

    ``capacity`` is fixed when the pool is created. A seat id is present in
    the pool exactly when no active reservation holds it.
    """

    def __init__(self, capacity: int, available: Optional[Iterable[str]] = None):
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        if available is None:
            self._available = {str(number) for number in range(1, capacity + 1)}
        else:
            self._available = set()
            for seat_id in available:
                seat_id = str(seat_id)
                if not self.is_valid_seat(seat_id):
                    raise ValueError(f"seat {seat_id} is outside 1..{capacity}")
                self._available.add(seat_id)

    def __len__(self) -> int:
        return len(self._available)

    def __contains__(self, seat_id: object) -> bool:
        return seat_id in self._available

    def __repr__(self) -> str:
        return f"SeatInventory(capacity={self.capacity}, available={len(self._available)})"

    def is_valid_seat(self, seat_id: str) -> bool:
        return seat_id.isascii() and seat_id.isdigit() and 1 <= int(seat_id) <= self.capacity

    def has_available(self) -> bool:
        return bool(self._available)

    def book(self, seat_id: str) -> bool:
        """Remove ``seat_id`` from the pool, returning whether it was there."""

        if seat_id not in self._available:
            return False
        self._available.remove(seat_id)
        return True

    def release(self, seat_id: str) -> None:
        """Return ``seat_id`` to the pool.

        Callers only release seats held by an active reservation, so a seat
        that is already available indicates a double release and is refused.
        """

        if not self.is_valid_seat(seat_id):
            raise ValueError(f"seat {seat_id} is outside 1..{self.capacity}")
        if seat_id in self._available:
            raise ValueError(f"seat {seat_id} is already available")
        self._available.add(seat_id)

    def list(self) -> List[str]:
        return sorted(self._available, key=int)

    def booked(self) -> List[str]:
        """Seat ids currently missing from the pool."""

        return [
            str(number)
            for number in range(1, self.capacity + 1)
            if str(number) not in self._available
        ]
