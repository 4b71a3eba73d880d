"""Cancellation refund policy."""
from __future__ import annotations

from typing import Dict, Union

from .exceptions import InvalidSeatClass
from .models import SeatClass

REFUND_FRACTIONS: Dict[SeatClass, float] = {
    SeatClass.ECONOMY: 0.10,
    SeatClass.BUSINESS: 0.15,
    SeatClass.FIRST_CLASS: 0.20,
}


def refund_fraction(seat_class: Union[SeatClass, str, None]) -> float:
    """Fraction of the ticket price refunded for ``seat_class``; 0.0 if unknown."""

    try:
        parsed = SeatClass.parse(seat_class)
    except InvalidSeatClass:
        return 0.0
    return REFUND_FRACTIONS.get(parsed, 0.0)


def refund_amount(seat_class: Union[SeatClass, str, None], ticket_price: float) -> float:
    # No rounding here; currency formatting belongs to the presentation layer.
    return refund_fraction(seat_class) * ticket_price
