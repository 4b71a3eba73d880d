"""Value types shared by the flight reservation components."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

from .exceptions import InvalidSeatClass


class SeatClass(enum.Enum):
    ECONOMY = "Economy"
    BUSINESS = "Business"
    FIRST_CLASS = "FirstClass"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union["SeatClass", str, None]) -> "SeatClass":
        """Return the class named by ``value``, ignoring case.

        Unknown names raise :class:`InvalidSeatClass` instead of falling back
        to a default class.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value.lower() == key:
                    return member
        raise InvalidSeatClass(value)


@dataclass
class Passenger:
    name: str
    email: str
    phone: str
    special_request: Optional[str] = None
