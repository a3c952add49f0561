"""
Domain: Receipt entity.

Contract excerpts implemented here:
- A Receipt is the persisted record of a single ticket purchase.
- A train has two sections, A and B, with seats numbered 1 to 10 in each.
- Origin and destination are London or France and must differ.
- Price is fixed per booking.
- Only the seat (section, seat_number) may change after purchase.

This module contains only pure domain entities/value objects: no I/O, no database, no frameworks.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Optional

SEATS_PER_SECTION: int = 10

NAME_PATTERN = re.compile(r"^[A-Z][a-zA-Z]*$")
SURNAME_PATTERN = re.compile(r"^[A-Z][a-zA-Z]*( [A-Z][a-zA-Z]*)?$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

NAME_MAX_LENGTH = 30
SURNAME_MAX_LENGTH = 60
EMAIL_MAX_LENGTH = 80


class Section(str, Enum):
    A = "A"
    B = "B"


class Station(str, Enum):
    LONDON = "London"
    FRANCE = "France"


DEFAULT_ORIGIN = Station.LONDON
DEFAULT_DESTINATION = Station.FRANCE
DEFAULT_PRICE = Decimal("20.00")


def require_seat_number(seat_number: int) -> None:
    if isinstance(seat_number, bool) or not isinstance(seat_number, int):
        raise ValueError("seat_number must be an integer")
    if not 1 <= seat_number <= SEATS_PER_SECTION:
        raise ValueError(f"seat_number must be between 1 and {SEATS_PER_SECTION}")


@dataclass(frozen=True, slots=True)
class Passenger:
    """Passenger details supplied at purchase time."""

    name: str
    surname: str
    email: str

    def __post_init__(self) -> None:
        if not NAME_PATTERN.match(self.name) or len(self.name) > NAME_MAX_LENGTH:
            raise ValueError("name must start with uppercase and contain only alphabetic characters")
        if not SURNAME_PATTERN.match(self.surname) or len(self.surname) > SURNAME_MAX_LENGTH:
            raise ValueError(
                "surname must be one or two alphabetic words, each starting with uppercase"
            )
        if not EMAIL_PATTERN.match(self.email) or len(self.email) > EMAIL_MAX_LENGTH:
            raise ValueError("email must be a valid email address")


@dataclass(frozen=True, slots=True)
class UserSeat:
    """Passenger and seat projection used by section listings."""

    name: str
    surname: str
    email: str
    section: Section
    seat_number: int


@dataclass(frozen=True, slots=True)
class Receipt:
    """
    Immutable receipt for one seat on the London to France train.

    receipt_id is None until the store assigns one on creation.
    Seat reassignment returns a new instance (see `with_seat`).
    """

    origin: Station
    destination: Station
    price: Decimal
    passenger: Passenger
    section: Section
    seat_number: int
    receipt_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.origin == self.destination:
            raise ValueError("origin and destination must be different")
        if self.price < 0:
            raise ValueError("price cannot be negative")
        if not isinstance(self.section, Section):
            raise ValueError("section must be a Section (A or B)")
        require_seat_number(self.seat_number)

    @classmethod
    def issue(cls, passenger: Passenger, section: Section, seat_number: int) -> "Receipt":
        """Build a new, not yet persisted receipt with the fixed trip defaults."""

        return cls(
            origin=DEFAULT_ORIGIN,
            destination=DEFAULT_DESTINATION,
            price=DEFAULT_PRICE,
            passenger=passenger,
            section=section,
            seat_number=seat_number,
        )

    @property
    def name(self) -> str:
        return self.passenger.name

    @property
    def surname(self) -> str:
        return self.passenger.surname

    @property
    def email(self) -> str:
        return self.passenger.email

    def with_id(self, receipt_id: int) -> "Receipt":
        return replace(self, receipt_id=receipt_id)

    def with_seat(self, section: Section, seat_number: int) -> "Receipt":
        """Return a copy moved to another seat; every other field is kept."""

        return replace(self, section=section, seat_number=seat_number)

    def holds(self, section: Section, seat_number: int) -> bool:
        return self.section == section and self.seat_number == seat_number

    def to_user_seat(self) -> UserSeat:
        return UserSeat(
            name=self.name,
            surname=self.surname,
            email=self.email,
            section=self.section,
            seat_number=self.seat_number,
        )
