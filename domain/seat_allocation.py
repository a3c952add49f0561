"""
Domain: seat allocation (pure).

Decides which section and seat a new booking gets.

Section rules, evaluated in order (first match wins):
1. Empty train: section A.
2. Only section A has receipts: section B.
3. Only section B has receipts: section A.
4. A has fewer receipts than B: section A.
5. Otherwise (including ties): section B.

Within the chosen section the lowest free seat number is used. A full section
is reported as no seat; there is no fallback to the other section.
"""

from __future__ import annotations

from typing import Callable, Collection, List, Optional, Tuple

from .receipt import SEATS_PER_SECTION, Section

_SectionRule = Tuple[str, Callable[[int, int], bool], Section]

SECTION_RULES: List[_SectionRule] = [
    ("empty_train", lambda a, b: a == 0 and b == 0, Section.A),
    ("only_a_occupied", lambda a, b: b == 0 and a > 0, Section.B),
    ("only_b_occupied", lambda a, b: a == 0 and b > 0, Section.A),
    ("a_less_occupied", lambda a, b: a < b, Section.A),
    ("fallback", lambda a, b: True, Section.B),
]


def select_section(count_a: int, count_b: int) -> Section:
    """Return the section for the next booking given the receipts held in each."""

    if count_a < 0 or count_b < 0:
        raise ValueError("section counts cannot be negative")

    for _, matches, section in SECTION_RULES:
        if matches(count_a, count_b):
            return section
    raise AssertionError("unreachable: fallback rule always matches")


def select_seat(occupied: Collection[int]) -> Optional[int]:
    """Return the lowest seat number in 1..10 not in `occupied`, or None if all are taken."""

    taken = set(occupied)
    for seat_number in range(1, SEATS_PER_SECTION + 1):
        if seat_number not in taken:
            return seat_number
    return None


__all__ = ["SECTION_RULES", "select_section", "select_seat"]
