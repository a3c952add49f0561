"""
Tests for `domain/seat_allocation.py`.

Covers contract rules:
- Empty train goes to section A.
- When only one section has receipts, the other one is chosen.
- Otherwise the less occupied section wins; ties go to B.
- Within a section the lowest free seat is chosen; a full section yields None.
"""

from __future__ import annotations

import pytest

from domain.receipt import Section
from domain.seat_allocation import SECTION_RULES, select_seat, select_section


def test_empty_train_selects_section_a() -> None:
    assert select_section(0, 0) is Section.A


@pytest.mark.parametrize("count_a", [1, 5, 9])
def test_only_a_occupied_selects_b(count_a: int) -> None:
    """Rule 2: all receipts in A sends the next booking to B."""

    assert select_section(count_a, 0) is Section.B


@pytest.mark.parametrize("count_b", [1, 5, 9])
def test_only_b_occupied_selects_a(count_b: int) -> None:
    """Rule 3: all receipts in B sends the next booking to A."""

    assert select_section(0, count_b) is Section.A


def test_less_occupied_section_wins_when_both_have_receipts() -> None:
    assert select_section(2, 5) is Section.A
    assert select_section(5, 2) is Section.B


@pytest.mark.parametrize("count", [1, 4, 10])
def test_tie_with_both_occupied_selects_b(count: int) -> None:
    assert select_section(count, count) is Section.B


def test_negative_counts_are_rejected() -> None:
    with pytest.raises(ValueError):
        select_section(-1, 0)
    with pytest.raises(ValueError):
        select_section(0, -3)


def test_section_rules_are_evaluated_in_declared_order() -> None:
    """The special cases sit before the plain comparison and the fallback is last."""

    names = [name for name, _, _ in SECTION_RULES]
    assert names == ["empty_train", "only_a_occupied", "only_b_occupied", "a_less_occupied", "fallback"]


def test_select_seat_returns_one_for_empty_section() -> None:
    assert select_seat([]) == 1


def test_select_seat_returns_lowest_gap() -> None:
    assert select_seat([1, 2, 4, 5]) == 3
    assert select_seat([2, 3]) == 1
    assert select_seat({10, 1, 2}) == 3


def test_select_seat_ignores_order_and_duplicates() -> None:
    assert select_seat([3, 1, 1, 2]) == 4


def test_select_seat_returns_last_seat_when_nine_taken() -> None:
    assert select_seat(range(1, 10)) == 10


def test_select_seat_returns_none_when_section_full() -> None:
    assert select_seat(range(1, 11)) is None
