"""
Tests for `services/ticketing_service.py`.

Covers:
- Section/seat selection through purchase, including the end-to-end example.
- Failure paths leave the store unchanged.
- Seat updates change only section and seat number.
- Delete, lookup and section listing error mapping.
"""

from __future__ import annotations

import threading
from decimal import Decimal
from typing import List

import pytest

from domain.errors import (
    NoAvailableSeatsError,
    NoReceiptsFoundError,
    ReceiptNotFoundByIdError,
    ReceiptNotFoundError,
    SeatAlreadyOccupiedError,
)
from domain.receipt import Passenger, Receipt, Section, Station
from repositories.memory_receipt_repository import InMemoryReceiptRepository
from services.ticketing_service import TicketingService


def _seed(repository: InMemoryReceiptRepository, section: Section, seats: List[int]) -> List[Receipt]:
    return [
        repository.add(
            Receipt.issue(
                Passenger(name="Seed", surname="Passenger", email=f"seed{section.value}{seat}@x.com"),
                section,
                seat,
            )
        )
        for seat in seats
    ]


def test_end_to_end_purchases(service: TicketingService, john: Passenger, jane: Passenger) -> None:
    """A1 on an empty train, then B1 (only A occupied), then B2 (tie goes to B)."""

    first = service.purchase_ticket(john)
    assert first.receipt_id is not None
    assert first.origin is Station.LONDON
    assert first.destination is Station.FRANCE
    assert first.price == Decimal("20.00")
    assert (first.section, first.seat_number) == (Section.A, 1)

    second = service.purchase_ticket(jane)
    assert (second.section, second.seat_number) == (Section.B, 1)

    third = service.purchase_ticket(Passenger(name="Max", surname="Power", email="max@x.com"))
    assert (third.section, third.seat_number) == (Section.B, 2)


def test_purchase_goes_to_a_when_only_b_occupied(
    service: TicketingService, repository: InMemoryReceiptRepository, john: Passenger
) -> None:
    _seed(repository, Section.B, [1, 2, 3])

    receipt = service.purchase_ticket(john)

    assert (receipt.section, receipt.seat_number) == (Section.A, 1)


def test_purchase_picks_less_occupied_section(
    service: TicketingService, repository: InMemoryReceiptRepository, john: Passenger
) -> None:
    _seed(repository, Section.A, [1])
    _seed(repository, Section.B, [1, 2])

    assert service.purchase_ticket(john).section is Section.A


def test_purchase_picks_b_when_a_more_occupied(
    service: TicketingService, repository: InMemoryReceiptRepository, john: Passenger
) -> None:
    _seed(repository, Section.A, [1, 2, 3])
    _seed(repository, Section.B, [1])

    assert service.purchase_ticket(john).section is Section.B


def test_purchase_fills_lowest_free_seat(
    service: TicketingService, repository: InMemoryReceiptRepository, john: Passenger
) -> None:
    _seed(repository, Section.A, [1, 2, 4, 5])
    _seed(repository, Section.B, [1, 2, 3, 4, 5, 6])

    receipt = service.purchase_ticket(john)

    assert (receipt.section, receipt.seat_number) == (Section.A, 3)


def test_purchase_into_full_section_fails_and_leaves_store_unchanged(
    service: TicketingService, repository: InMemoryReceiptRepository, john: Passenger
) -> None:
    """Both sections full: the tie rule picks B, which has no free seat."""

    _seed(repository, Section.A, list(range(1, 11)))
    _seed(repository, Section.B, list(range(1, 11)))

    with pytest.raises(NoAvailableSeatsError):
        service.purchase_ticket(john)

    assert repository.count_by_section(Section.A) == 10
    assert repository.count_by_section(Section.B) == 10


def test_purchase_reuses_freed_seat_then_reports_full_section(
    service: TicketingService, repository: InMemoryReceiptRepository, john: Passenger
) -> None:
    _seed(repository, Section.A, list(range(1, 11)))
    _seed(repository, Section.B, list(range(1, 11)))
    repository.delete(repository.find_by_section_and_seat(Section.A, 5).receipt_id)

    # A=9 < B=10: A is chosen and seat 5 is free.
    receipt = service.purchase_ticket(john)
    assert (receipt.section, receipt.seat_number) == (Section.A, 5)

    # A=10 == B=10: tie goes to B, which is full; no fallback to A.
    with pytest.raises(NoAvailableSeatsError) as excinfo:
        service.purchase_ticket(Passenger(name="Late", surname="Comer", email="late@x.com"))
    assert excinfo.value.section == "B"


def test_twenty_purchases_fill_the_train(service: TicketingService) -> None:
    receipts = [
        service.purchase_ticket(Passenger(name="Rider", surname="Number", email=f"rider{i}@x.com"))
        for i in range(20)
    ]

    slots = {(r.section, r.seat_number) for r in receipts}
    assert len(slots) == 20

    with pytest.raises(NoAvailableSeatsError):
        service.purchase_ticket(Passenger(name="Extra", surname="Rider", email="extra@x.com"))


def test_concurrent_purchases_never_share_a_seat(service: TicketingService) -> None:
    results: List[Receipt] = []
    errors: List[Exception] = []
    results_lock = threading.Lock()

    def buy(i: int) -> None:
        try:
            receipt = service.purchase_ticket(
                Passenger(name="Racer", surname="Thread", email=f"racer{i}@x.com")
            )
        except NoAvailableSeatsError as e:
            with results_lock:
                errors.append(e)
            return
        with results_lock:
            results.append(receipt)

    threads = [threading.Thread(target=buy, args=(i,)) for i in range(25)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 20
    assert len(errors) == 5
    assert len({(r.section, r.seat_number) for r in results}) == 20


def test_update_seat_missing_receipt_raises(
    service: TicketingService, repository: InMemoryReceiptRepository
) -> None:
    with pytest.raises(ReceiptNotFoundError):
        service.update_seat(999, Section.B, 3)

    assert repository.count_by_section(Section.B) == 0


def test_update_seat_to_occupied_seat_raises_and_keeps_original(
    service: TicketingService, john: Passenger, jane: Passenger
) -> None:
    first = service.purchase_ticket(john)   # A1
    second = service.purchase_ticket(jane)  # B1

    with pytest.raises(SeatAlreadyOccupiedError) as excinfo:
        service.update_seat(first.receipt_id, Section.B, 1)

    assert excinfo.value.holder_id == second.receipt_id
    unchanged = service.get_receipt_by_id(first.receipt_id)
    assert (unchanged.section, unchanged.seat_number) == (Section.A, 1)


def test_update_seat_changes_only_seat(service: TicketingService, john: Passenger) -> None:
    original = service.purchase_ticket(john)

    updated = service.update_seat(original.receipt_id, Section.B, 7)

    assert (updated.section, updated.seat_number) == (Section.B, 7)
    stored = service.get_receipt_by_id(original.receipt_id)
    assert stored == updated
    assert stored.passenger == original.passenger
    assert (stored.origin, stored.destination, stored.price) == (
        original.origin,
        original.destination,
        original.price,
    )


def test_update_seat_to_own_seat_is_a_no_op(service: TicketingService, john: Passenger) -> None:
    """Reassigning a receipt to the seat it already holds succeeds without change."""

    original = service.purchase_ticket(john)

    result = service.update_seat(original.receipt_id, Section.A, 1)

    assert result == original


def test_update_seat_rejects_out_of_range_seat(service: TicketingService, john: Passenger) -> None:
    original = service.purchase_ticket(john)

    with pytest.raises(ValueError):
        service.update_seat(original.receipt_id, Section.A, 11)


def test_update_seat_frees_previous_slot(service: TicketingService, john: Passenger, jane: Passenger) -> None:
    first = service.purchase_ticket(john)  # A1
    service.update_seat(first.receipt_id, Section.A, 9)

    # A has one receipt, B none: next goes to B; move jane's receipt into the freed A1.
    second = service.purchase_ticket(jane)
    moved = service.update_seat(second.receipt_id, Section.A, 1)

    assert (moved.section, moved.seat_number) == (Section.A, 1)


def test_delete_missing_receipt_raises(service: TicketingService) -> None:
    with pytest.raises(ReceiptNotFoundError):
        service.delete_receipt(42)


def test_delete_then_get_raises_not_found_by_id(service: TicketingService, john: Passenger) -> None:
    receipt = service.purchase_ticket(john)

    service.delete_receipt(receipt.receipt_id)

    with pytest.raises(ReceiptNotFoundByIdError):
        service.get_receipt_by_id(receipt.receipt_id)
    with pytest.raises(ReceiptNotFoundError):
        service.delete_receipt(receipt.receipt_id)


def test_get_receipt_by_id_returns_receipt(service: TicketingService, john: Passenger) -> None:
    receipt = service.purchase_ticket(john)

    assert service.get_receipt_by_id(receipt.receipt_id) == receipt


def test_get_receipts_by_empty_section_raises(service: TicketingService, john: Passenger) -> None:
    service.purchase_ticket(john)  # A1

    with pytest.raises(NoReceiptsFoundError):
        service.get_receipts_by_section(Section.B)


def test_get_receipts_by_section_lists_user_seats(
    service: TicketingService, john: Passenger, jane: Passenger
) -> None:
    service.purchase_ticket(john)  # A1
    service.purchase_ticket(jane)  # B1
    service.purchase_ticket(Passenger(name="Max", surname="Power", email="max@x.com"))  # B2

    seats = service.get_receipts_by_section(Section.B)

    assert [(s.name, s.seat_number) for s in seats] == [("Jane", 1), ("Max", 2)]
    assert all(s.section is Section.B for s in seats)


def test_purchase_logs_attempt_without_passenger_details(
    service: TicketingService, john: Passenger, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level("INFO", logger="services.ticketing_service"):
        service.purchase_ticket(john)

    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "Attempting ticket purchase"
    assert not any(john.name in m or john.email in m for m in messages)


def test_get_receipt_by_id_logs_success(
    service: TicketingService, john: Passenger, caplog: pytest.LogCaptureFixture
) -> None:
    receipt = service.purchase_ticket(john)

    with caplog.at_level("INFO", logger="services.ticketing_service"):
        service.get_receipt_by_id(receipt.receipt_id)

    assert f"Receipt {receipt.receipt_id} fetched" in [r.getMessage() for r in caplog.records]
