"""
In-memory receipt repository.

Dict-backed store used by the test suite and for running the API without a
database (RECEIPT_STORE=memory). Mirrors the Postgres schema constraints:
ids come from a monotonically increasing counter and are never reused, and a
(section, seat_number) slot is held by at most one receipt.
"""

from __future__ import annotations

import threading
from itertools import count
from typing import Dict, List, Optional

from domain.errors import SeatAlreadyOccupiedError
from domain.receipt import Receipt, Section
from repositories.receipt_repository import ReceiptRepository


class InMemoryReceiptRepository(ReceiptRepository):
    """Process-local receipt store."""

    def __init__(self) -> None:
        self._receipts: Dict[int, Receipt] = {}
        self._ids = count(1)
        self._lock = threading.Lock()

    def _holder(self, section: Section, seat_number: int) -> Optional[Receipt]:
        for receipt in self._receipts.values():
            if receipt.holds(section, seat_number):
                return receipt
        return None

    def count_by_section(self, section: Section) -> int:
        with self._lock:
            return sum(1 for r in self._receipts.values() if r.section == section)

    def list_occupied_seats(self, section: Section) -> List[int]:
        with self._lock:
            return sorted(r.seat_number for r in self._receipts.values() if r.section == section)

    def find_by_section_and_seat(self, section: Section, seat_number: int) -> Optional[Receipt]:
        with self._lock:
            return self._holder(section, seat_number)

    def add(self, receipt: Receipt) -> Receipt:
        with self._lock:
            holder = self._holder(receipt.section, receipt.seat_number)
            if holder is not None:
                raise SeatAlreadyOccupiedError(
                    receipt.section.value, receipt.seat_number, holder.receipt_id
                )
            saved = receipt.with_id(next(self._ids))
            self._receipts[saved.receipt_id] = saved
            return saved

    def get(self, receipt_id: int) -> Optional[Receipt]:
        with self._lock:
            return self._receipts.get(receipt_id)

    def update_seat(self, receipt_id: int, section: Section, seat_number: int) -> Optional[Receipt]:
        with self._lock:
            current = self._receipts.get(receipt_id)
            if current is None:
                return None
            holder = self._holder(section, seat_number)
            if holder is not None and holder.receipt_id != receipt_id:
                raise SeatAlreadyOccupiedError(section.value, seat_number, holder.receipt_id)
            updated = current.with_seat(section, seat_number)
            self._receipts[receipt_id] = updated
            return updated

    def delete(self, receipt_id: int) -> bool:
        with self._lock:
            return self._receipts.pop(receipt_id, None) is not None

    def list_by_section(self, section: Section) -> List[Receipt]:
        with self._lock:
            return sorted(
                (r for r in self._receipts.values() if r.section == section),
                key=lambda r: r.seat_number,
            )


__all__ = ["InMemoryReceiptRepository"]
