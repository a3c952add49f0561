"""
Receipt repository (persistence).

This module provides *only* persistence operations for the Receipt domain
entity. It contains no allocation rules; it only enforces the one persistence
constraint the schema carries: a (section, seat_number) slot is held by at
most one receipt.

`ReceiptRepository` is the interface the service depends on. Stores must be
swappable and return domain models.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Tuple

from postgrest.exceptions import APIError
from supabase import Client  # type: ignore[import-not-found]

from domain.errors import SeatAlreadyOccupiedError
from domain.receipt import Passenger, Receipt, Section, Station

logger = logging.getLogger(__name__)

# Supabase table name for receipts.
# Keep this aligned with sql/schema.sql.
DEFAULT_RECEIPTS_TABLE: str = "receipts"

# Postgres SQLSTATE for unique_violation.
_UNIQUE_VIOLATION: str = "23505"


class ReceiptRepository(ABC):
    """Interface for receipt persistence operations."""

    @abstractmethod
    def count_by_section(self, section: Section) -> int:
        """Return the number of receipts held in a section."""
        ...

    @abstractmethod
    def list_occupied_seats(self, section: Section) -> List[int]:
        """Return occupied seat numbers of a section, ascending."""
        ...

    @abstractmethod
    def find_by_section_and_seat(self, section: Section, seat_number: int) -> Optional[Receipt]:
        """Return the receipt holding a seat slot, or None if the slot is free."""
        ...

    @abstractmethod
    def add(self, receipt: Receipt) -> Receipt:
        """
        Persist a new receipt and return it with its assigned id.

        Raises:
            SeatAlreadyOccupiedError: If the receipt's slot is already held.
        """
        ...

    @abstractmethod
    def get(self, receipt_id: int) -> Optional[Receipt]:
        """Return a receipt by id, or None if not found."""
        ...

    @abstractmethod
    def update_seat(self, receipt_id: int, section: Section, seat_number: int) -> Optional[Receipt]:
        """
        Move a receipt to another slot; return the updated receipt, or None if it does not exist.

        Raises:
            SeatAlreadyOccupiedError: If the target slot is already held.
        """
        ...

    @abstractmethod
    def delete(self, receipt_id: int) -> bool:
        """Delete a receipt by id. Return False if it did not exist."""
        ...

    @abstractmethod
    def list_by_section(self, section: Section) -> List[Receipt]:
        """Return all receipts of a section ordered by seat number."""
        ...

    def exists(self, receipt_id: int) -> bool:
        return self.get(receipt_id) is not None

    def exists_by_section_and_seat(self, section: Section, seat_number: int) -> bool:
        return self.find_by_section_and_seat(section, seat_number) is not None


def _row_to_receipt(row: Mapping[str, Any]) -> Receipt:
    """Convert a Supabase row into a Receipt."""

    return Receipt(
        receipt_id=int(row["id"]),
        origin=Station(str(row["origin"])),
        destination=Station(str(row["destination"])),
        price=Decimal(str(row["price"])),
        passenger=Passenger(
            name=str(row["name"]),
            surname=str(row["surname"]),
            email=str(row["email"]),
        ),
        section=Section(str(row["section"])),
        seat_number=int(row["seat_number"]),
    )


def _receipt_to_payload(receipt: Receipt) -> dict[str, Any]:
    return {
        "origin": receipt.origin.value,
        "destination": receipt.destination.value,
        "price": str(receipt.price),
        "name": receipt.name,
        "surname": receipt.surname,
        "email": receipt.email,
        "section": receipt.section.value,
        "seat_number": receipt.seat_number,
    }


class SupabaseReceiptRepository(ReceiptRepository):
    """Postgres-backed receipt store using the Supabase client."""

    def __init__(self, client: Client, table: str = DEFAULT_RECEIPTS_TABLE) -> None:
        self._client = client
        self._table = table

    def _execute(self, query: Any, action: str, *, slot: Optional[Tuple[Section, int]] = None) -> Any:
        """
        Run a PostgREST query and normalize its failure modes.

        A unique violation on a write targeting `slot` surfaces as
        SeatAlreadyOccupiedError; every other failure as RuntimeError.
        """

        try:
            response = query.execute()
        except APIError as e:
            if slot is not None and str(getattr(e, "code", None)) == _UNIQUE_VIOLATION:
                section, seat_number = slot
                logger.warning("Unique violation on seat %s%s during %s", section.value, seat_number, action)
                raise SeatAlreadyOccupiedError(section.value, seat_number) from None
            raise RuntimeError(f"Failed to {action}: {e}") from e

        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to {action}: {error}")
        return response

    def count_by_section(self, section: Section) -> int:
        response = self._execute(
            self._client.table(self._table)
            .select("id", count="exact")
            .eq("section", section.value),
            "count receipts",
        )
        return getattr(response, "count", 0) or 0

    def list_occupied_seats(self, section: Section) -> List[int]:
        response = self._execute(
            self._client.table(self._table)
            .select("seat_number")
            .eq("section", section.value)
            .order("seat_number"),
            "list occupied seats",
        )
        rows = getattr(response, "data", None) or []
        return [int(row["seat_number"]) for row in rows]

    def find_by_section_and_seat(self, section: Section, seat_number: int) -> Optional[Receipt]:
        response = self._execute(
            self._client.table(self._table)
            .select("*")
            .eq("section", section.value)
            .eq("seat_number", seat_number)
            .limit(1),
            "find receipt by seat",
        )
        rows = getattr(response, "data", None) or []
        return _row_to_receipt(rows[0]) if rows else None

    def add(self, receipt: Receipt) -> Receipt:
        response = self._execute(
            self._client.table(self._table).insert(_receipt_to_payload(receipt)),
            "create receipt",
            slot=(receipt.section, receipt.seat_number),
        )
        rows = getattr(response, "data", None) or []
        if not rows:
            raise RuntimeError("Failed to create receipt: no row returned")
        return _row_to_receipt(rows[0])

    def get(self, receipt_id: int) -> Optional[Receipt]:
        response = self._execute(
            self._client.table(self._table)
            .select("*")
            .eq("id", receipt_id)
            .limit(1),
            "get receipt",
        )
        rows = getattr(response, "data", None) or []
        return _row_to_receipt(rows[0]) if rows else None

    def update_seat(self, receipt_id: int, section: Section, seat_number: int) -> Optional[Receipt]:
        response = self._execute(
            self._client.table(self._table)
            .update({"section": section.value, "seat_number": seat_number})
            .eq("id", receipt_id),
            "update receipt seat",
            slot=(section, seat_number),
        )
        rows = getattr(response, "data", None) or []
        return _row_to_receipt(rows[0]) if rows else None

    def delete(self, receipt_id: int) -> bool:
        response = self._execute(
            self._client.table(self._table).delete().eq("id", receipt_id),
            "delete receipt",
        )
        rows = getattr(response, "data", None) or []
        return bool(rows)

    def list_by_section(self, section: Section) -> List[Receipt]:
        response = self._execute(
            self._client.table(self._table)
            .select("*")
            .eq("section", section.value)
            .order("seat_number"),
            "list receipts by section",
        )
        rows = getattr(response, "data", None) or []
        return [_row_to_receipt(row) for row in rows]


__all__ = [
    "DEFAULT_RECEIPTS_TABLE",
    "ReceiptRepository",
    "SupabaseReceiptRepository",
]
