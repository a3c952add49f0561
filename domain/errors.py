"""
Domain: error taxonomy for ticketing operations.

Each error carries a stable machine-readable code and a user-safe message.
The HTTP layer maps codes to status codes; nothing here knows about HTTP.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    NO_AVAILABLE_SEATS = "NO_AVAILABLE_SEATS"
    RECEIPT_NOT_FOUND = "RECEIPT_NOT_FOUND"
    RECEIPT_NOT_FOUND_BY_ID = "RECEIPT_NOT_FOUND_BY_ID"
    SEAT_ALREADY_OCCUPIED = "SEAT_ALREADY_OCCUPIED"
    NO_RECEIPTS_FOUND = "NO_RECEIPTS_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNEXPECTED = "UNEXPECTED"


class TicketingError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode = ErrorCode.UNEXPECTED

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NoAvailableSeatsError(TicketingError):
    """Raised when the selected section has no free seat left."""

    code = ErrorCode.NO_AVAILABLE_SEATS

    def __init__(self, section: str) -> None:
        super().__init__("No seats available on the train")
        self.section = section


class ReceiptNotFoundError(TicketingError):
    """Raised when a receipt targeted for delete or seat update does not exist."""

    code = ErrorCode.RECEIPT_NOT_FOUND

    def __init__(self, receipt_id: int) -> None:
        super().__init__("Receipt not found")
        self.receipt_id = receipt_id


class ReceiptNotFoundByIdError(TicketingError):
    """Raised when a receipt lookup by id finds nothing."""

    code = ErrorCode.RECEIPT_NOT_FOUND_BY_ID

    def __init__(self, receipt_id: int) -> None:
        super().__init__(f"No receipt found with id {receipt_id}")
        self.receipt_id = receipt_id


class SeatAlreadyOccupiedError(TicketingError):
    """Raised when a (section, seat_number) slot is already held by another receipt."""

    code = ErrorCode.SEAT_ALREADY_OCCUPIED

    def __init__(self, section: str, seat_number: int, holder_id: Optional[int] = None) -> None:
        super().__init__(f"Seat {seat_number} in section {section} is already occupied")
        self.section = section
        self.seat_number = seat_number
        self.holder_id = holder_id


class NoReceiptsFoundError(TicketingError):
    """Raised when a section listing has no receipts."""

    code = ErrorCode.NO_RECEIPTS_FOUND

    def __init__(self, section: str) -> None:
        super().__init__(f"No receipts found for section {section}")
        self.section = section


__all__ = [
    "ErrorCode",
    "TicketingError",
    "NoAvailableSeatsError",
    "ReceiptNotFoundError",
    "ReceiptNotFoundByIdError",
    "SeatAlreadyOccupiedError",
    "NoReceiptsFoundError",
]
