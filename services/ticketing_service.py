"""
Ticketing service for train seat bookings.

Handles:
- Purchase: least-occupied section, lowest free seat, fixed trip and price
- Seat reassignment with slot-uniqueness checks
- Receipt lookup, section listing and deletion

Writes (purchase, seat update) run under a per-service lock so the
read-decide-write sequence is serialized within the process. Across processes
the store's (section, seat_number) uniqueness constraint rejects the loser of
a race with SeatAlreadyOccupiedError.
"""

from __future__ import annotations

import logging
import threading
from typing import List

from domain.errors import (
    NoAvailableSeatsError,
    NoReceiptsFoundError,
    ReceiptNotFoundByIdError,
    ReceiptNotFoundError,
    SeatAlreadyOccupiedError,
)
from domain.receipt import Passenger, Receipt, Section, UserSeat, require_seat_number
from domain.seat_allocation import select_seat, select_section
from repositories.receipt_repository import ReceiptRepository

logger = logging.getLogger(__name__)


class TicketingService:
    """Service for ticket purchase and receipt management."""

    def __init__(self, repository: ReceiptRepository) -> None:
        self._repository = repository
        self._write_lock = threading.Lock()

    def purchase_ticket(self, passenger: Passenger) -> Receipt:
        """
        Purchase a ticket and return the persisted receipt.

        Picks the section with the fewest receipts (see domain.seat_allocation)
        and the first free seat within it.

        Raises:
            NoAvailableSeatsError: If the selected section is full.
        """

        logger.info("Attempting ticket purchase")
        with self._write_lock:
            count_a =self._repository.count_by_section(Section.A)
            count_b = self._repository.count_by_section(Section.B)
            section = select_section(count_a, count_b)
            logger.info("Section %s selected (A=%d, B=%d)", section.value, count_a, count_b)

            seat_number = select_seat(self._repository.list_occupied_seats(section))
            if seat_number is None:
                logger.warning("No seats left in section %s", section.value)
                raise NoAvailableSeatsError(section.value)

            receipt = self._repository.add(Receipt.issue(passenger, section, seat_number))

        logger.info(
            "Receipt %s saved for seat %s%d", receipt.receipt_id, section.value, seat_number
        )
        return receipt

    def delete_receipt(self, receipt_id: int) -> None:
        """
        Delete a receipt permanently.

        Raises:
            ReceiptNotFoundError: If no receipt has this id.
        """

        logger.info("Attempting to delete receipt %s", receipt_id)
        if not self._repository.delete(receipt_id):
            logger.warning("Receipt %s not found", receipt_id)
            raise ReceiptNotFoundError(receipt_id)
        logger.info("Receipt %s deleted", receipt_id)

    def update_seat(self, receipt_id: int, section: Section, seat_number: int) -> Receipt:
        """
        Move a receipt to another seat. Only section and seat number change.

        Moving a receipt to the seat it already holds is a no-op.

        Raises:
            ReceiptNotFoundError: If no receipt has this id.
            SeatAlreadyOccupiedError: If another receipt holds the target seat.
        """

        require_seat_number(seat_number)
        logger.info(
            "Attempting to move receipt %s to seat %s%d", receipt_id, section.value, seat_number
        )

        with self._write_lock:
            current = self._repository.get(receipt_id)
            if current is None:
                logger.warning("Receipt %s not found", receipt_id)
                raise ReceiptNotFoundError(receipt_id)

            if current.holds(section, seat_number):
                logger.info("Receipt %s already holds seat %s%d", receipt_id, section.value, seat_number)
                return current

            holder = self._repository.find_by_section_and_seat(section, seat_number)
            if holder is not None:
                logger.warning(
                    "Seat %s%d already occupied by receipt %s",
                    section.value,
                    seat_number,
                    holder.receipt_id,
                )
                raise SeatAlreadyOccupiedError(section.value, seat_number, holder.receipt_id)

            updated = self._repository.update_seat(receipt_id, section, seat_number)
            if updated is None:
                # Deleted between the read and the write.
                logger.warning("Receipt %s not found", receipt_id)
                raise ReceiptNotFoundError(receipt_id)

        logger.info("Receipt %s moved to seat %s%d", receipt_id, section.value, seat_number)
        return updated

    def get_receipts_by_section(self, section: Section) -> List[UserSeat]:
        """
        Return the passengers seated in a section.

        Raises:
            NoReceiptsFoundError: If the section has no receipts.
        """

        logger.info("Fetching receipts for section %s", section.value)
        receipts = self._repository.list_by_section(section)
        if not receipts:
            logger.warning("No receipts found for section %s", section.value)
            raise NoReceiptsFoundError(section.value)
        logger.info("Fetched %d receipts for section %s", len(receipts), section.value)
        return [receipt.to_user_seat() for receipt in receipts]

    def get_receipt_by_id(self, receipt_id: int) -> Receipt:
        """
        Return a receipt by id.

        Raises:
            ReceiptNotFoundByIdError: If no receipt has this id.
        """

        logger.info("Fetching receipt %s", receipt_id)
        receipt = self._repository.get(receipt_id)
        if receipt is None:
            logger.warning("Receipt %s not found", receipt_id)
            raise ReceiptNotFoundByIdError(receipt_id)
        logger.info("Receipt %s fetched", receipt_id)
        return receipt


__all__ = ["TicketingService"]
