"""
Check seat status - how many seats are taken in each section, and which are free.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.receipt import SEATS_PER_SECTION, Section
from domain.seat_allocation import select_seat, select_section
from repositories.client import get_supabase_client
from repositories.receipt_repository import ReceiptRepository, SupabaseReceiptRepository


def check_seat_status(repository: ReceiptRepository) -> None:
    """Print occupancy per section and where the next purchase would land."""

    counts = {}

    print("=" * 50)
    print("SEAT STATUS")
    print("=" * 50)

    for section in Section:
        occupied = repository.list_occupied_seats(section)
        counts[section] = len(occupied)
        free = [seat for seat in range(1, SEATS_PER_SECTION + 1) if seat not in occupied]

        print(f"Section {section.value}: {len(occupied)}/{SEATS_PER_SECTION} occupied")
        print(f"  Free seats: {', '.join(str(seat) for seat in free) if free else 'none'}")

    print("-" * 50)

    next_section = select_section(counts[Section.A], counts[Section.B])
    next_seat = select_seat(repository.list_occupied_seats(next_section))
    if next_seat is None:
        print(f"Next purchase would fail: section {next_section.value} is full")
    else:
        print(f"Next purchase would get: section {next_section.value}, seat {next_seat}")

    print("=" * 50)


if __name__ == "__main__":
    check_seat_status(SupabaseReceiptRepository(get_supabase_client()))
