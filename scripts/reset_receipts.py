#!/usr/bin/env python3
"""
Reset receipts - delete every receipt so all seats are free again.

This is for development/testing purposes only.
NEVER run this in production!
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.receipt import Section
from repositories.client import get_supabase_client
from repositories.receipt_repository import ReceiptRepository, SupabaseReceiptRepository


def reset_receipts(repository: ReceiptRepository, dry_run: bool = False) -> int:
    """
    Delete all receipts in both sections.

    Returns:
        Number of receipts deleted (or that would be deleted on a dry run)
    """

    print("=" * 60)
    print("RESETTING RECEIPTS")
    print("=" * 60)

    receipts = [receipt for section in Section for receipt in repository.list_by_section(section)]
    print(f"\nCurrently booked seats: {len(receipts)}")

    if not receipts:
        print("No receipts to delete. All seats are already free.")
        return 0

    if dry_run:
        for receipt in receipts:
            print(f"  would delete receipt {receipt.receipt_id} ({receipt.section.value}{receipt.seat_number})")
        return len(receipts)

    deleted = 0
    for receipt in receipts:
        if repository.delete(receipt.receipt_id):
            deleted += 1

    remaining = sum(repository.count_by_section(section) for section in Section)
    if remaining == 0:
        print(f"[SUCCESS] All {deleted} receipts have been deleted!")
    else:
        print(f"[WARNING] {remaining} receipts still present")

    print("=" * 60)
    return deleted


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Delete every receipt (development only)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show what would be deleted
  python reset_receipts.py --dry-run

  # Delete everything
  python reset_receipts.py --yes
        """
    )
    parser.add_argument("--yes", action="store_true", help="Confirm deletion of all receipts")
    parser.add_argument("--dry-run", action="store_true", help="List receipts without deleting")
    args = parser.parse_args()

    if not args.yes and not args.dry_run:
        parser.error("refusing to delete without --yes (or use --dry-run)")

    reset_receipts(SupabaseReceiptRepository(get_supabase_client()), dry_run=args.dry_run)


if __name__ == "__main__":
    main()
