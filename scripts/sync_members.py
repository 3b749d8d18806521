"""
Sync current members of Congress into MongoDB.

Usage:
    python scripts/sync_members.py
    python scripts/sync_members.py --congress 118 --state VT --chamber senate
"""
import argparse
import asyncio
import logging
import sys

from votematch.config import settings
from votematch.config.constants import CURRENT_CONGRESS
from votematch.database import close_clients, create_stores
from votematch.ingestion import CongressMembersIngester


async def sync_members(congress: int, state: str = None, chamber: str = None) -> dict:
    """Run the members ingester against the configured database."""
    print(f"🇺🇸 Syncing members of the {congress}th Congress...")
    print("=" * 60)

    store, _ = create_stores()
    ingester = CongressMembersIngester(
        store,
        congress=congress,
        state_filter=state,
        chamber_filter=chamber,
    )
    try:
        stats = await ingester.run_full_sync()
    finally:
        close_clients()

    print("\n✅ Sync Complete!")
    print("=" * 60)
    print(f"   • Processed: {stats['processed']}")
    print(f"   • Inserted:  {stats['inserted']} new members")
    print(f"   • Updated:   {stats['updated']} existing members")
    print(f"   • Errors:    {stats['errors']}")
    print(f"   • Duration:  {stats['completed_at'] - stats['started_at']}")

    if stats['errors'] > 0:
        print("\n⚠️  Some errors occurred. Check logs for details.")

    return stats


def main():
    parser = argparse.ArgumentParser(
        description="Sync current members of Congress from Congress.gov API"
    )
    parser.add_argument("--congress", type=int, default=CURRENT_CONGRESS,
                        help=f"Congress number (default: {CURRENT_CONGRESS})")
    parser.add_argument("--state", help="Only this 2-letter state code")
    parser.add_argument("--chamber", choices=["house", "senate"], help="Only this chamber")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
        format=settings.LOG_FORMAT
    )

    if not settings.CONGRESS_GOV_API_KEY:
        print("❌ CONGRESS_GOV_API_KEY is not set")
        sys.exit(1)

    try:
        stats = asyncio.run(sync_members(args.congress, args.state, args.chamber))
    except KeyboardInterrupt:
        print("\n\n⚠️  Sync interrupted by user")
        sys.exit(1)

    sys.exit(1 if stats['errors'] > 0 else 0)


if __name__ == "__main__":
    main()
