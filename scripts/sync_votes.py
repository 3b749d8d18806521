"""
Sync House roll call votes and member positions into MongoDB.

Usage:
    python scripts/sync_votes.py
    python scripts/sync_votes.py --congress 118 --session 1 --limit 20
"""
import argparse
import asyncio
import logging
import sys

from votematch.config import settings
from votematch.config.constants import CURRENT_CONGRESS
from votematch.database import close_clients, create_stores
from votematch.ingestion import HouseVotesIngester


async def sync_votes(congress: int, session: int = None, limit: int = None) -> dict:
    """Run the House votes ingester against the configured database."""
    print(f"🗳️  Syncing House votes for the {congress}th Congress...")
    print("=" * 60)

    store, _ = create_stores()
    ingester = HouseVotesIngester(store, congress=congress)
    try:
        stats = await ingester.run(session=session, limit=limit)
    finally:
        close_clients()

    print("\n✅ Sync Complete!")
    print("=" * 60)
    print(f"   • Processed: {stats['processed']}")
    print(f"   • Inserted:  {stats['inserted']} new votes")
    print(f"   • Updated:   {stats['updated']} existing votes")
    print(f"   • Errors:    {stats['errors']}")
    print(f"   • Duration:  {stats['completed_at'] - stats['started_at']}")

    return stats


def main():
    parser = argparse.ArgumentParser(description="Sync House roll call votes from Congress.gov")
    parser.add_argument("--congress", type=int, default=CURRENT_CONGRESS,
                        help=f"Congress number (default: {CURRENT_CONGRESS})")
    parser.add_argument("--session", type=int, choices=[1, 2], help="Only this session")
    parser.add_argument("--limit", type=int, help="Stop after this many votes")
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
        stats = asyncio.run(sync_votes(args.congress, args.session, args.limit))
    except KeyboardInterrupt:
        print("\n\n⚠️  Sync interrupted by user")
        sys.exit(1)

    sys.exit(1 if stats['errors'] > 0 else 0)


if __name__ == "__main__":
    main()
