"""
Setup Database Indexes

Creates the unique indexes the stores depend on for atomic upserts.

Usage:
    python scripts/setup_indexes.py
    python scripts/setup_indexes.py --drop   # Drop existing and recreate
    python scripts/setup_indexes.py --list   # Just list existing indexes
"""
import argparse
import logging
import sys

from pymongo.errors import PyMongoError

from votematch.config import settings
from votematch.database import close_clients, get_sync_database, ping
from votematch.database.indexes import create_all_indexes_sync, list_existing_indexes_sync


def main():
    parser = argparse.ArgumentParser(description="Create MongoDB indexes for VoteMatch")
    parser.add_argument("--drop", action="store_true",
                        help="Drop existing indexes before creating new ones")
    parser.add_argument("--list", action="store_true",
                        help="List existing indexes only (don't create)")
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

    print("🔧 VoteMatch - Database Index Setup")
    print("=" * 60)

    db = get_sync_database()
    try:
        ping()
        print(f"✅ Connected to {settings.MONGODB_DATABASE}")

        if args.list:
            for collection, names in list_existing_indexes_sync(db).items():
                print(f"📁 {collection}: {', '.join(names) or '(none)'}")
        else:
            if args.drop:
                print("⚠️  Will drop existing indexes first!")
            created = create_all_indexes_sync(db, drop_existing=args.drop)
            print(f"\n✅ Index setup complete! ({created} indexes)")
    except PyMongoError as e:
        print(f"\n❌ Error: {e}")
        sys.exit(1)
    finally:
        close_clients()


if __name__ == "__main__":
    main()
