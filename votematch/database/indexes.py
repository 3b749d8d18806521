"""
Database Indexes Module

Creates the MongoDB indexes the stores rely on. The unique indexes are what
make each upsert safe against concurrent writers: without them two racing
upserts on the same key could insert two documents.

Usage:
    # From command line
    python scripts/setup_indexes.py

    # From async Python
    from votematch.database.indexes import create_all_indexes_async
    await create_all_indexes_async(db)
"""
import logging
from typing import Dict, List, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from votematch.config.constants import (
    COLLECTION_MEMBER_VOTES,
    COLLECTION_RECENT_REPRESENTATIVES,
    COLLECTION_REPRESENTATIVES,
    COLLECTION_USER_PREFERENCES,
    COLLECTION_VOTES,
)

logger = logging.getLogger(__name__)


# collection -> [(keys, options)]
INDEX_SPECS: Dict[str, List[Tuple[list, dict]]] = {
    COLLECTION_REPRESENTATIVES: [
        ([("member_id", ASCENDING)], {"unique": True, "name": "idx_member_id"}),
        (
            [("state", ASCENDING), ("chamber", ASCENDING)],
            {"name": "idx_state_chamber"},
        ),
        (
            [("last_name", ASCENDING), ("first_name", ASCENDING)],
            {"name": "idx_name_sort"},
        ),
    ],
    COLLECTION_VOTES: [
        ([("vote_id", ASCENDING)], {"unique": True, "name": "idx_vote_id"}),
        ([("bill_id", ASCENDING)], {"name": "idx_bill_id"}),
        ([("vote_date", DESCENDING)], {"name": "idx_vote_date"}),
    ],
    COLLECTION_MEMBER_VOTES: [
        (
            [("member_id", ASCENDING), ("vote_id", ASCENDING)],
            {"unique": True, "name": "idx_member_vote_unique"},
        ),
        ([("vote_id", ASCENDING)], {"name": "idx_vote_id"}),
    ],
    COLLECTION_USER_PREFERENCES: [
        (
            [("user_id", ASCENDING), ("vote_id", ASCENDING)],
            {"unique": True, "name": "idx_user_vote_unique"},
        ),
    ],
    COLLECTION_RECENT_REPRESENTATIVES: [
        (
            [("user_id", ASCENDING), ("member_id", ASCENDING)],
            {"unique": True, "name": "idx_user_member_unique"},
        ),
        (
            [("user_id", ASCENDING), ("viewed_at", DESCENDING)],
            {"name": "idx_user_viewed_at"},
        ),
    ],
}


async def create_all_indexes_async(db: AsyncIOMotorDatabase, drop_existing: bool = False) -> int:
    """
    Create every index in INDEX_SPECS.

    Args:
        db: Motor database
        drop_existing: Drop all non-_id indexes first

    Returns:
        Number of indexes created
    """
    created = 0
    for collection_name, specs in INDEX_SPECS.items():
        collection = db[collection_name]
        if drop_existing:
            logger.warning(f"Dropping indexes on {collection_name}")
            await collection.drop_indexes()

        logger.info(f"Creating {collection_name} indexes...")
        for keys, options in specs:
            await collection.create_index(keys, **options)
            created += 1

    logger.info(f"✅ {created} indexes created")
    return created


def create_all_indexes_sync(db: Database, drop_existing: bool = False) -> int:
    """Synchronous version of create_all_indexes_async."""
    created = 0
    for collection_name, specs in INDEX_SPECS.items():
        collection = db[collection_name]
        if drop_existing:
            logger.warning(f"Dropping indexes on {collection_name}")
            collection.drop_indexes()

        logger.info(f"Creating {collection_name} indexes...")
        for keys, options in specs:
            collection.create_index(keys, **options)
            created += 1

    logger.info(f"✅ {created} indexes created")
    return created


def list_existing_indexes_sync(db: Database) -> Dict[str, List[str]]:
    """Index names per collection, for the --list flag of the setup script."""
    return {
        name: [index["name"] for index in db[name].list_indexes()]
        for name in INDEX_SPECS
    }
