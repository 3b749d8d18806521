"""
MongoDB clients and store construction.

Scripts build their stores with create_stores() and call close_clients()
when they finish. Index setup works on the synchronous database, since it
runs once from the command line and never inside an event loop.
"""
from typing import Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import MongoClient
from pymongo.database import Database

from votematch.config.settings import settings
from votematch.database.mongo import MongoPreferenceStore, MongoVoteStore

# Created on first use, one of each per process
_sync_client: Optional[MongoClient] = None
_async_client: Optional[AsyncIOMotorClient] = None


def get_sync_database() -> Database:
    """pymongo database for index setup and health checks."""
    global _sync_client
    if _sync_client is None:
        _sync_client = MongoClient(settings.MONGODB_URI)
    return _sync_client[settings.MONGODB_DATABASE]


def get_async_database() -> AsyncIOMotorDatabase:
    """motor database backing the stores."""
    global _async_client
    if _async_client is None:
        _async_client = AsyncIOMotorClient(settings.MONGODB_URI)
    return _async_client[settings.MONGODB_DATABASE]


def create_stores(
    db: Optional[AsyncIOMotorDatabase] = None
) -> Tuple[MongoVoteStore, MongoPreferenceStore]:
    """
    Vote and preference stores sharing one database.

    Args:
        db: Database to use (default: the configured motor database)

    Returns:
        (vote_store, preference_store)
    """
    if db is None:
        db = get_async_database()
    return MongoVoteStore(db), MongoPreferenceStore(db)


def close_clients() -> None:
    """Close whichever clients were opened. Safe to call more than once."""
    global _sync_client, _async_client
    if _sync_client is not None:
        _sync_client.close()
        _sync_client = None
    if _async_client is not None:
        _async_client.close()
        _async_client = None


def ping() -> bool:
    """True if MongoDB answered; driver errors propagate."""
    result = get_sync_database().client.admin.command("ping")
    return result.get("ok") == 1.0
