"""Database module - store interfaces, implementations and connections."""

from votematch.database.base import PreferenceStore, VoteStore
from votematch.database.memory import InMemoryPreferenceStore, InMemoryVoteStore
from votematch.database.mongo import MongoPreferenceStore, MongoVoteStore
from votematch.database.connection import (
    close_clients,
    create_stores,
    get_async_database,
    get_sync_database,
    ping,
)

__all__ = [
    "PreferenceStore",
    "VoteStore",
    "InMemoryPreferenceStore",
    "InMemoryVoteStore",
    "MongoPreferenceStore",
    "MongoVoteStore",
    "close_clients",
    "create_stores",
    "get_async_database",
    "get_sync_database",
    "ping",
]
