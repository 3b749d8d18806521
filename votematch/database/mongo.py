"""
MongoDB stores (motor).

Each write is one update_one / find_one_and_update with upsert=True against
a collection carrying a unique index on the record's key (see
votematch.database.indexes), so two writers racing on the same key can never
leave two documents behind. MongoDB may reject the losing upsert of such a
race with DuplicateKeyError; that write is retried once and then lands as a
plain update.

Driver failures, and stored documents that no longer validate against the
models, surface as StoreUnavailableError.
"""
import logging
import re
from contextlib import contextmanager
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError as PydanticValidationError
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from votematch.config.constants import (
    COLLECTION_MEMBER_VOTES,
    COLLECTION_RECENT_REPRESENTATIVES,
    COLLECTION_REPRESENTATIVES,
    COLLECTION_USER_PREFERENCES,
    COLLECTION_VOTES,
)
from votematch.database.base import PreferenceStore, VoteStore
from votematch.errors import StoreUnavailableError
from votematch.models import (
    MemberVote,
    RecentRepresentative,
    Representative,
    UserPreference,
    Vote,
)

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str):
    """Re-raise driver failures as StoreUnavailableError."""
    try:
        yield
    except PyMongoError as e:
        logger.error(f"MongoDB {operation} failed: {e}")
        raise StoreUnavailableError(f"{operation} failed: {e}") from e


def _to_document(model, date_fields=(), exclude=None) -> Dict[str, Any]:
    """Dump a model for MongoDB, which has no date-only or enum types."""
    data = model.model_dump(exclude=exclude)
    for field, value in data.items():
        if isinstance(value, Enum):
            data[field] = value.value
    for field in date_fields:
        value = data.get(field)
        if isinstance(value, date) and not isinstance(value, datetime):
            data[field] = datetime.combine(value, datetime.min.time())
    return data


def _from_document(doc: Dict[str, Any], date_fields=()) -> Dict[str, Any]:
    """Undo _to_document: strip _id and turn stored datetimes back into dates."""
    data = {k: v for k, v in doc.items() if k != "_id"}
    for field in date_fields:
        value = data.get(field)
        if isinstance(value, datetime):
            data[field] = value.date()
    return data


def _to_model(model_cls, doc: Dict[str, Any], date_fields=()):
    """
    Build a model from a stored document.

    A document that no longer validates (say, an importance above a since
    lowered IMPORTANCE_SCALE_MAX) is reported as StoreUnavailableError.
    """
    try:
        return model_cls(**_from_document(doc, date_fields))
    except PydanticValidationError as e:
        logger.error(f"Stored {model_cls.__name__} document {doc.get('_id')} is invalid: {e}")
        raise StoreUnavailableError(
            f"Stored {model_cls.__name__} document no longer validates: {e}"
        ) from e


async def _atomic_upsert(collection, key: Dict[str, Any], data: Dict[str, Any]) -> bool:
    """Upsert one document by key. True if it was inserted."""
    try:
        result = await collection.update_one(key, {"$set": data}, upsert=True)
    except DuplicateKeyError:
        # Lost an insert race on the unique index; the document exists now.
        result = await collection.update_one(key, {"$set": data}, upsert=True)
    return result.upserted_id is not None


class MongoVoteStore(VoteStore):
    """Vote store over the representatives, votes and member_votes collections."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.representatives = db[COLLECTION_REPRESENTATIVES]
        self.votes = db[COLLECTION_VOTES]
        self.member_votes = db[COLLECTION_MEMBER_VOTES]

    async def upsert_representative(self, representative: Representative) -> bool:
        data = _to_document(representative, date_fields=("office_start",))
        with _store_errors("upsert_representative"):
            return await _atomic_upsert(
                self.representatives,
                {"member_id": representative.member_id},
                data,
            )

    async def get_representative(self, member_id: str) -> Optional[Representative]:
        with _store_errors("get_representative"):
            doc = await self.representatives.find_one({"member_id": member_id})
        if doc is None:
            return None
        return _to_model(Representative, doc, date_fields=("office_start",))

    async def find_representatives(
        self,
        state: Optional[str] = None,
        chamber: Optional[str] = None,
        name: Optional[str] = None
    ) -> List[Representative]:
        query: Dict[str, Any] = {}

        if name:
            # Every word must appear: "Terri Sewell" matches "Terri A. Sewell"
            query["$and"] = [
                {"full_name": re.compile(re.escape(word), re.IGNORECASE)}
                for word in name.split()
            ]
        if state:
            query["state"] = state.upper()
        if chamber:
            query["chamber"] = chamber.lower()

        logger.debug(f"Searching representatives with query: {query}")

        with _store_errors("find_representatives"):
            cursor = self.representatives.find(query).sort(
                [("last_name", ASCENDING), ("first_name", ASCENDING)]
            )
            docs = await cursor.to_list(length=None)

        return [_to_model(Representative, doc, date_fields=("office_start",)) for doc in docs]

    async def upsert_vote(self, vote: Vote) -> bool:
        data = _to_document(vote, date_fields=("vote_date",))
        with _store_errors("upsert_vote"):
            return await _atomic_upsert(self.votes, {"vote_id": vote.vote_id}, data)

    async def get_vote(self, vote_id: str) -> Optional[Vote]:
        with _store_errors("get_vote"):
            doc = await self.votes.find_one({"vote_id": vote_id})
        if doc is None:
            return None
        return _to_model(Vote, doc, date_fields=("vote_date",))

    async def get_votes(self, vote_ids: Iterable[str]) -> Dict[str, Vote]:
        ids = list(set(vote_ids))
        if not ids:
            return {}
        with _store_errors("get_votes"):
            docs = await self.votes.find({"vote_id": {"$in": ids}}).to_list(length=None)
        votes = [_to_model(Vote, doc, date_fields=("vote_date",)) for doc in docs]
        return {vote.vote_id: vote for vote in votes}

    async def list_votes(self) -> List[Vote]:
        with _store_errors("list_votes"):
            docs = await self.votes.find({}).to_list(length=None)
        return [_to_model(Vote, doc, date_fields=("vote_date",)) for doc in docs]

    async def upsert_position(self, member_vote: MemberVote) -> bool:
        data = _to_document(member_vote)
        with _store_errors("upsert_position"):
            return await _atomic_upsert(
                self.member_votes,
                {"member_id": member_vote.member_id, "vote_id": member_vote.vote_id},
                data,
            )

    async def get_positions(self, member_id: str) -> List[MemberVote]:
        with _store_errors("get_positions"):
            docs = await self.member_votes.find({"member_id": member_id}).to_list(length=None)
        return [_to_model(MemberVote, doc) for doc in docs]


class MongoPreferenceStore(PreferenceStore):
    """Preference store over the user_preferences and recent_representatives collections."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.preferences = db[COLLECTION_USER_PREFERENCES]
        self.recent = db[COLLECTION_RECENT_REPRESENTATIVES]

    async def upsert_preference(self, preference: UserPreference) -> UserPreference:
        key = {"user_id": preference.user_id, "vote_id": preference.vote_id}
        data = _to_document(preference, exclude={"tier"})

        with _store_errors("upsert_preference"):
            try:
                doc = await self.preferences.find_one_and_update(
                    key,
                    {"$set": data},
                    upsert=True,
                    return_document=ReturnDocument.AFTER,
                )
            except DuplicateKeyError:
                doc = await self.preferences.find_one_and_update(
                    key,
                    {"$set": data},
                    upsert=True,
                    return_document=ReturnDocument.AFTER,
                )

        return _to_model(UserPreference, doc)

    async def get_preference(self, user_id: str, vote_id: str) -> Optional[UserPreference]:
        with _store_errors("get_preference"):
            doc = await self.preferences.find_one({"user_id": user_id, "vote_id": vote_id})
        return _to_model(UserPreference, doc) if doc else None

    async def get_preferences(self, user_id: str) -> List[UserPreference]:
        with _store_errors("get_preferences"):
            docs = await self.preferences.find({"user_id": user_id}).to_list(length=None)
        return [_to_model(UserPreference, doc) for doc in docs]

    async def delete_preference(self, user_id: str, vote_id: str) -> bool:
        with _store_errors("delete_preference"):
            result = await self.preferences.delete_one({"user_id": user_id, "vote_id": vote_id})
        return result.deleted_count > 0

    async def record_view(self, view: RecentRepresentative, limit: int) -> RecentRepresentative:
        with _store_errors("record_view"):
            await _atomic_upsert(
                self.recent,
                {"user_id": view.user_id, "member_id": view.member_id},
                _to_document(view),
            )

            # Trim everything past the newest `limit` views
            stale = await (
                self.recent.find({"user_id": view.user_id}, {"_id": 1})
                .sort("viewed_at", DESCENDING)
                .skip(limit)
                .to_list(length=None)
            )
            if stale:
                await self.recent.delete_many({"_id": {"$in": [doc["_id"] for doc in stale]}})

        return view

    async def get_recent_representatives(self, user_id: str, limit: int) -> List[RecentRepresentative]:
        with _store_errors("get_recent_representatives"):
            docs = await (
                self.recent.find({"user_id": user_id})
                .sort("viewed_at", DESCENDING)
                .limit(limit)
                .to_list(length=None)
            )
        return [_to_model(RecentRepresentative, doc) for doc in docs]
