"""
In-memory stores.

Dict-backed implementations of the store interfaces. Each instance owns its
own maps, so tests build a fresh store per case and nothing leaks between
them. A lock guards every write; critical sections never await, so the same
store is safe from several event loops or threads.
"""
import logging
import threading
from typing import Dict, List, Optional, Tuple

from votematch.database.base import PreferenceStore, VoteStore
from votematch.models import (
    MemberVote,
    RecentRepresentative,
    Representative,
    UserPreference,
    Vote,
)

logger = logging.getLogger(__name__)


class InMemoryVoteStore(VoteStore):

    def __init__(self):
        self._lock = threading.Lock()
        self._representatives: Dict[str, Representative] = {}
        self._votes: Dict[str, Vote] = {}
        # member_id -> vote_id -> position
        self._positions: Dict[str, Dict[str, MemberVote]] = {}

    async def upsert_representative(self, representative: Representative) -> bool:
        with self._lock:
            is_new = representative.member_id not in self._representatives
            self._representatives[representative.member_id] = representative.model_copy()
        return is_new

    async def get_representative(self, member_id: str) -> Optional[Representative]:
        representative = self._representatives.get(member_id)
        return representative.model_copy() if representative else None

    async def find_representatives(
        self,
        state: Optional[str] = None,
        chamber: Optional[str] = None,
        name: Optional[str] = None
    ) -> List[Representative]:
        name_words = [word.lower() for word in name.split()] if name else []

        matches = []
        for rep in list(self._representatives.values()):
            if state and rep.state != state.upper():
                continue
            if chamber and rep.chamber.value != chamber.lower():
                continue
            if name_words and not all(word in rep.full_name.lower() for word in name_words):
                continue
            matches.append(rep.model_copy())

        return sorted(matches, key=lambda rep: (rep.last_name, rep.first_name))

    async def upsert_vote(self, vote: Vote) -> bool:
        with self._lock:
            is_new = vote.vote_id not in self._votes
            self._votes[vote.vote_id] = vote.model_copy()
        return is_new

    async def get_vote(self, vote_id: str) -> Optional[Vote]:
        vote = self._votes.get(vote_id)
        return vote.model_copy() if vote else None

    async def list_votes(self) -> List[Vote]:
        return [vote.model_copy() for vote in list(self._votes.values())]

    async def upsert_position(self, member_vote: MemberVote) -> bool:
        with self._lock:
            member_positions = self._positions.setdefault(member_vote.member_id, {})
            is_new = member_vote.vote_id not in member_positions
            member_positions[member_vote.vote_id] = member_vote.model_copy()
        return is_new

    async def get_positions(self, member_id: str) -> List[MemberVote]:
        positions = self._positions.get(member_id, {})
        return [position.model_copy() for position in list(positions.values())]


class InMemoryPreferenceStore(PreferenceStore):

    def __init__(self):
        self._lock = threading.Lock()
        self._preferences: Dict[Tuple[str, str], UserPreference] = {}
        self._views: Dict[Tuple[str, str], RecentRepresentative] = {}

    async def upsert_preference(self, preference: UserPreference) -> UserPreference:
        key = (preference.user_id, preference.vote_id)
        stored = preference.model_copy()
        with self._lock:
            replaced = key in self._preferences
            self._preferences[key] = stored
        logger.debug(f"{'Updated' if replaced else 'Created'} preference {key}")
        return stored.model_copy()

    async def get_preference(self, user_id: str, vote_id: str) -> Optional[UserPreference]:
        preference = self._preferences.get((user_id, vote_id))
        return preference.model_copy() if preference else None

    async def get_preferences(self, user_id: str) -> List[UserPreference]:
        return [
            preference.model_copy()
            for (owner, _), preference in list(self._preferences.items())
            if owner == user_id
        ]

    async def delete_preference(self, user_id: str, vote_id: str) -> bool:
        with self._lock:
            return self._preferences.pop((user_id, vote_id), None) is not None

    async def record_view(self, view: RecentRepresentative, limit: int) -> RecentRepresentative:
        with self._lock:
            self._views[(view.user_id, view.member_id)] = view.model_copy()

            user_views = sorted(
                (v for (owner, _), v in self._views.items() if owner == view.user_id),
                key=lambda v: v.viewed_at,
                reverse=True,
            )
            for stale in user_views[limit:]:
                del self._views[(stale.user_id, stale.member_id)]

        return view.model_copy()

    async def get_recent_representatives(self, user_id: str, limit: int) -> List[RecentRepresentative]:
        user_views = [v for (owner, _), v in list(self._views.items()) if owner == user_id]
        user_views.sort(key=lambda v: v.viewed_at, reverse=True)
        return [v.model_copy() for v in user_views[:limit]]
