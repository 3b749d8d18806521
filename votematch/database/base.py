"""
Store interfaces.

The engine and services only ever talk to these two abstractions, so the
backing engine (in-memory dicts for tests, MongoDB in production) is chosen
by whoever constructs the store and passes it in.

Both stores guarantee at most one record per composite key: every write is
a single atomic upsert, never a "look it up, then create or update" pair.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from votematch.errors import NotFoundError
from votematch.models import (
    MemberVote,
    RecentRepresentative,
    Representative,
    UserPreference,
    Vote,
)


class VoteStore(ABC):
    """Representatives, roll call votes and member positions."""

    # ------------------------------------------------------------------
    # Representatives
    # ------------------------------------------------------------------

    @abstractmethod
    async def upsert_representative(self, representative: Representative) -> bool:
        """
        Insert or replace a representative by member_id.

        Returns:
            True if new insert, False if update
        """

    @abstractmethod
    async def get_representative(self, member_id: str) -> Optional[Representative]:
        pass

    @abstractmethod
    async def find_representatives(
        self,
        state: Optional[str] = None,
        chamber: Optional[str] = None,
        name: Optional[str] = None
    ) -> List[Representative]:
        """
        Search representatives.

        Args:
            state: Two-letter state code
            chamber: "house" or "senate"
            name: Partial name; every word must appear in the full name

        Returns:
            Matching representatives sorted by last name
        """

    async def get_representative_or_raise(self, member_id: str) -> Representative:
        """Like get_representative, but unknown IDs raise NotFoundError."""
        representative = await self.get_representative(member_id)
        if representative is None:
            raise NotFoundError(f"Representative not found: {member_id}")
        return representative

    # ------------------------------------------------------------------
    # Votes
    # ------------------------------------------------------------------

    @abstractmethod
    async def upsert_vote(self, vote: Vote) -> bool:
        """Insert or replace a vote by vote_id. True if new insert."""

    @abstractmethod
    async def get_vote(self, vote_id: str) -> Optional[Vote]:
        pass

    @abstractmethod
    async def list_votes(self) -> List[Vote]:
        pass

    async def get_votes(self, vote_ids: Iterable[str]) -> Dict[str, Vote]:
        """
        Fetch several votes at once.

        Unknown IDs are simply absent from the result.
        """
        votes = {}
        for vote_id in set(vote_ids):
            vote = await self.get_vote(vote_id)
            if vote is not None:
                votes[vote_id] = vote
        return votes

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    @abstractmethod
    async def upsert_position(self, member_vote: MemberVote) -> bool:
        """Insert or replace the position for (member_id, vote_id). True if new."""

    @abstractmethod
    async def get_positions(self, member_id: str) -> List[MemberVote]:
        pass


class PreferenceStore(ABC):
    """User opinions and per-user view history."""

    @abstractmethod
    async def upsert_preference(self, preference: UserPreference) -> UserPreference:
        """
        Atomically insert or overwrite the preference for (user_id, vote_id).

        Returns:
            The stored record
        """

    @abstractmethod
    async def get_preference(self, user_id: str, vote_id: str) -> Optional[UserPreference]:
        pass

    @abstractmethod
    async def get_preferences(self, user_id: str) -> List[UserPreference]:
        pass

    @abstractmethod
    async def delete_preference(self, user_id: str, vote_id: str) -> bool:
        """True if a record was removed."""

    @abstractmethod
    async def record_view(self, view: RecentRepresentative, limit: int) -> RecentRepresentative:
        """
        Upsert a view of (user_id, member_id), keeping only the newest
        `limit` views for that user.
        """

    @abstractmethod
    async def get_recent_representatives(self, user_id: str, limit: int) -> List[RecentRepresentative]:
        """Newest first."""
