"""
Vote data models.

Defines the structure for roll call votes and how representatives voted.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from votematch.models.preference import UserPreference


class VotePosition(str, Enum):
    """How a legislator voted."""
    YES = "Yes"
    NO = "No"
    PRESENT = "Present"
    NOT_VOTING = "Not Voting"


# Only these positions say anything about the representative's stance
SCORING_POSITIONS = frozenset({VotePosition.YES, VotePosition.NO})


class Vote(BaseModel):
    """
    A roll call vote in Congress.

    This represents the overall vote (the question being voted on),
    not individual positions. The issue category is never stored here;
    it is derived from title and description when needed.
    """

    # Unique identifier, e.g. "house-roll-123-118"
    vote_id: str = Field(..., min_length=1, description="Unique vote identifier")

    # What was voted on; bill_id is unique per congress, e.g. "hr-1234-118"
    bill_id: str
    congress: Optional[int] = None
    title: str
    description: Optional[str] = None

    # Vote details
    chamber: str = Field(..., description="senate or house")
    vote_date: date
    question: Optional[str] = None
    result: str = Field(..., description="passed, failed, or the raw result text")

    # Source
    url: Optional[str] = None

    # Metadata
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class MemberVote(BaseModel):
    """
    How a specific representative voted on a specific roll call.

    Unique per (member_id, vote_id); the latest sync wins.
    """

    # Compound key
    member_id: str = Field(..., description="Reference to Representative.member_id")
    vote_id: str = Field(..., description="Reference to Vote.vote_id")

    # Their vote
    position: VotePosition

    # Metadata
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_scoring(self) -> bool:
        return self.position in SCORING_POSITIONS


class VotingRecord(BaseModel):
    """
    One line of a representative's voting history, as shown to a user.

    `aligned` is None when the user has not rated the vote or the
    representative did not cast a Yes/No position.
    """
    vote: Vote
    position: VotePosition
    issue: str
    preference: Optional[UserPreference] = None
    aligned: Optional[bool] = None
