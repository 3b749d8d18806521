"""Data models module."""

from votematch.models.representative import (
    Chamber,
    Party,
    Representative,
    RecentRepresentative,
)

from votematch.models.vote import (
    Vote,
    VotePosition,
    MemberVote,
    SCORING_POSITIONS,
    VotingRecord,
)

from votematch.models.preference import (
    ImportanceTier,
    UserPreference,
    scale_to_tier,
    tier_to_scale,
)

from votematch.models.alignment import (
    AlignmentResult,
    Bucket,
    Distribution,
    ImportanceBreakdown,
    TimeBucket,
)

__all__ = [
    # Representative
    "Chamber",
    "Party",
    "Representative",
    "RecentRepresentative",
    # Vote
    "Vote",
    "VotePosition",
    "MemberVote",
    "SCORING_POSITIONS",
    "VotingRecord",
    # Preference
    "ImportanceTier",
    "UserPreference",
    "scale_to_tier",
    "tier_to_scale",
    # Alignment
    "AlignmentResult",
    "Bucket",
    "Distribution",
    "ImportanceBreakdown",
    "TimeBucket",
]
