"""
User preference data models.

A user's opinion on a single roll call: whether they wanted it to pass
(agreement) and how much it matters to them (importance).

Importance is stored on a raw integer scale (1..IMPORTANCE_SCALE_MAX) and
collapsed into three tiers for breakdowns. Both are exposed.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, StrictBool, computed_field, field_validator

from votematch.config.settings import settings


class ImportanceTier(str, Enum):
    """How much a bill matters to the user, collapsed to three buckets."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def scale_to_tier(
    level: int,
    low_max: Optional[int] = None,
    medium_max: Optional[int] = None
) -> ImportanceTier:
    """
    Collapse a raw importance level into its tier.

    Args:
        level: Raw importance on the 1..IMPORTANCE_SCALE_MAX scale
        low_max: Highest level counted as low (default: settings)
        medium_max: Highest level counted as medium (default: settings)

    Returns:
        The ImportanceTier for this level

    Examples:
        >>> scale_to_tier(2)
        <ImportanceTier.LOW: 'low'>
        >>> scale_to_tier(3)
        <ImportanceTier.MEDIUM: 'medium'>
        >>> scale_to_tier(5)
        <ImportanceTier.HIGH: 'high'>
    """
    low_max = settings.importance_low_max if low_max is None else low_max
    medium_max = settings.importance_medium_max if medium_max is None else medium_max

    if level <= low_max:
        return ImportanceTier.LOW
    if level <= medium_max:
        return ImportanceTier.MEDIUM
    return ImportanceTier.HIGH


def tier_to_scale(tier: ImportanceTier) -> int:
    """
    Canonical raw level for a tier.

    low -> 1, medium -> top of the medium tier, high -> IMPORTANCE_SCALE_MAX,
    so scale_to_tier(tier_to_scale(t)) == t.
    """
    tier = ImportanceTier(tier)
    if tier == ImportanceTier.LOW:
        return 1
    if tier == ImportanceTier.MEDIUM:
        return settings.importance_medium_max
    return settings.IMPORTANCE_SCALE_MAX


class UserPreference(BaseModel):
    """
    One user's opinion on one vote.

    Unique per (user_id, vote_id); a repeat submission overwrites it.
    """

    # Compound key
    user_id: str = Field(..., min_length=1)
    vote_id: str = Field(..., min_length=1)

    # True means the user wanted a "Yes" outcome
    agreement: StrictBool

    # Raw level, 1..IMPORTANCE_SCALE_MAX
    importance: int = Field(..., ge=1)

    notes: Optional[str] = None

    @field_validator("importance")
    @classmethod
    def _within_scale(cls, value: int) -> int:
        if value > settings.IMPORTANCE_SCALE_MAX:
            raise ValueError(
                f"importance must be between 1 and {settings.IMPORTANCE_SCALE_MAX}, got {value}"
            )
        return value

    @computed_field
    @property
    def tier(self) -> ImportanceTier:
        return scale_to_tier(self.importance)
