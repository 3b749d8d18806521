"""
Alignment result models.

Every breakdown reuses the same Bucket shape: how many rated votes fell in
the bucket, how many the user and representative agreed on, and the
rounded agreement percentage.
"""

from typing import Dict, List

from pydantic import BaseModel, Field


class Bucket(BaseModel):
    """Agreement counts for one slice of the rated votes."""
    total: int = 0
    agree: int = 0
    disagree: int = 0
    percentage: int = Field(0, ge=0, le=100)


class TimeBucket(Bucket):
    """A Bucket for one calendar month ("YYYY-MM")."""
    period: str


class ImportanceBreakdown(BaseModel):
    """Buckets for the three importance tiers. All three are always present."""
    low: Bucket = Field(default_factory=Bucket)
    medium: Bucket = Field(default_factory=Bucket)
    high: Bucket = Field(default_factory=Bucket)


class Distribution(BaseModel):
    """
    Five-way split of rated votes by agreement and importance.

    High importance pushes a vote to the "strong" ends, medium to the
    plain ends, and low importance votes are neutral either way.
    """
    strong_agreement: int = 0
    agreement: int = 0
    neutral: int = 0
    disagreement: int = 0
    strong_disagreement: int = 0

    @property
    def total(self) -> int:
        return (
            self.strong_agreement + self.agreement + self.neutral
            + self.disagreement + self.strong_disagreement
        )


class AlignmentResult(BaseModel):
    """How closely a user's opinions match one representative's votes."""
    user_id: str
    representative_id: str

    overall: Bucket = Field(default_factory=Bucket)
    by_importance: ImportanceBreakdown = Field(default_factory=ImportanceBreakdown)

    # Raw importance levels as strings ("1".."N") so JSON keys round-trip
    by_importance_level: Dict[str, Bucket] = Field(default_factory=dict)

    by_issue: Dict[str, Bucket] = Field(default_factory=dict)
    over_time: List[TimeBucket] = Field(default_factory=list)
    distribution: Distribution = Field(default_factory=Distribution)
