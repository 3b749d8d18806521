"""Shared aggregation helpers for alignment buckets."""
from datetime import date
from typing import Optional

from votematch.models import Bucket, TimeBucket

UNKNOWN_PERIOD = "unknown"


def percentage(agree: int, total: int) -> int:
    """
    Integer agreement percentage, rounded half up.

    Pure integer arithmetic so 1/8 gives 13, never 12 from float error.
    An empty bucket is 0%.
    """
    if total <= 0:
        return 0
    return (200 * agree + total) // (2 * total)


def month_key(day: Optional[date]) -> str:
    """Period key ("YYYY-MM") for a vote date."""
    if day is None:
        return UNKNOWN_PERIOD
    return f"{day.year:04d}-{day.month:02d}"


class Tally:
    """Mutable agree/disagree counter that becomes a Bucket at the end."""

    __slots__ = ("agree", "disagree")

    def __init__(self):
        self.agree = 0
        self.disagree = 0

    def add(self, aligned: bool) -> None:
        if aligned:
            self.agree += 1
        else:
            self.disagree += 1

    @property
    def total(self) -> int:
        return self.agree + self.disagree

    def to_bucket(self) -> Bucket:
        return Bucket(
            total=self.total,
            agree=self.agree,
            disagree=self.disagree,
            percentage=percentage(self.agree, self.total),
        )

    def to_time_bucket(self, period: str) -> TimeBucket:
        return TimeBucket(period=period, **self.to_bucket().model_dump())
