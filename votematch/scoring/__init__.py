"""Scoring module - issue classification and the alignment engine."""

from votematch.scoring.issues import classify_issue, issue_categories
from votematch.scoring.buckets import percentage, month_key
from votematch.scoring.engine import (
    compute_alignment,
    is_aligned,
    match_positions,
    score_alignment,
)

__all__ = [
    "classify_issue",
    "issue_categories",
    "percentage",
    "month_key",
    "compute_alignment",
    "is_aligned",
    "match_positions",
    "score_alignment",
]
