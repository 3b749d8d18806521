"""
Issue classification.

Maps a bill's free-text title and description onto one category of a fixed,
priority-ordered taxonomy by case-insensitive keyword matching.
"""
from typing import List, Optional, Sequence, Tuple

from votematch.config.constants import ISSUE_TAXONOMY, OTHER_ISSUE

Taxonomy = Sequence[Tuple[str, Sequence[str]]]


def classify_issue(
    title: Optional[str],
    description: Optional[str] = None,
    taxonomy: Taxonomy = ISSUE_TAXONOMY
) -> str:
    """
    Classify a bill into an issue category.

    Categories are tried in taxonomy order and the first one with any
    keyword found in the title or description wins. Never raises: missing,
    empty or non-text input is simply "Other".

    Args:
        title: Bill title
        description: Optional longer description
        taxonomy: (category, keywords) pairs in priority order

    Returns:
        Category name, or "Other" when nothing matches

    Examples:
        >>> classify_issue("Climate Action Now Act")
        'Environment'
        >>> classify_issue("A bill to rename a post office")
        'Other'
    """
    text = " ".join(
        part for part in (title, description) if isinstance(part, str) and part
    ).lower()

    if not text:
        return OTHER_ISSUE

    for category, keywords in taxonomy:
        for keyword in keywords:
            if keyword.lower() in text:
                return category

    return OTHER_ISSUE


def issue_categories(taxonomy: Taxonomy = ISSUE_TAXONOMY) -> List[str]:
    """All categories in priority order, "Other" last."""
    return [category for category, _ in taxonomy] + [OTHER_ISSUE]
