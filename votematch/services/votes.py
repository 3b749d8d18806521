"""
Voting history and issue categories.
"""
import logging
from datetime import date, timedelta
from typing import Dict, List, Optional

from votematch.database.base import PreferenceStore, VoteStore
from votematch.errors import ValidationError, require_identifier
from votematch.models import UserPreference, VotingRecord
from votematch.scoring.engine import is_aligned
from votematch.scoring.issues import classify_issue, issue_categories

logger = logging.getLogger(__name__)

TIMEFRAMES = ("all", "30d", "90d", "year")


def timeframe_start(timeframe: Optional[str], today: Optional[date] = None) -> Optional[date]:
    """
    First date included by a timeframe filter.

    Args:
        timeframe: "all" (or None), "30d", "90d" or "year" (since January 1st)
        today: Reference date (default: today)

    Returns:
        The cutoff date, or None for no cutoff

    Raises:
        ValidationError: Unknown timeframe
    """
    if timeframe is None or timeframe == "all":
        return None

    today = today or date.today()
    if timeframe == "30d":
        return today - timedelta(days=30)
    if timeframe == "90d":
        return today - timedelta(days=90)
    if timeframe == "year":
        return date(today.year, 1, 1)

    raise ValidationError(f"timeframe must be one of {', '.join(TIMEFRAMES)}, got {timeframe!r}")


async def get_voting_history(
    vote_store: VoteStore,
    member_id: str,
    preference_store: Optional[PreferenceStore] = None,
    user_id: Optional[str] = None,
    category: Optional[str] = None,
    timeframe: Optional[str] = None,
    today: Optional[date] = None
) -> List[VotingRecord]:
    """
    A representative's recorded votes, newest first.

    When a preference store and user are given, each record carries the
    user's preference and whether the representative voted their way.

    Args:
        vote_store: Source of positions and vote metadata
        member_id: Representative to list
        preference_store: Optional source of the user's preferences
        user_id: User whose preferences to attach
        category: Only votes classified into this issue (case-insensitive)
        timeframe: "all", "30d", "90d" or "year"
        today: Reference date for the timeframe

    Returns:
        List of VotingRecord
    """
    require_identifier(member_id, "member_id")
    cutoff = timeframe_start(timeframe, today)

    positions = await vote_store.get_positions(member_id)
    votes = await vote_store.get_votes(pos.vote_id for pos in positions)

    preferences: Dict[str, UserPreference] = {}
    if preference_store is not None and user_id:
        preferences = {
            pref.vote_id: pref for pref in await preference_store.get_preferences(user_id)
        }

    wanted_category = category.strip().lower() if category else None

    records = []
    for position in positions:
        vote = votes.get(position.vote_id)
        if vote is None:
            logger.debug(f"Skipping position on unknown vote {position.vote_id}")
            continue

        if cutoff and vote.vote_date < cutoff:
            continue

        issue = classify_issue(vote.title, vote.description)
        if wanted_category and issue.lower() != wanted_category:
            continue

        preference = preferences.get(vote.vote_id)
        aligned = None
        if preference is not None and position.is_scoring:
            aligned = is_aligned(position.position, preference.agreement)

        records.append(VotingRecord(
            vote=vote,
            position=position.position,
            issue=issue,
            preference=preference,
            aligned=aligned,
        ))

    records.sort(key=lambda r: (r.vote.vote_date, r.vote.vote_id), reverse=True)
    return records


async def list_categories(vote_store: VoteStore) -> List[str]:
    """Issue categories that at least one stored vote falls into, in taxonomy order."""
    present = {classify_issue(vote.title, vote.description) for vote in await vote_store.list_votes()}
    return [category for category in issue_categories() if category in present]
