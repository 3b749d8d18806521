"""
Alignment engine.

Joins a user's preferences with a representative's recorded positions and
aggregates how often they agree: overall, per importance tier, per raw
importance level, per issue category, per month, and as a five-way
agreement distribution.

Every aggregate is derived from one per-vote boolean (is_aligned) over one
intersection set, so all breakdowns are partitions of `overall`:
their totals always sum to overall.total.

The engine holds no state and takes no locks. Unknown users or
representatives simply produce an empty intersection and zeroed buckets.
"""
import asyncio
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Tuple

from votematch.config.constants import ISSUE_TAXONOMY
from votematch.config.settings import settings
from votematch.database.base import PreferenceStore, VoteStore
from votematch.errors import require_identifier
from votematch.models import (
    AlignmentResult,
    Distribution,
    ImportanceBreakdown,
    ImportanceTier,
    MemberVote,
    UserPreference,
    Vote,
    VotePosition,
)
from votematch.scoring.buckets import Tally, UNKNOWN_PERIOD, month_key
from votematch.scoring.issues import Taxonomy, classify_issue, issue_categories

logger = logging.getLogger(__name__)


def is_aligned(position: VotePosition, agreement: bool) -> bool:
    """
    Did the representative vote the way the user wanted?

    Only meaningful for Yes/No positions.
    """
    return (
        (position == VotePosition.YES and agreement)
        or (position == VotePosition.NO and not agreement)
    )


def match_positions(
    preferences: Iterable[UserPreference],
    positions: Iterable[MemberVote]
) -> List[Tuple[UserPreference, MemberVote]]:
    """
    Pair preferences with positions on the same vote.

    Present / Not Voting positions are dropped: they count neither for nor
    against the representative. Pairs come back sorted by vote_id.
    """
    scoring_positions = {pos.vote_id: pos for pos in positions if pos.is_scoring}
    by_vote = {pref.vote_id: pref for pref in preferences}

    return [
        (by_vote[vote_id], scoring_positions[vote_id])
        for vote_id in sorted(by_vote.keys() & scoring_positions.keys())
    ]


def score_alignment(
    preferences: Iterable[UserPreference],
    positions: Iterable[MemberVote],
    votes: Mapping[str, Vote],
    user_id: str = "",
    representative_id: str = "",
    taxonomy: Taxonomy = ISSUE_TAXONOMY
) -> AlignmentResult:
    """
    Aggregate alignment statistics from already-fetched snapshots.

    Args:
        preferences: The user's preferences
        positions: The representative's recorded positions
        votes: Vote metadata by vote_id (dates, titles for classification)
        user_id: Echoed into the result
        representative_id: Echoed into the result
        taxonomy: Issue taxonomy used for the by_issue breakdown

    Returns:
        AlignmentResult; a vote missing from `votes` still counts, under
        issue "Other" and period "unknown".
    """
    overall = Tally()
    tiers = {tier: Tally() for tier in ImportanceTier}
    levels: Dict[int, Tally] = {
        level: Tally() for level in range(1, settings.IMPORTANCE_SCALE_MAX + 1)
    }
    issues: Dict[str, Tally] = defaultdict(Tally)
    months: Dict[str, Tally] = defaultdict(Tally)
    distribution = Distribution()

    for preference, member_vote in match_positions(preferences, positions):
        aligned = is_aligned(member_vote.position, preference.agreement)
        tier = preference.tier
        vote = votes.get(preference.vote_id)

        if vote is None:
            logger.debug(f"No metadata for vote {preference.vote_id}")
            issue = classify_issue(None, taxonomy=taxonomy)
            period = UNKNOWN_PERIOD
        else:
            issue = classify_issue(vote.title, vote.description, taxonomy=taxonomy)
            period = month_key(vote.vote_date)

        overall.add(aligned)
        tiers[tier].add(aligned)
        levels.setdefault(preference.importance, Tally()).add(aligned)
        issues[issue].add(aligned)
        months[period].add(aligned)

        if tier == ImportanceTier.LOW:
            distribution.neutral += 1
        elif tier == ImportanceTier.HIGH:
            if aligned:
                distribution.strong_agreement += 1
            else:
                distribution.strong_disagreement += 1
        elif aligned:
            distribution.agreement += 1
        else:
            distribution.disagreement += 1

    # Issues in taxonomy order, then anything a custom taxonomy produced
    issue_order = [c for c in issue_categories(taxonomy) if c in issues]
    issue_order += sorted(c for c in issues if c not in issue_order)

    return AlignmentResult(
        user_id=user_id,
        representative_id=representative_id,
        overall=overall.to_bucket(),
        by_importance=ImportanceBreakdown(
            low=tiers[ImportanceTier.LOW].to_bucket(),
            medium=tiers[ImportanceTier.MEDIUM].to_bucket(),
            high=tiers[ImportanceTier.HIGH].to_bucket(),
        ),
        by_importance_level={
            str(level): levels[level].to_bucket() for level in sorted(levels)
        },
        by_issue={issue: issues[issue].to_bucket() for issue in issue_order},
        over_time=[months[period].to_time_bucket(period) for period in sorted(months)],
        distribution=distribution,
    )


async def compute_alignment(
    vote_store: VoteStore,
    preference_store: PreferenceStore,
    user_id: str,
    representative_id: str,
    taxonomy: Taxonomy = ISSUE_TAXONOMY
) -> AlignmentResult:
    """
    Compute how closely a user's opinions match a representative's votes.

    Preferences and positions are fetched concurrently; scoring waits for
    both. Store failures propagate unchanged.

    Args:
        vote_store: Source of positions and vote metadata
        preference_store: Source of the user's preferences
        user_id: Opaque user identifier
        representative_id: Representative member_id

    Returns:
        AlignmentResult (zeroed if either side has no data)

    Raises:
        ValidationError: If an identifier is not a non-empty string
    """
    require_identifier(user_id, "user_id")
    require_identifier(representative_id, "representative_id")

    preferences, positions = await asyncio.gather(
        preference_store.get_preferences(user_id),
        vote_store.get_positions(representative_id),
    )

    vote_ids = [pref.vote_id for pref, _ in match_positions(preferences, positions)]
    votes = await vote_store.get_votes(vote_ids) if vote_ids else {}

    result = score_alignment(
        preferences,
        positions,
        votes,
        user_id=user_id,
        representative_id=representative_id,
        taxonomy=taxonomy,
    )

    logger.info(
        f"Alignment {user_id} vs {representative_id}: "
        f"{result.overall.agree}/{result.overall.total} ({result.overall.percentage}%)"
    )
    return result
