"""
Representative lookups and the per-user "recently viewed" list.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from votematch.config.settings import settings
from votematch.database.base import PreferenceStore, VoteStore
from votematch.database.normalization import normalize_chamber, normalize_state
from votematch.errors import ValidationError, require_identifier
from votematch.models import RecentRepresentative, Representative

logger = logging.getLogger(__name__)


async def find_representatives(
    vote_store: VoteStore,
    state: Optional[str] = None,
    chamber: Optional[str] = None,
    name: Optional[str] = None
) -> List[Representative]:
    """
    Look up representatives by state, chamber and/or name.

    Args:
        vote_store: Store holding representatives
        state: State name or abbreviation (e.g., "Utah" or "UT")
        chamber: "senate" or "house" (any capitalization)
        name: Full or partial name, case-insensitive

    Returns:
        Matching representatives sorted by last name

    Raises:
        ValidationError: Unrecognized state or chamber

    Examples:
        # All Vermont senators
        await find_representatives(store, state="Vermont", chamber="senate")

        # By name
        await find_representatives(store, name="ocasio")
    """
    state_code = None
    if state:
        state_code = normalize_state(state)
        if state_code is None:
            raise ValidationError(f"Unknown state: {state!r}")

    chamber_name = None
    if chamber:
        chamber_name = normalize_chamber(chamber)
        if chamber_name is None:
            raise ValidationError(f"Unknown chamber: {chamber!r}")

    name = name.strip() if name else None

    results = await vote_store.find_representatives(
        state=state_code, chamber=chamber_name, name=name or None
    )
    logger.info(f"Found {len(results)} representatives (state={state_code}, chamber={chamber_name}, name={name!r})")
    return results


async def record_view(
    preference_store: PreferenceStore,
    user_id: str,
    member_id: str,
    viewed_at: Optional[datetime] = None,
    limit: Optional[int] = None
) -> RecentRepresentative:
    """
    Remember that a user looked at a representative.

    Viewing the same representative again just refreshes the timestamp.
    Only the newest `limit` (default RECENT_REPS_LIMIT) views are kept.
    """
    require_identifier(user_id, "user_id")
    require_identifier(member_id, "member_id")

    view = RecentRepresentative(
        user_id=user_id,
        member_id=member_id,
        viewed_at=viewed_at or datetime.now(timezone.utc),
    )
    return await preference_store.record_view(view, limit or settings.RECENT_REPS_LIMIT)


async def get_recent_representatives(
    preference_store: PreferenceStore,
    vote_store: VoteStore,
    user_id: str,
    limit: Optional[int] = None
) -> List[Representative]:
    """
    The representatives a user viewed most recently, newest first.

    Views of representatives no longer in the vote store are skipped.
    """
    require_identifier(user_id, "user_id")

    views = await preference_store.get_recent_representatives(
        user_id, limit or settings.RECENT_REPS_LIMIT
    )

    representatives = []
    for view in views:
        representative = await vote_store.get_representative(view.member_id)
        if representative is None:
            logger.debug(f"Recently viewed {view.member_id} is no longer stored")
            continue
        representatives.append(representative)
    return representatives
