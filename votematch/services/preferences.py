"""
User preference operations.

set_preference is the only way preferences are written: it validates the
input, then hands a complete record to the store's atomic upsert. Nothing
is written when validation fails.
"""
import logging
from typing import List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from votematch.config.settings import settings
from votematch.database.base import PreferenceStore
from votematch.errors import ValidationError, require_identifier
from votematch.models import ImportanceTier, UserPreference, tier_to_scale

logger = logging.getLogger(__name__)

Importance = Union[ImportanceTier, str, int]


def resolve_importance(importance: Importance) -> int:
    """
    Turn a tier name or raw level into a raw level on the configured scale.

    Args:
        importance: ImportanceTier, "low"/"medium"/"high", or an int
            in 1..IMPORTANCE_SCALE_MAX

    Returns:
        Raw importance level

    Raises:
        ValidationError: Unknown tier name or level out of range
    """
    # bool is an int subclass; True is not a valid importance
    if isinstance(importance, bool):
        raise ValidationError(f"importance must be a tier or integer, got {importance!r}")

    if isinstance(importance, ImportanceTier):
        return tier_to_scale(importance)

    if isinstance(importance, str):
        try:
            return tier_to_scale(ImportanceTier(importance.strip().lower()))
        except ValueError:
            raise ValidationError(
                f"importance must be one of low/medium/high, got {importance!r}"
            ) from None

    if isinstance(importance, int):
        if not 1 <= importance <= settings.IMPORTANCE_SCALE_MAX:
            raise ValidationError(
                f"importance must be between 1 and {settings.IMPORTANCE_SCALE_MAX}, "
                f"got {importance}"
            )
        return importance

    raise ValidationError(f"importance must be a tier or integer, got {importance!r}")


async def set_preference(
    preference_store: PreferenceStore,
    user_id: str,
    vote_id: str,
    agreement: bool,
    importance: Importance,
    notes: Optional[str] = None
) -> UserPreference:
    """
    Create or overwrite the user's opinion on a vote.

    Any earlier preference for (user_id, vote_id) is replaced wholesale;
    no history is kept. Calling twice with the same arguments leaves a
    single record.

    Args:
        preference_store: Where preferences live
        user_id: Opaque user identifier
        vote_id: The vote being rated
        agreement: True if the user wanted a "Yes" outcome
        importance: Tier name or raw level
        notes: Optional free text

    Returns:
        The stored UserPreference

    Raises:
        ValidationError: Malformed input; nothing was written
    """
    require_identifier(user_id, "user_id")
    require_identifier(vote_id, "vote_id")

    if not isinstance(agreement, bool):
        raise ValidationError(f"agreement must be a boolean, got {agreement!r}")

    level = resolve_importance(importance)

    try:
        preference = UserPreference(
            user_id=user_id,
            vote_id=vote_id,
            agreement=agreement,
            importance=level,
            notes=notes,
        )
    except PydanticValidationError as e:
        raise ValidationError(str(e)) from e

    stored = await preference_store.upsert_preference(preference)
    logger.info(
        f"Saved preference {user_id}/{vote_id}: "
        f"agreement={stored.agreement}, importance={stored.importance} ({stored.tier.value})"
    )
    return stored


async def get_preferences(preference_store: PreferenceStore, user_id: str) -> List[UserPreference]:
    """All of a user's preferences, sorted by vote_id."""
    require_identifier(user_id, "user_id")
    preferences = await preference_store.get_preferences(user_id)
    return sorted(preferences, key=lambda p: p.vote_id)


async def get_preference(
    preference_store: PreferenceStore,
    user_id: str,
    vote_id: str
) -> Optional[UserPreference]:
    require_identifier(user_id, "user_id")
    require_identifier(vote_id, "vote_id")
    return await preference_store.get_preference(user_id, vote_id)


async def delete_preference(preference_store: PreferenceStore, user_id: str, vote_id: str) -> bool:
    """Remove a preference. False if there was none."""
    require_identifier(user_id, "user_id")
    require_identifier(vote_id, "vote_id")
    deleted = await preference_store.delete_preference(user_id, vote_id)
    if deleted:
        logger.info(f"Deleted preference {user_id}/{vote_id}")
    return deleted
