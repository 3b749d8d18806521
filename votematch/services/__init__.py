"""Service functions - validated operations over the stores."""

from votematch.services.preferences import (
    delete_preference,
    get_preference,
    get_preferences,
    resolve_importance,
    set_preference,
)
from votematch.services.representatives import (
    find_representatives,
    get_recent_representatives,
    record_view,
)
from votematch.services.votes import (
    get_voting_history,
    list_categories,
    timeframe_start,
)

__all__ = [
    "delete_preference",
    "get_preference",
    "get_preferences",
    "resolve_importance",
    "set_preference",
    "find_representatives",
    "get_recent_representatives",
    "record_view",
    "get_voting_history",
    "list_categories",
    "timeframe_start",
]
