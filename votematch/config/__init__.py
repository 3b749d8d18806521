"""Config module - settings and constants."""

from votematch.config.settings import settings
from votematch.config.constants import (
    CONGRESS_GOV_BASE_URL,
    CURRENT_CONGRESS,
    ISSUE_TAXONOMY,
    OTHER_ISSUE,
)

__all__ = [
    "settings",
    "CONGRESS_GOV_BASE_URL",
    "CURRENT_CONGRESS",
    "ISSUE_TAXONOMY",
    "OTHER_ISSUE",
]
