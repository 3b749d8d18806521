"""
Application settings using Pydantic Settings.

Environment variables are loaded from .env file.
"""
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Create a .env file in the project root to override any of these values.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ========================================================================
    # Database
    # ========================================================================
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "votematch"

    # ========================================================================
    # External APIs
    # ========================================================================

    # Congress.gov API (get key at: https://api.congress.gov/sign-up/)
    # Only needed by the sync scripts.
    CONGRESS_GOV_API_KEY: Optional[str] = None

    # ========================================================================
    # Scoring
    # ========================================================================

    # Raw importance scale is 1..IMPORTANCE_SCALE_MAX.
    # Levels up to LOW_MAX are "low", up to MEDIUM_MAX "medium", the rest "high".
    # Unset cut-offs are derived from the scale: 2/3 on 1..5, 1/2 on 1..3.
    IMPORTANCE_SCALE_MAX: int = 5
    IMPORTANCE_LOW_MAX: Optional[int] = None
    IMPORTANCE_MEDIUM_MAX: Optional[int] = None

    # Recently viewed representatives kept per user
    RECENT_REPS_LIMIT: int = 5

    # ========================================================================
    # Logging
    # ========================================================================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def importance_low_max(self) -> int:
        """Highest raw level in the low tier."""
        if self.IMPORTANCE_LOW_MAX is not None:
            return self.IMPORTANCE_LOW_MAX
        return max(1, (2 * self.IMPORTANCE_SCALE_MAX) // 5)

    @property
    def importance_medium_max(self) -> int:
        """Highest raw level in the medium tier."""
        if self.IMPORTANCE_MEDIUM_MAX is not None:
            return self.IMPORTANCE_MEDIUM_MAX
        return (3 * self.IMPORTANCE_SCALE_MAX + 4) // 5

    @model_validator(mode="after")
    def _check_importance_tiers(self) -> "Settings":
        # Every tier must own at least one level
        low, medium, top = self.importance_low_max, self.importance_medium_max, self.IMPORTANCE_SCALE_MAX
        if not 1 <= low < medium < top:
            raise ValueError(
                "importance settings need 1 <= IMPORTANCE_LOW_MAX < IMPORTANCE_MEDIUM_MAX "
                f"< IMPORTANCE_SCALE_MAX, got {low}, {medium}, {top}"
            )
        return self


# Singleton instance
settings = Settings()
