"""
Representative data models.

Defines the structure for members of Congress and the per-user
"recently viewed" list.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Chamber(str, Enum):
    """Legislative chamber."""
    SENATE = "senate"
    HOUSE = "house"


class Party(str, Enum):
    """Political party affiliation."""
    DEMOCRAT = "D"
    REPUBLICAN = "R"
    INDEPENDENT = "I"
    OTHER = "O"


class Representative(BaseModel):
    """
    A member of Congress (Senator or Representative).

    Immutable once synced; a re-sync upserts the whole record by member_id.
    """

    # Unique identifier (bioguide ID from Congress.gov)
    member_id: str = Field(..., min_length=1, description="Unique ID from Congress.gov")

    # Basic info
    first_name: str
    last_name: str
    full_name: str

    # Political info
    chamber: Chamber
    party: Party
    state: str = Field(..., min_length=2, max_length=2, description="Two-letter state code")
    district: Optional[int] = Field(None, description="House district number (None for Senators)")

    # Optional details
    office_start: Optional[date] = None
    image_url: Optional[str] = None

    # Metadata
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def __str__(self) -> str:
        """Human-readable representation."""
        chamber_title = "Sen." if self.chamber == Chamber.SENATE else "Rep."
        district_str = f" (District {self.district})" if self.district else ""
        return f"{chamber_title} {self.full_name} ({self.party.value}-{self.state}){district_str}"


class RecentRepresentative(BaseModel):
    """A representative a user looked at, newest view wins."""
    user_id: str
    member_id: str
    viewed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
