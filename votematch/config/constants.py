"""
Application-wide constants.

API endpoints, state codes, vote vocabulary and the issue taxonomy live here.
"""
from datetime import datetime

# API Base URLs
CONGRESS_GOV_BASE_URL = "https://api.congress.gov/v3"

# US State and Territory Codes
US_STATES = [
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    # Territories with delegates
    "AS",  # American Samoa
    "DC",  # District of Columbia
    "GU",  # Guam
    "MP",  # Northern Mariana Islands
    "PR",  # Puerto Rico
    "VI",  # Virgin Islands
]


# Congress number = ((current_year - 1789) // 2) + 1
def _calculate_current_congress() -> int:
    """Calculate the current Congress number based on today's date."""
    current_year = datetime.now().year
    return ((current_year - 1789) // 2) + 1


CURRENT_CONGRESS = _calculate_current_congress()

# MongoDB Collection Names
COLLECTION_REPRESENTATIVES = "representatives"
COLLECTION_VOTES = "votes"
COLLECTION_MEMBER_VOTES = "member_votes"
COLLECTION_USER_PREFERENCES = "user_preferences"
COLLECTION_RECENT_REPRESENTATIVES = "recent_representatives"

# Congress.gov allows 5000 requests per hour
RATE_LIMIT_DELAY = 0.2  # seconds between requests

# ============================================================================
# Issue taxonomy
# ============================================================================
# Priority ordered: the first category with a keyword hit wins, so a title
# mentioning both "health" and "tax" is Healthcare.
ISSUE_TAXONOMY = (
    ("Healthcare", (
        "health", "medicare", "medicaid", "hospital", "prescription",
        "drug", "patient", "affordable care", "insurance", "opioid",
    )),
    ("Economy", (
        "econom", "tax", "budget", "tariff", "trade", "wage", "inflation",
        "debt", "appropriation", "fiscal", "small business", "bank",
        "financ", "infrastructure",
    )),
    ("Environment", (
        "climate", "environment", "energy", "emission", "pollution",
        "conservation", "wildlife", "clean air", "clean water",
        "renewable", "carbon",
    )),
    ("Defense", (
        "defense", "military", "armed forces", "veteran", "national security",
        "army", "navy", "air force", "weapon", "homeland",
    )),
    ("Immigration", (
        "immigra", "border", "visa", "asylum", "citizenship", "refugee",
        "deport", "migrant",
    )),
    ("Education", (
        "education", "school", "student", "college", "teacher",
        "universit", "pell grant",
    )),
)

OTHER_ISSUE = "Other"
