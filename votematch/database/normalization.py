"""
Data Normalization Module

Centralized functions to turn raw legislative-data values into the
standardized vocabulary the models use. Every ingester goes through these
so that "Utah"/"UT"/"ut", "Yea"/"Aye"/"Yes" and friends end up identical.

Usage:
    from votematch.database.normalization import normalize_state, normalize_position

    state = normalize_state("Utah")        # "UT"
    position = normalize_position("Aye")   # VotePosition.YES
"""
import logging
from typing import Optional

from votematch.models import VotePosition

logger = logging.getLogger(__name__)


# ============================================================================
# State Normalization
# ============================================================================

STATE_NAME_TO_CODE = {
    "Alabama": "AL", "Alaska": "AK", "Arizona": "AZ", "Arkansas": "AR",
    "California": "CA", "Colorado": "CO", "Connecticut": "CT", "Delaware": "DE",
    "Florida": "FL", "Georgia": "GA", "Hawaii": "HI", "Idaho": "ID",
    "Illinois": "IL", "Indiana": "IN", "Iowa": "IA", "Kansas": "KS",
    "Kentucky": "KY", "Louisiana": "LA", "Maine": "ME", "Maryland": "MD",
    "Massachusetts": "MA", "Michigan": "MI", "Minnesota": "MN", "Mississippi": "MS",
    "Missouri": "MO", "Montana": "MT", "Nebraska": "NE", "Nevada": "NV",
    "New Hampshire": "NH", "New Jersey": "NJ", "New Mexico": "NM", "New York": "NY",
    "North Carolina": "NC", "North Dakota": "ND", "Ohio": "OH", "Oklahoma": "OK",
    "Oregon": "OR", "Pennsylvania": "PA", "Rhode Island": "RI", "South Carolina": "SC",
    "South Dakota": "SD", "Tennessee": "TN", "Texas": "TX", "Utah": "UT",
    "Vermont": "VT", "Virginia": "VA", "Washington": "WA", "West Virginia": "WV",
    "Wisconsin": "WI", "Wyoming": "WY",
    "District of Columbia": "DC", "Puerto Rico": "PR", "Guam": "GU",
    "American Samoa": "AS", "Virgin Islands": "VI", "Northern Mariana Islands": "MP",
}

# Reverse mapping for validation
STATE_CODE_TO_NAME = {v: k for k, v in STATE_NAME_TO_CODE.items()}


def normalize_state(state: Optional[str]) -> Optional[str]:
    """
    Normalize state to 2-letter code.

    Args:
        state: State name or code (e.g., "Utah", "UT", "ut")

    Returns:
        2-letter uppercase state code (e.g., "UT") or None if invalid

    Examples:
        >>> normalize_state("Utah")
        'UT'
        >>> normalize_state("ut")
        'UT'
    """
    if not state:
        return None

    state_clean = state.strip()

    if len(state_clean) == 2:
        code = state_clean.upper()
        return code if code in STATE_CODE_TO_NAME else None

    for full_name, code in STATE_NAME_TO_CODE.items():
        if full_name.lower() == state_clean.lower():
            return code

    return None


# ============================================================================
# Party Normalization
# ============================================================================

PARTY_MAPPINGS = {
    "republican": "R",
    "democrat": "D",
    "democratic": "D",
    "independent": "I",
    "r": "R",
    "d": "D",
    "i": "I",
    "id": "I",
}


def normalize_party(party: Optional[str], default: str = "O") -> str:
    """
    Normalize party affiliation to single-letter code.

    Args:
        party: Raw party string (e.g., "Republican", "Democratic", "D")
        default: Code for anything unrecognized

    Returns:
        "R", "D", "I" or default
    """
    if not party:
        return default

    party_clean = party.strip().lower()

    if party_clean in PARTY_MAPPINGS:
        return PARTY_MAPPINGS[party_clean]

    # "Democratic-Farmer-Labor" and similar
    for key, code in PARTY_MAPPINGS.items():
        if len(key) > 2 and party_clean.startswith(key):
            return code

    logger.warning(f"Unexpected party value '{party}', using default '{default}'")
    return default


# ============================================================================
# Chamber Normalization
# ============================================================================

def normalize_chamber(chamber: Optional[str]) -> Optional[str]:
    """
    Normalize chamber to lowercase standard format.

    Examples:
        >>> normalize_chamber("Senate")
        'senate'
        >>> normalize_chamber("House of Representatives")
        'house'
    """
    if not chamber:
        return None

    chamber_clean = chamber.strip().lower()
    if "senate" in chamber_clean:
        return "senate"
    if "house" in chamber_clean:
        return "house"
    return None


# ============================================================================
# Vote Normalization
# ============================================================================

# House Clerk uses Aye/No or Yea/Nay depending on the vote type; the Senate
# uses Yea/Nay; "Guilty"/"Not Guilty" appear on impeachment votes.
POSITION_MAPPINGS = {
    "yes": VotePosition.YES,
    "yea": VotePosition.YES,
    "aye": VotePosition.YES,
    "guilty": VotePosition.YES,
    "no": VotePosition.NO,
    "nay": VotePosition.NO,
    "not guilty": VotePosition.NO,
    "present": VotePosition.PRESENT,
    "not voting": VotePosition.NOT_VOTING,
    "notvoting": VotePosition.NOT_VOTING,
    "absent": VotePosition.NOT_VOTING,
}


def normalize_position(position: Optional[str]) -> Optional[VotePosition]:
    """
    Map a raw vote cast to VotePosition.

    Returns:
        The VotePosition, or None if the value is unrecognized
    """
    if not position:
        return None
    return POSITION_MAPPINGS.get(" ".join(position.strip().lower().split()))


def normalize_result(result: Optional[str]) -> str:
    """
    Normalize a vote result.

    "Passed", "Agreed to", "Bill Passed" -> "passed";
    "Failed", "Rejected", "Not Agreed to" -> "failed";
    anything else is kept as lowercase text.
    """
    if not result:
        return "unknown"

    result_clean = result.strip().lower()
    if "fail" in result_clean or "reject" in result_clean or "not agreed" in result_clean:
        return "failed"
    if "pass" in result_clean or "agreed" in result_clean or "confirmed" in result_clean:
        return "passed"
    return result_clean
