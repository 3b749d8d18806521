"""
Exception types shared across stores, scoring and services.
"""


class VoteMatchError(Exception):
    """Base class for all VoteMatch errors."""


class ValidationError(VoteMatchError, ValueError):
    """Caller supplied malformed input. Nothing was written."""


class NotFoundError(VoteMatchError, LookupError):
    """An explicit lookup asked for an entity the store has never seen."""


class StoreUnavailableError(VoteMatchError):
    """The underlying storage engine failed a read or write."""


def require_identifier(value, name: str) -> str:
    """Reject anything but a non-empty string identifier."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string, got {value!r}")
    return value
