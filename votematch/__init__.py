"""VoteMatch - congressional voting records and personal alignment scores."""

__version__ = "0.1.0"
