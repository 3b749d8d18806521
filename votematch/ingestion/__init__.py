"""Ingestion module - sync representatives and votes into a vote store."""

from votematch.ingestion.base import BaseIngester
from votematch.ingestion.congress_members import CongressMembersIngester
from votematch.ingestion.votes import (
    HouseVotesIngester,
    parse_house_clerk_xml,
    parse_vote_date,
)

__all__ = [
    "BaseIngester",
    "CongressMembersIngester",
    "HouseVotesIngester",
    "parse_house_clerk_xml",
    "parse_vote_date",
]
