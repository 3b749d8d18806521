"""
Ingester for House roll call votes.

Vote events come from Congress.gov; individual member positions come from
the House Clerk XML file each vote links to. A vote and its positions are
upserted together, one MemberVote per (member, vote).
"""
import asyncio
import logging
import xml.etree.ElementTree as ET
from datetime import date, datetime
from typing import AsyncGenerator, Iterable, Optional

import httpx

from votematch.config.constants import (
    CONGRESS_GOV_BASE_URL,
    CURRENT_CONGRESS,
    RATE_LIMIT_DELAY,
)
from votematch.config.settings import settings
from votematch.database.base import VoteStore
from votematch.database.normalization import normalize_position, normalize_result
from votematch.errors import ValidationError
from votematch.ingestion.base import BaseIngester
from votematch.models import MemberVote, Vote

logger = logging.getLogger(__name__)


def parse_vote_date(value: Optional[str]) -> Optional[date]:
    """Parse "2023-05-12" or "2023-05-12T10:32:00-04:00" to a date."""
    if not value:
        return None
    try:
        if "T" in value:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def parse_house_clerk_xml(xml_text: str) -> dict:
    """
    Parse a House Clerk roll call XML file.

    Args:
        xml_text: XML content from clerk.house.gov

    Returns:
        {"description": vote-desc text or None,
         "memberVotes": [{"bioguideId": ..., "voteCast": ...}, ...]}

    Raises:
        ValidationError: If the XML cannot be parsed
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise ValidationError(f"Invalid House Clerk XML: {e}") from e

    description = root.findtext(".//vote-desc")

    member_votes = []
    for recorded_vote in root.findall(".//recorded-vote"):
        legislator = recorded_vote.find("legislator")
        vote_elem = recorded_vote.find("vote")

        if legislator is None or vote_elem is None:
            continue

        bioguide_id = legislator.get("name-id")
        vote_cast = (vote_elem.text or "").strip()
        if bioguide_id and vote_cast:
            member_votes.append({"bioguideId": bioguide_id, "voteCast": vote_cast})

    return {
        "description": description.strip() if description and description.strip() else None,
        "memberVotes": member_votes,
    }


class HouseVotesIngester(BaseIngester[Vote]):
    """
    Ingest House roll call votes from Congress.gov.

    Fetches vote events and individual member positions from House Clerk XML.
    """

    def __init__(
        self,
        store: VoteStore,
        congress: int = CURRENT_CONGRESS,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        request_delay: float = RATE_LIMIT_DELAY
    ):
        super().__init__(store)
        self.congress = congress
        self.api_key = api_key or settings.CONGRESS_GOV_API_KEY
        self.base_url = CONGRESS_GOV_BASE_URL
        self.transport = transport
        self.request_delay = request_delay

    async def fetch_data(
        self,
        session: Optional[int] = None,
        limit: Optional[int] = None
    ) -> AsyncGenerator[dict, None]:
        """
        Fetch roll call votes with member positions attached.

        Args:
            session: Session number (1 or 2), None = both sessions
            limit: Max votes to fetch total (None = all)

        Yields:
            Raw vote detail dicts, with "memberVotes" and "voteDescription"
            added from the Clerk XML
        """
        self.logger.info(f"Fetching house votes for Congress {self.congress}...")

        sessions_to_fetch = [session] if session else [1, 2]
        params = {"api_key": self.api_key, "format": "json"}
        total_fetched = 0
        batch_size = 250

        async with httpx.AsyncClient(timeout=60.0, transport=self.transport) as client:
            for sess in sessions_to_fetch:
                offset = 0

                while True:
                    url = f"{self.base_url}/house-vote/{self.congress}/{sess}"
                    try:
                        response = await client.get(
                            url, params={**params, "limit": batch_size, "offset": offset}
                        )
                        if response.status_code == 404:
                            break
                        response.raise_for_status()
                        summaries = response.json().get("houseRollCallVotes", [])
                    except httpx.HTTPError as e:
                        self.logger.error(f"HTTP error listing session {sess} votes: {e}")
                        self.stats["errors"] += 1
                        break

                    if not summaries:
                        self.logger.info(f"No more votes for session {sess}")
                        break

                    self.logger.info(f"Found {len(summaries)} votes in batch")

                    for summary in summaries:
                        detail = await self._fetch_vote_detail(client, summary, params)
                        if detail is None:
                            continue

                        yield detail

                        total_fetched += 1
                        if limit and total_fetched >= limit:
                            self.logger.info(f"Reached limit of {limit} votes")
                            return

                        await asyncio.sleep(self.request_delay)

                    offset += batch_size

    async def _fetch_vote_detail(
        self,
        client: httpx.AsyncClient,
        summary: dict,
        params: dict
    ) -> Optional[dict]:
        """Vote detail plus positions from the Clerk XML, or None on failure."""
        vote_url = summary.get("url")
        if not vote_url:
            return None

        try:
            response = await client.get(vote_url, params=params)
            response.raise_for_status()
            detail = response.json().get("houseRollCallVote", {})

            source_xml_url = detail.get("sourceDataURL")
            if source_xml_url:
                xml_response = await client.get(source_xml_url)
                xml_response.raise_for_status()
                parsed = parse_house_clerk_xml(xml_response.text)
                detail["memberVotes"] = parsed["memberVotes"]
                detail["voteDescription"] = parsed["description"]
                self.logger.debug(f"Fetched {len(parsed['memberVotes'])} member votes from XML")
        except (httpx.HTTPError, ValidationError) as e:
            self.logger.error(f"Error fetching vote details from {vote_url}: {e}")
            self.stats["errors"] += 1
            return None

        return detail

    def transform(self, raw: dict) -> Vote:
        """
        Transform Congress.gov house-vote data to our Vote model.

        Raises:
            ValidationError: Missing roll call number or date
        """
        congress = raw.get("congress") or self.congress
        roll_number = raw.get("rollCallNumber")
        if roll_number is None:
            raise ValidationError("Missing rollCallNumber")

        vote_date = parse_vote_date(raw.get("startDate") or raw.get("date"))
        if vote_date is None:
            raise ValidationError(f"Missing or invalid date for roll call {roll_number}")

        legislation_type = raw.get("legislationType")
        legislation_number = raw.get("legislationNumber")
        if legislation_type and legislation_number:
            bill_id = f"{legislation_type.lower()}-{legislation_number}-{congress}"
            bill_label = f"{legislation_type.upper()} {legislation_number}"
        else:
            bill_id = f"roll-{roll_number}-{congress}"
            bill_label = f"Roll Call {roll_number}"

        description = raw.get("voteDescription")
        title = raw.get("title") or raw.get("legislationTitle") or description or bill_label

        return Vote(
            vote_id=f"house-roll-{roll_number}-{congress}",
            bill_id=bill_id,
            congress=int(congress),
            title=title,
            description=description if description != title else None,
            chamber="house",
            vote_date=vote_date,
            question=raw.get("voteQuestion"),
            result=normalize_result(raw.get("result")),
            url=raw.get("legislationUrl"),
        )

    async def load(self, vote: Vote, raw_data: dict) -> bool:
        """Save the vote and every member position. True if the vote is new."""
        was_insert = await self.store.upsert_vote(vote)
        await self._save_positions(vote, raw_data.get("memberVotes", []))
        return was_insert

    async def _save_positions(self, vote: Vote, member_votes: Iterable[dict]) -> int:
        saved = 0
        for member_vote in member_votes:
            member_id = member_vote.get("bioguideId") or member_vote.get("member_id")
            position = normalize_position(member_vote.get("voteCast") or member_vote.get("position"))

            if not member_id or position is None:
                self.logger.warning(f"Skipping unusable position on {vote.vote_id}: {member_vote}")
                continue

            await self.store.upsert_position(
                MemberVote(member_id=member_id, vote_id=vote.vote_id, position=position)
            )
            saved += 1

        self.logger.debug(f"Saved {saved} member votes for {vote.vote_id}")
        return saved

    async def ingest_vote(self, raw: dict, positions: Iterable[dict]) -> Vote:
        """
        Transform and upsert one vote together with its positions.

        Args:
            raw: Raw vote record
            positions: [{"bioguideId"/"member_id": ..., "voteCast"/"position": ...}]

        Returns:
            The stored Vote
        """
        vote = self.transform(raw)
        await self.store.upsert_vote(vote)
        await self._save_positions(vote, positions)
        return vote
