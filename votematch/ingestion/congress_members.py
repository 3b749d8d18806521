"""
Ingester for current members of Congress from the Congress.gov API.

Keeps the representatives in the vote store up to date. Re-running a sync
upserts every member by member_id.
"""
import asyncio
import logging
from datetime import date
from typing import AsyncGenerator, Optional

import httpx

from votematch.config.constants import (
    CONGRESS_GOV_BASE_URL,
    CURRENT_CONGRESS,
    RATE_LIMIT_DELAY,
    US_STATES,
)
from votematch.config.settings import settings
from votematch.database.base import VoteStore
from votematch.database.normalization import (
    normalize_chamber,
    normalize_party,
    normalize_state,
)
from votematch.errors import ValidationError
from votematch.ingestion.base import BaseIngester
from votematch.models import Representative

logger = logging.getLogger(__name__)


class CongressMembersIngester(BaseIngester[Representative]):
    """
    Ingest current members of Congress from Congress.gov.

    Uses the /member/congress/{congress}/{state} endpoint with
    currentMember=true to get only active legislators.
    """

    def __init__(
        self,
        store: VoteStore,
        congress: int = CURRENT_CONGRESS,
        state_filter: Optional[str] = None,
        chamber_filter: Optional[str] = None,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        request_delay: float = RATE_LIMIT_DELAY
    ):
        """
        Initialize the ingester.

        Args:
            store: Vote store to upsert representatives into
            congress: Congress number (e.g., 118 for 2023-2025)
            state_filter: Optional 2-letter state code; None fetches all states
            chamber_filter: Optional "senate" or "house"
            api_key: Congress.gov key (default: settings)
            transport: Custom httpx transport (tests use httpx.MockTransport)
            request_delay: Seconds to sleep between requests
        """
        super().__init__(store)
        self.congress = congress
        self.state_filter = state_filter.upper() if state_filter else None
        self.chamber_filter = chamber_filter.lower() if chamber_filter else None
        self.api_key = api_key or settings.CONGRESS_GOV_API_KEY
        self.base_url = CONGRESS_GOV_BASE_URL
        self.transport = transport
        self.request_delay = request_delay

        if self.state_filter:
            self.logger.info(f"State filter: {self.state_filter}")
        if self.chamber_filter:
            self.logger.info(f"Chamber filter: {self.chamber_filter}")

    async def fetch_data(self, **kwargs) -> AsyncGenerator[dict, None]:
        """
        Fetch current members, optionally filtered by state and chamber.

        Yields:
            Raw member data from Congress.gov API, with "state_code" added
        """
        states_to_fetch = [self.state_filter] if self.state_filter else US_STATES

        async with httpx.AsyncClient(timeout=30.0, transport=self.transport) as client:
            for state_code in states_to_fetch:
                url = f"{self.base_url}/member/congress/{self.congress}/{state_code}"
                params = {
                    "currentMember": "true",
                    "api_key": self.api_key,
                    "format": "json",
                    "limit": 250
                }

                try:
                    self.logger.info(f"Fetching members for {state_code}...")
                    response = await client.get(url, params=params)

                    if response.status_code == 404:
                        # Some territories have no data
                        self.logger.debug(f"No data for {state_code}")
                        continue

                    response.raise_for_status()
                    members = response.json().get("members", [])
                except httpx.HTTPError as e:
                    self.logger.error(f"HTTP error fetching {state_code}: {e}")
                    self.stats["errors"] += 1
                    continue

                self.logger.info(f"Found {len(members)} members for {state_code}")

                for member in members:
                    member["state_code"] = state_code

                    if self.chamber_filter and self._extract_chamber(member) != self.chamber_filter:
                        continue

                    yield member

                # Respect rate limits (5000/hour)
                await asyncio.sleep(self.request_delay)

    @staticmethod
    def _current_term(member: dict) -> dict:
        terms = member.get("terms", {})
        if isinstance(terms, dict):
            terms = terms.get("item", [])
        # Last term is the most recent
        return terms[-1] if terms else {}

    def _extract_chamber(self, member: dict) -> Optional[str]:
        """Chamber ("senate", "house" or None) of the most recent term."""
        return normalize_chamber(self._current_term(member).get("chamber"))

    def transform(self, raw: dict) -> Representative:
        """
        Transform Congress.gov member data to our Representative model.

        Raises:
            ValidationError: Missing bioguideId or unusable state/chamber
        """
        member_id = raw.get("bioguideId")
        if not member_id:
            raise ValidationError(f"Missing bioguideId for {raw.get('name')!r}")

        term = self._current_term(raw)
        chamber = normalize_chamber(term.get("chamber") or raw.get("chamber"))
        if chamber is None:
            raise ValidationError(f"Unknown chamber for {member_id}")

        state = normalize_state(raw.get("state_code") or raw.get("state"))
        if state is None:
            raise ValidationError(f"Unknown state for {member_id}: {raw.get('state')!r}")

        district = None
        if chamber == "house" and raw.get("district") not in (None, ""):
            try:
                district = int(raw["district"])
            except (TypeError, ValueError):
                raise ValidationError(
                    f"Invalid district for {member_id}: {raw['district']!r}"
                ) from None

        # API returns "Last, First" or "Last, First Middle"
        full_name_raw = raw.get("name", "")
        if ", " in full_name_raw:
            last_name, first_name = (part.strip() for part in full_name_raw.split(", ", 1))
        else:
            name_parts = full_name_raw.split()
            first_name = name_parts[0] if name_parts else ""
            last_name = name_parts[-1] if len(name_parts) > 1 else ""
        full_name = f"{first_name} {last_name}".strip() or full_name_raw

        # Terms begin on January 3rd
        office_start = None
        if term.get("startYear"):
            office_start = date(int(term["startYear"]), 1, 3)

        return Representative(
            member_id=member_id,
            first_name=first_name,
            last_name=last_name,
            full_name=full_name,
            chamber=chamber,
            party=normalize_party(raw.get("partyName") or raw.get("party")),
            state=state,
            district=district,
            office_start=office_start,
            image_url=(raw.get("depiction") or {}).get("imageUrl"),
        )

    async def load(self, representative: Representative, raw_data: dict) -> bool:
        """Upsert representative. True if this was a new insert."""
        return await self.store.upsert_representative(representative)

    async def ingest_member(self, raw: dict) -> Representative:
        """
        Transform and upsert a single raw member record.

        Raises:
            ValidationError: If the record cannot be transformed
        """
        representative = self.transform(raw)
        await self.load(representative, raw)
        return representative

    async def run_full_sync(self) -> dict:
        """
        Run a complete sync of all current members.

        Respects state_filter and chamber_filter if set during initialization.
        """
        filters = []
        if self.state_filter:
            filters.append(f"state={self.state_filter}")
        if self.chamber_filter:
            filters.append(f"chamber={self.chamber_filter}")
        suffix = f" ({', '.join(filters)})" if filters else ""
        self.logger.info(f"Starting sync of Congress {self.congress} members{suffix}")

        return await self.run()
