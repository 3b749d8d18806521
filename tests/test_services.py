"""Tests for representative lookups, recent views and voting history."""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timedelta, timezone

import pytest

from votematch.errors import ValidationError
from votematch.services import (
    find_representatives,
    get_recent_representatives,
    get_voting_history,
    list_categories,
    record_view,
    set_preference,
    timeframe_start,
)

TODAY = date(2024, 6, 15)


@pytest.fixture
def vermont(vote_store, make_representative):
    reps = [
        make_representative("S000033", "Bernard", "Sanders"),
        make_representative("W000800", "Peter", "Welch", party="D"),
        make_representative("B001318", "Becca", "Balint", chamber="house", party="D", district=0),
        make_representative("M001213", "Blake", "Moore", state="UT", chamber="house",
                            party="R", district=1),
    ]
    for rep in reps:
        asyncio.run(vote_store.upsert_representative(rep))
    return reps


@pytest.fixture
def history(vote_store, make_vote, make_position):
    """Five votes for S000033 spread over a year."""
    rows = [
        ("v1", "Climate Action Now Act", date(2024, 6, 10), "Yes"),
        ("v2", "Tax Relief Act", date(2024, 5, 1), "No"),
        ("v3", "Clean Energy Jobs Act", date(2024, 1, 20), "Present"),
        ("v4", "Border Security Act", date(2023, 11, 2), "Yes"),
        ("v5", "Renewable Fuels Act", date(2023, 6, 1), "No"),
    ]

    async def _run():
        for vote_id, title, vote_date, position in rows:
            await vote_store.upsert_vote(make_vote(vote_id, title=title, vote_date=vote_date))
            await vote_store.upsert_position(make_position("S000033", vote_id, position))

    asyncio.run(_run())
    return rows


class TestFindRepresentatives:

    def test_by_state_name(self, vote_store, vermont):
        found = asyncio.run(find_representatives(vote_store, state="Vermont"))
        assert [r.last_name for r in found] == ["Balint", "Sanders", "Welch"]

    def test_by_state_and_chamber(self, vote_store, vermont):
        found = asyncio.run(find_representatives(vote_store, state="vt", chamber="Senate"))
        assert [r.member_id for r in found] == ["S000033", "W000800"]

    def test_by_partial_name(self, vote_store, vermont):
        found = asyncio.run(find_representatives(vote_store, name="  moore "))
        assert [r.member_id for r in found] == ["M001213"]

    def test_no_filters_returns_all(self, vote_store, vermont):
        assert len(asyncio.run(find_representatives(vote_store))) == 4

    def test_unknown_state(self, vote_store, vermont):
        with pytest.raises(ValidationError):
            asyncio.run(find_representatives(vote_store, state="Atlantis"))

    def test_unknown_chamber(self, vote_store, vermont):
        with pytest.raises(ValidationError):
            asyncio.run(find_representatives(vote_store, chamber="parliament"))


class TestRecentRepresentatives:

    def _view(self, preference_store, member_id, minutes_ago, limit=None):
        viewed_at = datetime(2024, 6, 15, 12, tzinfo=timezone.utc) - timedelta(minutes=minutes_ago)
        asyncio.run(record_view(preference_store, "u1", member_id, viewed_at=viewed_at, limit=limit))

    def test_newest_first(self, vote_store, preference_store, vermont):
        self._view(preference_store, "S000033", 10)
        self._view(preference_store, "M001213", 5)
        recent = asyncio.run(get_recent_representatives(preference_store, vote_store, "u1"))
        assert [r.member_id for r in recent] == ["M001213", "S000033"]

    def test_limit_evicts(self, vote_store, preference_store, vermont):
        for minutes_ago, rep in zip((40, 30, 20, 10), vermont):
            self._view(preference_store, rep.member_id, minutes_ago, limit=2)
        recent = asyncio.run(get_recent_representatives(preference_store, vote_store, "u1", limit=10))
        assert [r.member_id for r in recent] == ["M001213", "B001318"]

    def test_skips_unknown_members(self, vote_store, preference_store, vermont):
        self._view(preference_store, "GONE", 1)
        self._view(preference_store, "S000033", 2)
        recent = asyncio.run(get_recent_representatives(preference_store, vote_store, "u1"))
        assert [r.member_id for r in recent] == ["S000033"]

    def test_default_timestamp(self, preference_store):
        view = asyncio.run(record_view(preference_store, "u1", "S000033"))
        assert view.viewed_at.tzinfo is not None

    def test_rejects_empty_ids(self, preference_store):
        with pytest.raises(ValidationError):
            asyncio.run(record_view(preference_store, "", "S000033"))


class TestTimeframeStart:

    def test_all(self):
        assert timeframe_start("all", TODAY) is None
        assert timeframe_start(None, TODAY) is None

    def test_relative(self):
        assert timeframe_start("30d", TODAY) == date(2024, 5, 16)
        assert timeframe_start("90d", TODAY) == date(2024, 3, 17)

    def test_year(self):
        assert timeframe_start("year", TODAY) == date(2024, 1, 1)

    def test_unknown(self):
        with pytest.raises(ValidationError):
            timeframe_start("decade", TODAY)


class TestVotingHistory:

    def test_newest_first(self, vote_store, history):
        records = asyncio.run(get_voting_history(vote_store, "S000033", today=TODAY))
        assert [r.vote.vote_id for r in records] == ["v1", "v2", "v3", "v4", "v5"]
        assert records[0].issue == "Environment"
        assert records[0].preference is None
        assert records[0].aligned is None

    def test_category_filter(self, vote_store, history):
        records = asyncio.run(get_voting_history(
            vote_store, "S000033", category="environment", today=TODAY
        ))
        assert [r.vote.vote_id for r in records] == ["v1", "v3", "v5"]

    def test_timeframe_filter(self, vote_store, history):
        records = asyncio.run(get_voting_history(
            vote_store, "S000033", timeframe="90d", today=TODAY
        ))
        assert [r.vote.vote_id for r in records] == ["v1", "v2"]

    def test_year_filter(self, vote_store, history):
        records = asyncio.run(get_voting_history(
            vote_store, "S000033", timeframe="year", today=TODAY
        ))
        assert [r.vote.vote_id for r in records] == ["v1", "v2", "v3"]

    def test_attaches_preferences(self, vote_store, preference_store, history):
        asyncio.run(set_preference(preference_store, "u1", "v1", True, "high"))
        asyncio.run(set_preference(preference_store, "u1", "v2", True, "low"))
        asyncio.run(set_preference(preference_store, "u1", "v3", True, "low"))

        records = {
            r.vote.vote_id: r
            for r in asyncio.run(get_voting_history(
                vote_store, "S000033", preference_store=preference_store, user_id="u1", today=TODAY
            ))
        }
        assert records["v1"].aligned is True
        assert records["v2"].aligned is False
        # Present is never scored
        assert records["v3"].preference is not None
        assert records["v3"].aligned is None
        assert records["v4"].preference is None

    def test_unknown_member(self, vote_store, history):
        assert asyncio.run(get_voting_history(vote_store, "X000000")) == []


class TestListCategories:

    def test_taxonomy_order(self, vote_store, history):
        assert asyncio.run(list_categories(vote_store)) == ["Economy", "Environment", "Immigration"]

    def test_empty_store(self, vote_store):
        assert asyncio.run(list_categories(vote_store)) == []
