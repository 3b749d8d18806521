"""Tests for the alignment engine.

Covers the pure aggregation (score_alignment) and the store-backed entry
point (compute_alignment), including the partition properties every
breakdown must satisfy.
"""

from __future__ import annotations

import asyncio
from datetime import date
from unittest.mock import AsyncMock

import pytest

from votematch.errors import StoreUnavailableError, ValidationError
from votematch.models import VotePosition
from votematch.scoring.engine import (
    compute_alignment,
    is_aligned,
    match_positions,
    score_alignment,
)

REP = "S000033"
USER = "user-1"


@pytest.fixture
def seed(vote_store, preference_store, make_vote, make_position, make_preference):
    """Load rows of (vote_id, title, vote_date, position, agreement, importance)."""

    def _seed(rows):
        async def _run():
            for vote_id, title, vote_date, position, agreement, importance in rows:
                await vote_store.upsert_vote(make_vote(vote_id, title=title, vote_date=vote_date))
                await vote_store.upsert_position(make_position(REP, vote_id, position))
                await preference_store.upsert_preference(
                    make_preference(USER, vote_id, agreement, importance)
                )

        asyncio.run(_run())

    return _seed


def _compute(vote_store, preference_store, user_id=USER, representative_id=REP):
    return asyncio.run(compute_alignment(vote_store, preference_store, user_id, representative_id))


class TestIsAligned:

    def test_yes_and_agree(self):
        assert is_aligned(VotePosition.YES, True) is True

    def test_no_and_disagree(self):
        assert is_aligned(VotePosition.NO, False) is True

    def test_yes_and_disagree(self):
        assert is_aligned(VotePosition.YES, False) is False

    def test_no_and_agree(self):
        assert is_aligned(VotePosition.NO, True) is False


class TestMatchPositions:

    def test_drops_present_and_not_voting(self, make_preference, make_position):
        preferences = [make_preference(USER, v, True) for v in ("v1", "v2", "v3")]
        positions = [
            make_position(REP, "v1", "Yes"),
            make_position(REP, "v2", "Present"),
            make_position(REP, "v3", "Not Voting"),
        ]
        pairs = match_positions(preferences, positions)
        assert [pref.vote_id for pref, _ in pairs] == ["v1"]

    def test_only_intersection(self, make_preference, make_position):
        preferences = [make_preference(USER, "v1", True), make_preference(USER, "v9", True)]
        positions = [make_position(REP, "v1", "No"), make_position(REP, "v2", "Yes")]
        pairs = match_positions(preferences, positions)
        assert [pos.vote_id for _, pos in pairs] == ["v1"]


class TestReferenceScenario:
    """v1 Yes / v2 No / v3 Present against three preferences."""

    def _result(self, seed, vote_store, preference_store):
        seed([
            ("v1", "Climate Action Now Act", date(2023, 5, 12), "Yes", True, 5),
            ("v2", "Border Security Act", date(2023, 5, 28), "No", True, 1),
            ("v3", "Medicare Expansion Act", date(2023, 6, 2), "Present", False, 5),
        ])
        return _compute(vote_store, preference_store)

    def test_overall(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        assert result.overall.total == 2
        assert result.overall.agree == 1
        assert result.overall.disagree == 1
        assert result.overall.percentage == 50

    def test_present_vote_excluded_everywhere(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        assert "Healthcare" not in result.by_issue
        assert [b.period for b in result.over_time] == ["2023-05"]

    def test_by_importance(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        assert result.by_importance.high.total == 1
        assert result.by_importance.high.agree == 1
        assert result.by_importance.low.total == 1
        assert result.by_importance.low.disagree == 1
        assert result.by_importance.medium.total == 0
        assert result.by_importance.medium.percentage == 0

    def test_by_importance_level(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        assert list(result.by_importance_level) == ["1", "2", "3", "4", "5"]
        assert result.by_importance_level["5"].agree == 1
        assert result.by_importance_level["1"].disagree == 1
        assert result.by_importance_level["3"].total == 0

    def test_by_issue(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        assert list(result.by_issue) == ["Environment", "Immigration"]
        assert result.by_issue["Environment"].percentage == 100
        assert result.by_issue["Immigration"].percentage == 0

    def test_same_month_shares_a_bucket(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        assert len(result.over_time) == 1
        assert result.over_time[0].period == "2023-05"
        assert result.over_time[0].total == 2

    def test_distribution(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        assert result.distribution.strong_agreement == 1
        assert result.distribution.neutral == 1
        assert result.distribution.total == 2

    def test_echoes_identifiers(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        assert result.user_id == USER
        assert result.representative_id == REP


class TestPartitions:
    """Every breakdown sums back to overall."""

    ROWS = [
        ("a1", "Clean Water Act", date(2023, 1, 4), "Yes", True, 1),
        ("a2", "Tax Cuts Act", date(2023, 1, 20), "No", True, 2),
        ("a3", "Veterans Benefits Act", date(2023, 3, 1), "Yes", False, 3),
        ("a4", "School Lunch Act", date(2023, 7, 9), "No", False, 4),
        ("a5", "Post Office Naming", date(2024, 2, 14), "Yes", True, 5),
        ("a6", "Opioid Response Act", date(2024, 2, 15), "Not Voting", True, 5),
        ("a7", "Budget Resolution", date(2024, 4, 30), "No", True, 3),
    ]

    def _result(self, seed, vote_store, preference_store):
        seed(self.ROWS)
        return _compute(vote_store, preference_store)

    def test_overall_sums(self, seed, vote_store, preference_store):
        overall = self._result(seed, vote_store, preference_store).overall
        assert overall.total == 6
        assert overall.agree + overall.disagree == overall.total

    def test_tiers_partition_overall(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        tiers = result.by_importance
        assert tiers.low.total + tiers.medium.total + tiers.high.total == result.overall.total

    def test_levels_partition_overall(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        assert sum(b.total for b in result.by_importance_level.values()) == result.overall.total

    def test_issues_partition_overall(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        assert sum(b.total for b in result.by_issue.values()) == result.overall.total
        assert list(result.by_issue) == ["Economy", "Environment", "Defense", "Education", "Other"]

    def test_time_partitions_overall_in_order(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        periods = [b.period for b in result.over_time]
        assert periods == ["2023-01", "2023-03", "2023-07", "2024-02", "2024-04"]
        assert sum(b.total for b in result.over_time) == result.overall.total

    def test_distribution_partitions_overall(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        assert result.distribution.total == result.overall.total
        # a1, a2 low; a3, a7 medium (both misaligned); a4 high aligned; a5 high aligned
        assert result.distribution.neutral == 2
        assert result.distribution.disagreement == 2
        assert result.distribution.strong_agreement == 2

    def test_percentage_never_out_of_range(self, seed, vote_store, preference_store):
        result = self._result(seed, vote_store, preference_store)
        buckets = [result.overall, *result.by_issue.values(), *result.over_time]
        assert all(0 <= b.percentage <= 100 for b in buckets)


class TestEmptyInputs:

    def test_unknown_user_and_representative(self, vote_store, preference_store):
        result = _compute(vote_store, preference_store, "nobody", "X000000")
        assert result.overall.total == 0
        assert result.overall.percentage == 0
        assert result.by_issue == {}
        assert result.over_time == []
        assert result.distribution.total == 0

    def test_preferences_without_positions(self, vote_store, preference_store, make_preference):
        asyncio.run(preference_store.upsert_preference(make_preference(USER, "v1", True)))
        result = _compute(vote_store, preference_store)
        assert result.overall.total == 0

    def test_missing_vote_metadata_still_counts(self, make_preference, make_position):
        result = score_alignment(
            [make_preference(USER, "ghost", False, 2)],
            [make_position(REP, "ghost", "No")],
            votes={},
        )
        assert result.overall.agree == 1
        assert list(result.by_issue) == ["Other"]
        assert result.over_time[0].period == "unknown"


class TestComputeAlignmentErrors:

    def test_empty_user_id(self, vote_store, preference_store):
        with pytest.raises(ValidationError):
            _compute(vote_store, preference_store, "", REP)

    def test_non_string_representative(self, vote_store, preference_store):
        with pytest.raises(ValidationError):
            _compute(vote_store, preference_store, USER, None)

    def test_store_failure_propagates(self, preference_store):
        failing = AsyncMock()
        failing.get_positions.side_effect = StoreUnavailableError("down")
        with pytest.raises(StoreUnavailableError):
            asyncio.run(compute_alignment(failing, preference_store, USER, REP))

    def test_metadata_fetched_only_for_matched_votes(self, preference_store, make_preference, make_position):
        vote_store = AsyncMock()
        vote_store.get_positions.return_value = [
            make_position(REP, "v1", "Yes"),
            make_position(REP, "v2", "Yes"),
        ]
        vote_store.get_votes.return_value = {}
        asyncio.run(preference_store.upsert_preference(make_preference(USER, "v1", True)))

        result = asyncio.run(compute_alignment(vote_store, preference_store, USER, REP))

        vote_store.get_votes.assert_awaited_once_with(["v1"])
        assert result.overall.total == 1
