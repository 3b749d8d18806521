"""Tests for the importance scale and model validation."""

from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError as PydanticValidationError

from votematch.config import settings
from votematch.models import (
    ImportanceTier,
    MemberVote,
    Representative,
    UserPreference,
    scale_to_tier,
    tier_to_scale,
)
from votematch.services.preferences import set_preference


class TestImportanceScale:

    @pytest.mark.parametrize("level, tier", [
        (1, ImportanceTier.LOW),
        (2, ImportanceTier.LOW),
        (3, ImportanceTier.MEDIUM),
        (4, ImportanceTier.HIGH),
        (5, ImportanceTier.HIGH),
    ])
    def test_default_mapping(self, level, tier):
        assert scale_to_tier(level) == tier

    def test_custom_thresholds(self):
        assert scale_to_tier(3, low_max=1, medium_max=4) == ImportanceTier.MEDIUM
        assert scale_to_tier(1, low_max=1, medium_max=4) == ImportanceTier.LOW

    @pytest.mark.parametrize("tier", list(ImportanceTier))
    def test_tier_round_trip(self, tier):
        assert scale_to_tier(tier_to_scale(tier)) == tier

    def test_tier_name_accepted(self):
        assert tier_to_scale("medium") == 3


class TestUserPreference:

    def test_tier_is_computed(self):
        pref = UserPreference(user_id="u", vote_id="v", agreement=False, importance=2)
        assert pref.tier == ImportanceTier.LOW
        assert pref.model_dump()["tier"] == ImportanceTier.LOW

    def test_importance_above_scale(self):
        with pytest.raises(PydanticValidationError):
            UserPreference(user_id="u", vote_id="v", agreement=True, importance=6)

    def test_agreement_is_strict(self):
        with pytest.raises(PydanticValidationError):
            UserPreference(user_id="u", vote_id="v", agreement="yes", importance=3)


class TestMemberVote:

    @pytest.mark.parametrize("position, scoring", [
        ("Yes", True), ("No", True), ("Present", False), ("Not Voting", False),
    ])
    def test_is_scoring(self, position, scoring):
        assert MemberVote(member_id="m", vote_id="v", position=position).is_scoring is scoring

    def test_unknown_position_rejected(self):
        with pytest.raises(PydanticValidationError):
            MemberVote(member_id="m", vote_id="v", position="Maybe")


class TestRepresentative:

    def test_str_senator(self, make_representative):
        rep = make_representative("S000033", "Bernard", "Sanders")
        assert str(rep) == "Sen. Bernard Sanders (I-VT)"

    def test_str_house(self, make_representative):
        rep = make_representative("M001213", "Blake", "Moore", state="UT",
                                  chamber="house", party="R", district=1)
        assert str(rep) == "Rep. Blake Moore (R-UT) (District 1)"

    def test_state_must_be_two_letters(self):
        with pytest.raises(PydanticValidationError):
            Representative(member_id="x", first_name="A", last_name="B", full_name="A B",
                           chamber="house", party="D", state="Utah")


class TestThreeLevelScale:
    """A 1..3 scale gives each tier exactly one level."""

    @pytest.fixture(autouse=True)
    def _three_levels(self, monkeypatch):
        monkeypatch.setattr(settings, "IMPORTANCE_SCALE_MAX", 3)
        monkeypatch.setattr(settings, "IMPORTANCE_LOW_MAX", None)
        monkeypatch.setattr(settings, "IMPORTANCE_MEDIUM_MAX", None)

    @pytest.mark.parametrize("tier, level", [
        (ImportanceTier.LOW, 1),
        (ImportanceTier.MEDIUM, 2),
        (ImportanceTier.HIGH, 3),
    ])
    def test_round_trip(self, tier, level):
        assert tier_to_scale(tier) == level
        assert scale_to_tier(level) == tier

    def test_high_preference_stays_high(self, preference_store):
        stored = asyncio.run(set_preference(preference_store, "u", "v", True, "high"))
        assert stored.importance == 3
        assert stored.tier == ImportanceTier.HIGH
