"""Shared fixtures: a fresh pair of in-memory stores per test, plus builders."""

from __future__ import annotations

from datetime import date

import pytest

from votematch.database import InMemoryPreferenceStore, InMemoryVoteStore
from votematch.models import MemberVote, Representative, UserPreference, Vote


@pytest.fixture
def vote_store():
    return InMemoryVoteStore()


@pytest.fixture
def preference_store():
    return InMemoryPreferenceStore()


@pytest.fixture
def make_vote():
    """Build a Vote with sensible defaults."""

    def _make(vote_id: str, title: str = "A bill to rename a post office",
              vote_date: date = date(2023, 5, 12), **extra) -> Vote:
        return Vote(
            vote_id=vote_id,
            bill_id=extra.pop("bill_id", f"hr-{vote_id}-118"),
            title=title,
            chamber=extra.pop("chamber", "house"),
            vote_date=vote_date,
            result=extra.pop("result", "passed"),
            **extra,
        )

    return _make


@pytest.fixture
def make_position():
    def _make(member_id: str, vote_id: str, position: str) -> MemberVote:
        return MemberVote(member_id=member_id, vote_id=vote_id, position=position)

    return _make


@pytest.fixture
def make_preference():
    def _make(user_id: str, vote_id: str, agreement: bool, importance: int = 3) -> UserPreference:
        return UserPreference(
            user_id=user_id, vote_id=vote_id, agreement=agreement, importance=importance
        )

    return _make


@pytest.fixture
def make_representative():
    def _make(member_id: str, first_name: str, last_name: str,
              state: str = "VT", chamber: str = "senate", party: str = "I",
              district: int | None = None) -> Representative:
        return Representative(
            member_id=member_id,
            first_name=first_name,
            last_name=last_name,
            full_name=f"{first_name} {last_name}",
            chamber=chamber,
            party=party,
            state=state,
            district=district,
        )

    return _make
