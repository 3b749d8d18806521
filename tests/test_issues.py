"""Tests for keyword-based issue classification."""

from __future__ import annotations

from votematch.config.constants import ISSUE_TAXONOMY
from votematch.scoring.issues import classify_issue, issue_categories


class TestClassifyIssue:
    """First matching category in priority order wins."""

    def test_climate_is_environment(self):
        assert classify_issue("Climate Action Now Act") == "Environment"

    def test_no_keyword_is_other(self):
        assert classify_issue("A bill to rename a post office") == "Other"

    def test_case_insensitive(self):
        assert classify_issue("BORDER SECURITY ENHANCEMENT") == "Immigration"

    def test_description_is_searched(self):
        assert classify_issue("H.R. 5", "Expands Pell Grant eligibility") == "Education"

    def test_priority_order(self):
        # Healthcare is listed before Economy
        assert classify_issue("Health Care Tax Relief Act") == "Healthcare"

    def test_keyword_prefix_matches(self):
        assert classify_issue("Economic Growth Act") == "Economy"

    def test_empty_title(self):
        assert classify_issue("") == "Other"

    def test_none_title(self):
        assert classify_issue(None) == "Other"

    def test_non_text_input(self):
        assert classify_issue(42) == "Other"

    def test_custom_taxonomy(self):
        taxonomy = (("Agriculture", ("farm", "crop")),)
        assert classify_issue("Farm Bill", taxonomy=taxonomy) == "Agriculture"
        assert classify_issue("Climate Action Now Act", taxonomy=taxonomy) == "Other"


class TestIssueCategories:

    def test_other_is_last(self):
        categories = issue_categories()
        assert categories[-1] == "Other"
        assert categories[:-1] == [category for category, _ in ISSUE_TAXONOMY]
