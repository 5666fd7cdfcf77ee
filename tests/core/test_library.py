"""
Unit Tests for QuestionLibrary

Tests for stats aggregation, source replacement and filtering.
"""

import pytest

from poll_toolkit.core.models.library import QuestionLibrary, compute_stats
from poll_toolkit.core.models.questions import Category
from poll_toolkit.core.schemas.validator import ValidationError


@pytest.fixture
def library(make_question) -> QuestionLibrary:
    return QuestionLibrary((
        make_question("march_Q1", category=Category.JOB_APPROVAL, source="march", marker="Q1"),
        make_question(
            "march_Q2", text="Do you support or oppose the stadium bond?",
            category=Category.POLICY, source="march", marker="Q2",
        ),
        make_question(
            "april_Q1", text="What is your age?",
            category=Category.DEMOGRAPHICS, source="april", marker="Q1",
        ),
    ))


class TestStats:
    def test_compute_stats_when_empty_then_zero_and_no_categories(self):
        stats = compute_stats([])
        assert stats.total_questions == 0
        assert stats.by_category == {}

    def test_stats_when_library_populated_then_counts_sum_to_total(self, library):
        stats = library.stats
        assert stats.total_questions == 3
        assert stats.by_category == {"job_approval": 1, "policy": 1, "demographics": 1}
        assert sum(stats.by_category.values()) == stats.total_questions


class TestReplaceSource:
    def test_replace_source_when_source_present_then_old_entries_removed(self, library, make_question):
        new = [make_question("march_Q9", source="march", marker="Q9")]
        updated = library.replace_source("march", new)
        assert [q.id for q in updated.questions] == ["april_Q1", "march_Q9"]

    def test_replace_source_when_applied_twice_then_same_result(self, library, make_question):
        new = [make_question("march_Q1", source="march")]
        once = library.replace_source("march", new)
        twice = once.replace_source("march", new)
        assert once.questions == twice.questions

    def test_remove_source_when_unknown_then_unchanged(self, library):
        assert library.remove_source("nope").questions == library.questions

    def test_init_when_duplicate_ids_then_validation_error(self, make_question):
        with pytest.raises(ValidationError, match="Duplicate question ids"):
            QuestionLibrary((make_question("a_Q1"), make_question("a_Q1")))


class TestFilter:
    def test_filter_when_no_criteria_then_all(self, library):
        assert len(library.filter()) == 3

    def test_filter_when_category_given_then_only_that_category(self, library):
        result = library.filter(categories=[Category.POLICY])
        assert [q.id for q in result] == ["march_Q2"]

    def test_filter_when_query_given_then_case_insensitive_match(self, library):
        result = library.filter(query="  STADIUM ")
        assert [q.id for q in result] == ["march_Q2"]

    def test_filter_when_query_matches_source_then_included(self, library):
        result = library.filter(query="april")
        assert [q.id for q in result] == ["april_Q1"]


def test_sources_lists_counts_in_first_seen_order(library):
    assert library.sources() == [("march", 2), ("april", 1)]


def test_to_dict_includes_stats_and_version(library):
    d = library.to_dict()
    assert d["stats"]["total_questions"] == 3
    assert d["version"] == 0
    assert d["categories"]["top_of_ballot"] == "Top of Ballot"
    assert d["sources"][0] == {"name": "march", "question_count": 2}
    assert QuestionLibrary.from_dict(d).questions == library.questions
