"""
Unit Tests for Question Model

Tests for the Question dataclass and the Category enumeration.
"""

import pytest

from poll_toolkit.core.models.questions import Category, Question


class TestCategory:
    """Tests for Category enum."""

    def test_values_when_listed_then_closed_set_in_match_order(self):
        assert [c.value for c in Category] == [
            "screener",
            "favorability",
            "job_approval",
            "top_of_ballot",
            "persuasion",
            "policy",
            "issue",
            "demographics",
            "other",
        ]

    def test_label_when_accessed_then_human_readable(self):
        assert Category.JOB_APPROVAL.label == "Job Approval"
        assert Category.TOP_OF_BALLOT.label == "Top of Ballot"
        assert Category.OTHER.label == "Other"

    def test_parse_when_unknown_value_then_other(self):
        assert Category.parse("horse_race") is Category.OTHER

    def test_parse_when_known_value_then_member(self):
        assert Category.parse("policy") is Category.POLICY


class TestQuestion:
    """Tests for Question dataclass."""

    def test_init_when_empty_id_then_raises_error(self):
        with pytest.raises(ValueError, match="id must not be empty"):
            Question(id="", text="t", full_text="t", category=Category.OTHER, source="s", marker="Q1")

    def test_init_when_category_is_string_then_raises_error(self):
        with pytest.raises(ValueError, match="category must be a Category"):
            Question(id="s_Q1", text="t", full_text="t", category="policy", source="s", marker="Q1")

    def test_frozen_when_assigned_then_raises(self, make_question):
        q = make_question()
        with pytest.raises(Exception):
            q.text = "changed"

    def test_to_dict_when_serialized_then_category_is_string(self, make_question):
        d = make_question().to_dict()
        assert d == {
            "id": "poll_Q1",
            "text": "Do you approve or disapprove of the job the mayor is doing?",
            "full_text": "Do you approve or disapprove of the job the mayor is doing?",
            "category": "job_approval",
            "source": "poll",
            "marker": "Q1",
        }

    def test_from_dict_when_stored_record_then_equal_question(self, make_question):
        q = make_question()
        assert Question.from_dict(q.to_dict()) == q

    def test_from_dict_when_full_text_missing_then_uses_text(self):
        q = Question.from_dict({
            "id": "a_Q1", "text": "Some question?", "category": "issue",
            "source": "a", "marker": "Q1",
        })
        assert q.full_text == "Some question?"
        assert q.category is Category.ISSUE
