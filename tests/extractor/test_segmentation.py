"""
Unit Tests for Segmentation

Tests for marker detection and question-prompt trimming.
"""

from poll_toolkit.extractor.segmentation import segment_text, trim_question_text


class TestSegmentText:
    def test_segment_when_three_markers_then_three_segments_in_order(self):
        text = "Q1: First question text here\nQ2: Second question text\nSCREEN: Screen question text"
        segments = segment_text(text)
        assert [s.marker for s in segments] == ["Q1:", "Q2:", "SCREEN:"]
        assert [s.content.strip() for s in segments] == [
            "First question text here",
            "Second question text",
            "Screen question text",
        ]

    def test_segment_when_preamble_then_preamble_ignored(self, sample_poll_text):
        segments = segment_text(sample_poll_text)
        assert [s.marker for s in segments] == ["SCREEN:", "Q1:", "Q2.", "Q3:", "DEMOGRAPHICS:"]
        assert all("LIKELY VOTERS" not in s.content for s in segments)

    def test_segment_when_no_markers_then_empty(self):
        assert segment_text("Just a paragraph of text with no markers at all.") == []

    def test_segment_when_marker_case_varies_then_still_detected(self):
        segments = segment_text("screen. Are you registered?\ndemographic: What is your age?")
        assert [s.marker for s in segments] == ["screen.", "demographic:"]

    def test_segment_when_marker_mid_line_then_not_a_marker(self):
        segments = segment_text("Q1: Compare option 2: the tax plan to the status quo?")
        assert len(segments) == 1
        assert "option 2: the tax plan" in segments[0].content

    def test_segment_when_bare_number_marker_then_detected(self):
        segments = segment_text("Intro\n  12. Is this the twelfth question?")
        assert [s.marker for s in segments] == ["12."]


class TestTrimQuestionText:
    def test_trim_when_options_follow_then_prompt_only(self):
        content = "Do you support the policy?\nYes\nNo\nUndecided"
        assert trim_question_text(content) == "Do you support the policy?"

    def test_trim_when_prompt_spans_lines_then_joined_with_spaces(self):
        content = "Thinking about the economy,\n\n  how would you rate it?\nVery good\nSomewhat good"
        assert trim_question_text(content) == "Thinking about the economy, how would you rate it?"

    def test_trim_when_first_line_is_option_then_empty(self):
        assert trim_question_text("Yes or no, do you agree?\nNo") == ""

    def test_trim_when_option_prefix_is_case_insensitive_then_stops(self):
        assert trim_question_text("Who leads the race?\nMORE LIKELY\nless likely") == "Who leads the race?"

    def test_trim_when_line_starts_with_option_word_prefix_then_stops(self):
        # Prefix match: "Nothing" starts with "No"
        assert trim_question_text("What would change your mind?\nNothing at all") == "What would change your mind?"
