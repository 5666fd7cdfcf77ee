"""
Unit Tests for DOCX Output

Writes a questionnaire and reads it back with python-docx.
"""

import docx
import pytest
from docx.enum.text import WD_ALIGN_PARAGRAPH

from poll_toolkit.builder.output.docx_writer import DEFAULT_TITLE, subtitle_text, write_docx
from poll_toolkit.builder.template import Party, QuestionnaireTemplate, RaceConfig
from poll_toolkit.core.models.questions import Category


@pytest.fixture
def template(make_question) -> QuestionnaireTemplate:
    config = RaceConfig(
        race_name="GA SD 18 Special Election",
        district="Senate District 18",
        election_date="June 18, 2024",
        candidates=("Ann Lee",),
        party=Party.DEM,
    )
    template = QuestionnaireTemplate(config=config)
    template.add(make_question("poll_Q1"))
    template.add(make_question(
        "poll_Q2", text="Do you have a favorable or unfavorable opinion of [CANDIDATE_1]?",
        category=Category.FAVORABILITY, marker="Q2",
    ))
    return template


def test_subtitle_text_skips_empty_parts():
    assert subtitle_text(RaceConfig(election_date="June 18")) == "June 18 | GOP"


def test_write_docx_when_written_then_layout_readable(template, tmp_path):
    path = write_docx(template, tmp_path / "nested" / "poll.docx")
    paragraphs = docx.Document(str(path)).paragraphs

    assert paragraphs[0].text == "GA SD 18 Special Election"
    assert paragraphs[0].style.name == "Heading 1"
    assert paragraphs[0].alignment == WD_ALIGN_PARAGRAPH.CENTER
    assert paragraphs[1].text == "Senate District 18 | June 18, 2024 | DEM"
    assert paragraphs[2].text == ""
    assert [p.text for p in paragraphs[3:]] == [
        "Q1: Do you approve or disapprove of the job the mayor is doing?",
        "[JOB_APPROVAL]",
        "Q2: Do you have a favorable or unfavorable opinion of Ann Lee?",
        "[FAVORABILITY]",
    ]


def test_write_docx_when_written_then_number_label_bold(template, tmp_path):
    path = write_docx(template, tmp_path / "poll.docx")
    runs = docx.Document(str(path)).paragraphs[3].runs
    assert runs[0].text == "Q1: "
    assert runs[0].bold is True


def test_write_docx_when_divider_then_bottom_border(template, tmp_path):
    path = write_docx(template, tmp_path / "poll.docx")
    divider = docx.Document(str(path)).paragraphs[2]
    assert "w:pBdr" in divider._p.xml


def test_write_docx_when_custom_text_then_used(template, tmp_path):
    template.set_custom_text("poll_Q1", "How is [CANDIDATE] doing?")
    path = write_docx(template, tmp_path / "poll.docx")
    assert docx.Document(str(path)).paragraphs[3].text == "Q1: How is Ann Lee doing?"


def test_write_docx_when_no_race_name_then_default_title(make_question, tmp_path):
    template = QuestionnaireTemplate()
    template.add(make_question())
    path = write_docx(template, tmp_path / "poll.docx")
    assert docx.Document(str(path)).paragraphs[0].text == DEFAULT_TITLE
