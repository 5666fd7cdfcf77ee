import io
import sys
from pathlib import Path

import docx
import pytest

# Add src to sys.path so we can import poll_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from poll_toolkit.core.models.questions import Category, Question  # noqa: E402


SAMPLE_POLL_TEXT = """POLL OF LIKELY VOTERS
March 2024

SCREEN: Are you registered to vote at your current address?
Yes
No

Q1: Do you approve or disapprove of the job Governor Smith is doing?
Strongly approve
Somewhat approve

Q2. If the election were held today, for whom would you vote?
Undecided

Q3: Do you support or oppose the new highway project?
Strongly support
Strongly oppose

DEMOGRAPHICS: What is your age?
Under 30
Over 30
"""


@pytest.fixture
def sample_poll_text() -> str:
    """Poll text with five recognizable question blocks."""
    return SAMPLE_POLL_TEXT


@pytest.fixture
def make_question():
    """Factory for Question records with sensible defaults."""
    def _make(
        qid: str = "poll_Q1",
        text: str = "Do you approve or disapprove of the job the mayor is doing?",
        category: Category = Category.JOB_APPROVAL,
        source: str = "poll",
        marker: str = "Q1",
    ) -> Question:
        return Question(
            id=qid,
            text=text,
            full_text=text,
            category=category,
            source=source,
            marker=marker,
        )
    return _make


@pytest.fixture
def make_docx():
    """Factory building DOCX bytes with one paragraph per line."""
    def _make(text: str) -> bytes:
        document = docx.Document()
        for line in text.split("\n"):
            document.add_paragraph(line)
        buffer = io.BytesIO()
        document.save(buffer)
        return buffer.getvalue()
    return _make
