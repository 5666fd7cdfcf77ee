"""
Module: extractor.pipeline

Purpose:
    Orchestrates question extraction: segment raw text, trim each block to
    its prompt, classify it and build Question records; then merge the
    batch into the library, replacing everything previously extracted
    from the same source.

Key Functions:
    - parse_questions(): Text -> Question list (may be empty)
    - extract_questions(): Same, but an empty result is an error
    - merge_into_library(): Replace-by-source merge and snapshot save
    - question_id() / clean_marker(): Identifier helpers

Key Classes:
    - MergeResult: Counts reported after a merge

Dependencies:
    - extractor.segmentation: Marker detection and trimming
    - extractor.classification: Category assignment
    - storage.library_store: Snapshot persistence (merge only)

Used By:
    - admin.service: Document processing
    - cli: Dry-run extraction
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

from poll_toolkit.config import ExtractionConfig
from poll_toolkit.core.models.library import LibraryStats, QuestionLibrary
from poll_toolkit.core.models.questions import Question
from poll_toolkit.errors import NoQuestionsFoundError
from .classification import classify_question
from .segmentation import segment_text, trim_question_text

if TYPE_CHECKING:
    from poll_toolkit.storage.library_store import LibraryStore

logger = logging.getLogger(__name__)

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")
_MARKER_SUFFIX_RE = re.compile(r"[.:]\s*$")


def clean_marker(marker: str) -> str:
    """
    Strip trailing punctuation from a marker.

    Example:
        >>> clean_marker("Q12:")
        'Q12'
    """
    return _MARKER_SUFFIX_RE.sub("", marker.strip())


def question_id(source: str, marker: str) -> str:
    """
    Build a question id from its source and marker.

    Example:
        >>> question_id("march_poll", "SCREEN:")
        'march_poll_SCREEN'
    """
    return f"{source}_{_NON_ALNUM_RE.sub('', marker)}"


def parse_questions(
    text: str,
    source: str,
    *,
    config: Optional[ExtractionConfig] = None,
) -> List[Question]:
    """
    Extract classified questions from raw document text.

    Pipeline:
    1. Split text into (marker, content) segments
    2. Skip blocks whose stripped content is too short
    3. Trim each block to its prompt; skip prompts that are too short
    4. Classify and build the Question record

    A marker repeated within one document gets a numeric suffix
    ("src_Q1", "src_Q1-2") so ids stay unique.

    Args:
        text: Raw extracted document text
        source: Source label (document name without extension)
        config: Optional extraction thresholds

    Returns:
        Questions in document order, possibly empty
    """
    config = config or ExtractionConfig()
    questions: List[Question] = []
    seen_ids: Dict[str, int] = {}

    segments = segment_text(text)
    logger.debug(f"Found {len(segments)} marker(s) in {source!r}")

    for segment in segments:
        content = segment.content.strip()
        if not content or len(content) < config.min_content_length:
            logger.debug(f"Skipping {segment.marker}: content too short")
            continue

        question_text = trim_question_text(content)
        if len(question_text) < config.min_question_length:
            logger.debug(f"Skipping {segment.marker}: question text too short")
            continue

        qid = question_id(source, segment.marker)
        occurrence = seen_ids.get(qid, 0) + 1
        seen_ids[qid] = occurrence
        if occurrence > 1:
            logger.warning(f"Repeated marker {segment.marker!r} in {source!r}")
            qid = f"{qid}-{occurrence}"

        questions.append(
            Question(
                id=qid,
                text=question_text,
                full_text=content[:config.full_text_chars],
                category=classify_question(question_text),
                source=source,
                marker=clean_marker(segment.marker),
            )
        )

    return questions


def extract_questions(
    text: str,
    source: str,
    *,
    config: Optional[ExtractionConfig] = None,
) -> List[Question]:
    """
    Like parse_questions(), but an empty result is a failure.

    Raises:
        NoQuestionsFoundError: If no block survives segmentation and trimming
    """
    questions = parse_questions(text, source, config=config)
    if not questions:
        raise NoQuestionsFoundError()
    logger.info(f"Extracted {len(questions)} questions from {source!r}")
    return questions


@dataclass(frozen=True)
class MergeResult:
    """
    Outcome of merging one source into the library.

    Attributes:
        source: Merged source label
        questions_added: Size of the new batch
        questions_replaced: Prior questions from the same source removed
        total_questions: Library size after the merge
        stats: Recomputed library statistics
        version: Snapshot version written
    """
    source: str
    questions_added: int
    questions_replaced: int
    total_questions: int
    stats: LibraryStats
    version: int


def merge_into_library(
    store: LibraryStore,
    source: str,
    questions: Sequence[Question],
) -> MergeResult:
    """
    Replace every library question from `source` with `questions`.

    The read-modify-write runs under the store's exclusive lock, so two
    merges for different documents cannot lose each other's updates.

    Args:
        store: Library snapshot store
        source: Source label being (re)processed
        questions: Newly extracted questions for that source

    Returns:
        MergeResult with counts and the saved version
    """
    replaced = 0

    def _merge(library: QuestionLibrary) -> QuestionLibrary:
        nonlocal replaced
        replaced = sum(1 for q in library.questions if q.source == source)
        return library.replace_source(source, questions)

    saved = store.update(_merge)

    logger.info(
        f"Merged {len(questions)} questions from {source!r} "
        f"(replaced {replaced}, library total {len(saved)})"
    )
    return MergeResult(
        source=source,
        questions_added=len(questions),
        questions_replaced=replaced,
        total_questions=len(saved),
        stats=saved.stats,
        version=saved.version,
    )
