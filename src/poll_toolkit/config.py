"""
Module: config

Purpose:
    Configuration dataclasses for extraction and for the on-disk
    workspace. Immutable settings validated on construction.

Key Classes:
    - ExtractionConfig: Thresholds used by the segmenter and pipeline
    - Settings: Workspace paths and admin password, loadable from env

Dependencies:
    - dataclasses (std)
    - os, pathlib (std)

Used By:
    - extractor.segmentation / extractor.pipeline: ExtractionConfig
    - admin.service, cli: Settings
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Environment variable names
ENV_DATA_DIR = "POLL_TOOLKIT_DATA_DIR"
ENV_ADMIN_PASSWORD = "ADMIN_PASSWORD"
ENV_SEED_QUESTIONS = "POLL_TOOLKIT_SEED_QUESTIONS"

LIBRARY_FILENAME = "questions-db.json"
DOCUMENTS_FILENAME = "documents.json"


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Configuration for question extraction.

    Attributes:
        min_content_length: Raw blocks shorter than this are noise (default 10)
        min_question_length: Cleaned question text shorter than this is
            discarded (default 10)
        full_text_chars: Characters of the raw block kept as full_text
            (default 500)
    """
    min_content_length: int = 10
    min_question_length: int = 10
    full_text_chars: int = 500

    def __post_init__(self) -> None:
        if self.min_content_length < 0:
            raise ValueError(f"min_content_length must be non-negative: {self.min_content_length}")
        if self.min_question_length < 0:
            raise ValueError(f"min_question_length must be non-negative: {self.min_question_length}")
        if self.full_text_chars <= 0:
            raise ValueError(f"full_text_chars must be positive: {self.full_text_chars}")


@dataclass(frozen=True)
class Settings:
    """
    Workspace configuration (immutable).

    Attributes:
        data_dir: Root directory for blobs and snapshots
        admin_password: Shared admin password, None disables admin operations
        seed_questions_path: Optional questions JSON used when no library
            snapshot exists yet

    Example:
        >>> settings = Settings(data_dir=Path("workspace"), admin_password="s3cret")
        >>> settings.library_path
        PosixPath('workspace/questions-db.json')
    """
    data_dir: Path
    admin_password: Optional[str] = None
    seed_questions_path: Optional[Path] = None
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> Settings:
        """Build settings from environment variables."""
        env = os.environ if environ is None else environ
        seed = env.get(ENV_SEED_QUESTIONS)
        return cls(
            data_dir=Path(env.get(ENV_DATA_DIR) or Path.cwd() / "workspace"),
            admin_password=env.get(ENV_ADMIN_PASSWORD) or None,
            seed_questions_path=Path(seed) if seed else None,
        )

    @property
    def blobs_dir(self) -> Path:
        return self.data_dir / "blobs"

    @property
    def library_path(self) -> Path:
        return self.data_dir / LIBRARY_FILENAME

    @property
    def documents_path(self) -> Path:
        return self.data_dir / DOCUMENTS_FILENAME
