"""
Command-line interface for the Poll Toolkit.

Admin commands (upload, process, delete) need the admin password, given
with --password or the ADMIN_PASSWORD environment variable.

Examples:
    poll-toolkit upload "March Poll.docx"
    poll-toolkit process 6f1c...
    poll-toolkit questions --category job_approval --search governor
    poll-toolkit export --ids march_poll_Q1 march_poll_Q4 --race-name "SD 18" --format pdf
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from poll_toolkit.admin.service import DOCX_MIME_TYPE, PDF_MIME_TYPE, AdminService, create_service
from poll_toolkit.builder.controller import EXPORT_FORMATS, export_template
from poll_toolkit.builder.template import Party, QuestionnaireTemplate, RaceConfig
from poll_toolkit.config import ENV_ADMIN_PASSWORD, Settings
from poll_toolkit.core.models.documents import DocumentType
from poll_toolkit.core.models.questions import Category, Question
from poll_toolkit.errors import PollToolkitError
from poll_toolkit.extractor.pipeline import parse_questions
from poll_toolkit.extractor.text import extract_text
from poll_toolkit.logging_utils import configure_logging

logger = logging.getLogger(__name__)

_MIME_BY_SUFFIX = {
    ".pdf": PDF_MIME_TYPE,
    ".docx": DOCX_MIME_TYPE,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poll-toolkit",
        description="Build poll questionnaires from a library of classified questions.",
    )
    parser.add_argument("--data-dir", type=Path, help="Workspace directory (default: $POLL_TOOLKIT_DATA_DIR or ./workspace)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("upload", help="Upload a DOCX or PDF source document")
    p.add_argument("path", type=Path)
    p.add_argument("--password")
    p.add_argument("--process", action="store_true", help="Process immediately after upload")

    sub.add_parser("documents", help="List uploaded documents")

    p = sub.add_parser("process", help="Extract questions from an uploaded document")
    p.add_argument("document_id")
    p.add_argument("--password")
    p.add_argument("--force", action="store_true", help="Process even if marked as processing")

    p = sub.add_parser("delete", help="Delete an uploaded document")
    p.add_argument("document_id")
    p.add_argument("--password")
    p.add_argument("--purge-questions", action="store_true", help="Also remove its questions from the library")

    p = sub.add_parser("questions", help="List library questions")
    p.add_argument("--category", action="append", choices=[c.value for c in Category])
    p.add_argument("--search")
    p.add_argument("--json", action="store_true", help="Print the library snapshot as JSON")

    p = sub.add_parser("extract", help="Parse a document without saving anything")
    p.add_argument("path", type=Path)
    p.add_argument("--json", action="store_true")

    p = sub.add_parser("export", help="Export selected questions as a questionnaire")
    p.add_argument("--ids", nargs="+", required=True, help="Question ids in questionnaire order")
    p.add_argument("--custom", action="append", default=[], metavar="ID=TEXT", help="Override a question's wording")
    p.add_argument("--race-name", default="")
    p.add_argument("--district", default="")
    p.add_argument("--date", dest="election_date", default="")
    p.add_argument("--party", choices=[p.value for p in Party], default=Party.GOP.value)
    p.add_argument("--candidate", dest="candidates", action="append", default=[])
    p.add_argument("--format", choices=EXPORT_FORMATS, default="docx")
    p.add_argument("--output", type=Path, default=Path("."))

    return parser


def _document_type(path: Path) -> DocumentType:
    try:
        return DocumentType(path.suffix.lower().lstrip("."))
    except ValueError:
        raise PollToolkitError(f"Unsupported file type: {path.suffix or path.name}") from None


def _authorize(service: AdminService, password: Optional[str]) -> None:
    password = password or os.environ.get(ENV_ADMIN_PASSWORD)
    service.authorize(f"Bearer {password}" if password else None)


def _print_questions(questions: List[Question]) -> None:
    for q in questions:
        print(f"{q.id:<32} {q.category.value:<14} {q.text}")


def cmd_upload(service: AdminService, args: argparse.Namespace) -> int:
    _authorize(service, args.password)
    content_type = _MIME_BY_SUFFIX.get(args.path.suffix.lower(), "application/octet-stream")
    document = service.upload(args.path.name, args.path.read_bytes(), content_type)
    print(f"Uploaded {document.name} as {document.id}")
    if args.process:
        result = service.process(document.id)
        print(f"Added {result.questions_added} questions (library total {result.total_questions})")
    return 0


def cmd_documents(service: AdminService, args: argparse.Namespace) -> int:
    for doc in service.list_documents():
        count = "" if doc.question_count is None else f" questions={doc.question_count}"
        error = f" error={doc.error!r}" if doc.error else ""
        print(f"{doc.id}  {doc.status.value:<10} {doc.type.value:<4} {doc.name}{count}{error}")
    return 0


def cmd_process(service: AdminService, args: argparse.Namespace) -> int:
    _authorize(service, args.password)
    result = service.process(args.document_id, force=args.force)
    print(
        f"Added {result.questions_added} questions from {result.document.name} "
        f"(replaced {result.questions_replaced}, library total {result.total_questions})"
    )
    return 0


def cmd_delete(service: AdminService, args: argparse.Namespace) -> int:
    _authorize(service, args.password)
    document = service.delete(args.document_id, purge_questions=args.purge_questions)
    print(f"Deleted {document.name}")
    return 0


def cmd_questions(service: AdminService, args: argparse.Namespace) -> int:
    library = service.questions()
    if args.json:
        print(json.dumps(library.to_dict(), indent=2, ensure_ascii=False))
        return 0
    categories = [Category(c) for c in args.category or []]
    _print_questions(library.filter(categories=categories, query=args.search))
    return 0


def cmd_extract(service: AdminService, args: argparse.Namespace) -> int:
    text = extract_text(args.path.read_bytes(), _document_type(args.path))
    questions = parse_questions(text, args.path.stem, config=service.settings.extraction)
    if args.json:
        print(json.dumps([q.to_dict() for q in questions], indent=2, ensure_ascii=False))
    else:
        _print_questions(questions)
        print(f"{len(questions)} questions")
    return 0


def cmd_export(service: AdminService, args: argparse.Namespace) -> int:
    library = service.questions()
    config = RaceConfig(
        race_name=args.race_name,
        district=args.district,
        election_date=args.election_date,
        candidates=tuple(args.candidates),
        party=Party(args.party),
    )
    template = QuestionnaireTemplate(config=config)
    for qid in args.ids:
        question = library.get(qid)
        if question is None:
            raise PollToolkitError(f"Unknown question id: {qid}")
        template.add(question)
    for override in args.custom:
        qid, sep, text = override.partition("=")
        if not sep:
            raise PollToolkitError(f"--custom expects ID=TEXT, got {override!r}")
        try:
            template.set_custom_text(qid, text)
        except KeyError:
            raise PollToolkitError(f"--custom id not in export: {qid}") from None

    result = export_template(template, args.output, args.format)
    print(f"Exported {result.question_count} questions to {result.path}")
    return 0


COMMANDS = {
    "upload": cmd_upload,
    "documents": cmd_documents,
    "process": cmd_process,
    "delete": cmd_delete,
    "questions": cmd_questions,
    "extract": cmd_extract,
    "export": cmd_export,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    settings = Settings.from_env()
    if args.data_dir is not None:
        settings = Settings(
            data_dir=args.data_dir,
            admin_password=settings.admin_password,
            seed_questions_path=settings.seed_questions_path,
        )
    service = create_service(settings)

    try:
        return COMMANDS[args.command](service, args)
    except (PollToolkitError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
