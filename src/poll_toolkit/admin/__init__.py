"""
Module: admin

Purpose:
    Administrator document workflow (upload, list, delete, process).
"""

from .service import (
    ALLOWED_MIME_TYPES,
    DOCX_MIME_TYPE,
    PDF_MIME_TYPE,
    AdminService,
    ProcessResult,
    create_service,
)

__all__ = [
    "ALLOWED_MIME_TYPES",
    "DOCX_MIME_TYPE",
    "PDF_MIME_TYPE",
    "AdminService",
    "ProcessResult",
    "create_service",
]
