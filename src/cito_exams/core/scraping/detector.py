"""Classify a downloaded document from its Content-Type header.

Only the header is used; the body is never inspected.
"""

from __future__ import annotations

from typing import Optional

from cito_exams.core.models import FileKind

WORD_MIME_HINTS = (
    "msword",
    "vnd.openxmlformats-officedocument.wordprocessingml.document",
)


def classify_content_type(content_type: Optional[str]) -> FileKind:
    """Map a Content-Type value to the extension used on disk.

    Substring heuristics: anything mentioning pdf is a PDF, the legacy and
    OOXML Word types are `doc`, everything else (or no header) is unknown.
    """
    if not content_type:
        return FileKind.UNKNOWN
    c = content_type.lower()
    if "pdf" in c:
        return FileKind.PDF
    if any(hint in c for hint in WORD_MIME_HINTS):
        return FileKind.DOC
    return FileKind.UNKNOWN
