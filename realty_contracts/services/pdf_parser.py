"""PDF text extraction for uploaded contracts.

Works entirely on bytes; the caller fetches the object from storage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import Any

import pdfplumber

logger = logging.getLogger(__name__)


class PDFError(Exception):
    """Base class for PDF-related errors."""

    pass


class PDFValidationError(PDFError):
    """The upload is not a usable text PDF.

    Raised for: not a PDF, too large, too many pages, scanned/image-only.
    """

    pass


class PDFParseError(PDFError):
    """The PDF could not be read (corrupted, encrypted or truncated)."""

    pass


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Immutable result of PDF text extraction, one text segment per page."""

    pages: tuple[str, ...]
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def text(self) -> str:
        return "\n\n".join(p for p in self.pages if p).strip()


def extract_pages(
    data: bytes,
    *,
    max_size_mb: int = 25,
    max_pages: int = 100,
) -> ParseResult:
    """Extract the text of every page from PDF bytes.

    Raises:
        PDFValidationError: Not a PDF, too large, too many pages, or scanned.
        PDFParseError: Corrupted or unparseable PDF.
    """
    if not data.startswith(b"%PDF"):
        raise PDFValidationError("unsupported content: missing PDF header")

    max_size_bytes = max_size_mb * 1024 * 1024
    if len(data) > max_size_bytes:
        raise PDFValidationError(
            f"file too large: {len(data) / 1024 / 1024:.1f}MB > {max_size_mb}MB"
        )

    try:
        with pdfplumber.open(BytesIO(data)) as pdf:
            if len(pdf.pages) > max_pages:
                raise PDFValidationError(f"too many pages: {len(pdf.pages)} > {max_pages}")

            pages = tuple((page.extract_text() or "").strip() for page in pdf.pages)
            if not any(pages):
                raise PDFValidationError(
                    "no text content: PDF may be scanned/image-only (OCR not supported)"
                )

            return ParseResult(pages=pages, metadata=dict(pdf.metadata or {}))

    except PDFValidationError:
        raise
    except Exception as e:
        logger.warning("PDF parse failed: %s", e, exc_info=True)
        raise PDFParseError(f"failed to parse PDF: {type(e).__name__}") from e


__all__ = [
    "PDFError",
    "PDFValidationError",
    "PDFParseError",
    "ParseResult",
    "extract_pages",
]
