"""Document services: storage-backed loading and PDF extraction."""

from realty_contracts.services.document_loader import DocumentLoader
from realty_contracts.services.pdf_parser import (
    PDFError,
    PDFParseError,
    PDFValidationError,
    ParseResult,
    extract_pages,
)

__all__ = [
    "DocumentLoader",
    "PDFError",
    "PDFValidationError",
    "PDFParseError",
    "ParseResult",
    "extract_pages",
]
