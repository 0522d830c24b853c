"""Loads uploaded contracts from object storage as text segments."""

from __future__ import annotations

import asyncio
import logging

from realty_contracts.core.config import settings
from realty_contracts.errors import InputValidationError
from realty_contracts.schemas.documents import DocumentHandle
from realty_contracts.services.pdf_parser import PDFError, extract_pages
from realty_contracts.storage.contracts import ObjectStorage

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
TEXT_CONTENT_TYPES = ("text/plain", "text/markdown")


class DocumentLoader:
    """Fetches a document and turns it into text segments (one per PDF page)."""

    def __init__(
        self,
        storage: ObjectStorage,
        bucket: str | None = None,
        *,
        max_size_mb: int | None = None,
        max_pages: int | None = None,
    ):
        self._storage = storage
        self.bucket = bucket or settings.S3_BUCKET_UPLOADS
        self.max_size_mb = max_size_mb or settings.PDF_MAX_FILE_SIZE_MB
        self.max_pages = max_pages or settings.PDF_MAX_PAGES

    async def load(self, handle: DocumentHandle) -> list[str]:
        """Return the non-empty text segments of the referenced document.

        Raises:
            InputValidationError: Unsupported type, unreadable PDF or no text.
            StorageError: The object could not be fetched.
        """
        bucket = handle.bucket or self.bucket
        data, _headers = await asyncio.to_thread(self._storage.get_bytes, bucket, handle.key)
        content_type = handle.content_type.split(";")[0].strip().lower()

        if content_type == PDF_CONTENT_TYPE:
            try:
                result = extract_pages(data, max_size_mb=self.max_size_mb, max_pages=self.max_pages)
            except PDFError as e:
                raise InputValidationError(f"Invalid document {handle.key}: {e}") from e
            segments = [page for page in result.pages if page]
        elif content_type in TEXT_CONTENT_TYPES:
            try:
                text = data.decode("utf-8").strip()
            except UnicodeDecodeError as e:
                raise InputValidationError(f"Invalid document {handle.key}: not UTF-8 text") from e
            segments = [text] if text else []
        else:
            raise InputValidationError(f"Unsupported document type: {handle.content_type}")

        if not segments:
            raise InputValidationError(f"Document {handle.key} contains no text")

        logger.info("Loaded document key=%s segments=%d", handle.key, len(segments))
        return segments


__all__ = ["DocumentLoader"]
