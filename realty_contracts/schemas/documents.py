"""Models for uploaded documents, their chunks and stored records."""

from typing import Any, Optional

from pydantic import Field

from realty_contracts.schemas.base import CamelModel


class DocumentHandle(CamelModel):
    """Reference to an uploaded contract in object storage."""

    key: str = Field(min_length=1)
    bucket: Optional[str] = None  # defaults to the uploads bucket
    filename: Optional[str] = None
    content_type: str = "application/pdf"


class DocumentChunk(CamelModel):
    """A bounded slice of document text."""

    text: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class StoreResult(CamelModel):
    success: bool
    document_id: str
