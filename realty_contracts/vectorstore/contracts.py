"""Vector store interfaces, filter descriptors and error types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Mapping, Protocol, Sequence, runtime_checkable

from realty_contracts.errors import UpstreamServiceError

FilterOperator = Literal["eq", "gte", "lt", "lte"]


class VectorStoreError(UpstreamServiceError):
    """Wraps underlying vector store exceptions with operation context."""

    def __init__(self, op: str, table: str | None, message: str):
        self.op = op
        self.table = table
        self.message = message
        super().__init__(self.__str__())

    def __str__(self) -> str:  # pragma: no cover - trivial string formatting
        return f"{self.op} failed for table={self.table or '<unknown>'}: {self.message}"


def _comparable(value: Any) -> Any:
    """ISO timestamps compare as UTC instants; anything else as-is."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, datetime):
        return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value.astimezone(timezone.utc)
    return value


@dataclass(frozen=True, slots=True)
class MetadataFilter:
    """One predicate on a document's metadata map.

    A list of these is folded conjunctively into a single backend query.
    """

    field: str
    operator: FilterOperator
    value: Any

    def matches(self, metadata: Mapping[str, Any]) -> bool:
        actual = metadata.get(self.field)
        if self.operator == "eq":
            return actual == self.value
        if actual is None or isinstance(actual, bool):
            return False
        actual, expected = _comparable(actual), _comparable(self.value)
        try:
            if self.operator == "gte":
                return actual >= expected
            if self.operator == "lt":
                return actual < expected
            return actual <= expected
        except TypeError:
            return False


@dataclass(frozen=True, slots=True)
class StoredRecord:
    """A row of the vector store: document text plus open metadata."""

    id: str
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class VectorStore(Protocol):
    """Contract for vector store implementations."""

    async def similarity_search(
        self,
        query: str,
        filters: Sequence[MetadataFilter],
        limit: int,
    ) -> list[tuple[StoredRecord, float]]:
        ...

    async def add(self, content: str, metadata: Mapping[str, Any]) -> str:
        ...

    async def find(self, filters: Sequence[MetadataFilter]) -> list[StoredRecord]:
        ...

    async def update_metadata(self, record_id: str, metadata: Mapping[str, Any]) -> None:
        ...

    async def delete(self, record_ids: Sequence[str]) -> int:
        ...


__all__ = ["FilterOperator", "MetadataFilter", "StoredRecord", "VectorStore", "VectorStoreError"]
