"""Models for similarity search over stored contracts."""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Literal, Optional, Union

from pydantic import Field, field_validator, model_validator

from realty_contracts.schemas.base import CamelModel

DateBound = Union[datetime, date]


def as_utc(value: DateBound) -> datetime:
    """Timestamp for a bound: dates start at midnight UTC, naive times are UTC."""
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class DateRange(CamelModel):
    """Inclusive bounds on a document's ``createdAt``.

    Bounds are ISO-8601 dates or timestamps. A date-only ``end`` covers the
    whole of that day.
    """

    start: Optional[DateBound] = None
    end: Optional[DateBound] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def _parse_bound(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        value = value.strip()
        # date-only strings stay dates so an end bound keeps its whole day
        parse = date.fromisoformat if len(value) <= 10 else datetime.fromisoformat
        try:
            return parse(value)
        except ValueError as e:
            raise ValueError(f"invalid ISO-8601 date or timestamp: {value!r}") from e

    @model_validator(mode="after")
    def _check_order(self) -> "DateRange":
        lower, upper = self.lower_bound(), self.upper_bound()
        if lower is not None and upper is not None:
            operator, limit = upper
            if lower > limit or (operator == "lt" and lower == limit):
                raise ValueError("start must not be after end")
        return self

    def lower_bound(self) -> Optional[datetime]:
        return as_utc(self.start) if self.start is not None else None

    def upper_bound(self) -> Optional[tuple[Literal["lt", "lte"], datetime]]:
        """``("lt", next midnight)`` for a date-only end, else ``("lte", end)``."""
        if self.end is None:
            return None
        if isinstance(self.end, datetime):
            return "lte", as_utc(self.end)
        return "lt", as_utc(self.end + timedelta(days=1))


class PriceRange(CamelModel):
    """Inclusive bounds on a document's numeric ``price``."""

    min: Optional[float] = Field(default=None, ge=0)
    max: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "PriceRange":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("min must not exceed max")
        return self


class SearchFilters(CamelModel):
    contract_type: Optional[str] = None
    jurisdiction: Optional[str] = None
    property_type: Optional[str] = None
    date_range: Optional[DateRange] = None
    price_range: Optional[PriceRange] = None
    include_archived: bool = False


class SearchOptions(CamelModel):
    limit: int = Field(default=10, ge=1)
    min_score: float = Field(default=0.7, ge=0.0, le=1.0)


class MatchedDocument(CamelModel):
    text: str
    metadata: dict[str, Any]


class SimilarityMatch(CamelModel):
    """A stored document ranked against a query."""

    document: MatchedDocument
    score: float = Field(ge=0.0, le=1.0)
    rank: int = Field(ge=1)


class SearchSuggestion(CamelModel):
    query: str
    frequency: int
