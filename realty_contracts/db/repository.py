"""Repository helpers for feedback and search history."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Literal, Optional
from uuid import uuid4

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from realty_contracts.db.models import Feedback, SearchHistory
from realty_contracts.schemas.domain import FeedbackData

Timeframe = Literal["day", "week", "month"]

TIMEFRAMES: dict[str, timedelta] = {
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
    "month": timedelta(days=30),
}

_UPSERT_INSERTS: dict[str, Callable[..., Any]] = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


async def add_feedback(db: AsyncSession, feedback: FeedbackData) -> Feedback:
    row = Feedback(
        id=str(uuid4()),
        contract_id=feedback.contract_id,
        rating=feedback.rating,
        aspects=feedback.aspects.model_dump(mode="json", by_alias=True),
        comments=feedback.comments,
        suggested_improvements=list(feedback.suggested_improvements),
        submitted_at=feedback.timestamp,
    )
    db.add(row)
    await db.flush()
    await db.refresh(row)
    return row


def _insert_for(db: AsyncSession) -> Callable[..., Any]:
    dialect = db.get_bind().dialect.name
    try:
        return _UPSERT_INSERTS[dialect]
    except KeyError:
        raise ValueError(f"Search history upsert is not supported on {dialect}") from None


async def record_search(
    db: AsyncSession,
    query: str,
    *,
    user_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> SearchHistory:
    """Insert a query or bump its frequency if it was seen before.

    A single ``INSERT ... ON CONFLICT`` so concurrent first-time searches for
    the same query both count.
    """
    now = now or datetime.now(timezone.utc)
    stmt = _insert_for(db)(SearchHistory).values(
        id=str(uuid4()), query=query, frequency=1, user_id=user_id, last_searched=now
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[SearchHistory.query],
        set_={
            "frequency": SearchHistory.frequency + 1,
            "last_searched": stmt.excluded.last_searched,
            "user_id": func.coalesce(stmt.excluded.user_id, SearchHistory.user_id),
        },
    )
    result = await db.execute(
        stmt.returning(SearchHistory),
        execution_options={"populate_existing": True},
    )
    return result.scalar_one()


async def search_suggestions(db: AsyncSession, partial: str, limit: int = 5) -> list[SearchHistory]:
    """Past queries containing ``partial`` (case-insensitive, wildcards literal)."""
    result = await db.execute(
        select(SearchHistory)
        .where(SearchHistory.query.icontains(partial, autoescape=True))
        .order_by(SearchHistory.frequency.desc(), SearchHistory.query)
        .limit(limit)
    )
    return list(result.scalars())


async def trending_searches(
    db: AsyncSession,
    *,
    limit: int = 5,
    timeframe: Timeframe = "week",
    now: Optional[datetime] = None,
) -> list[SearchHistory]:
    if timeframe not in TIMEFRAMES:
        raise ValueError(f"Unknown timeframe: {timeframe}")
    since = (now or datetime.now(timezone.utc)) - TIMEFRAMES[timeframe]
    result = await db.execute(
        select(SearchHistory)
        .where(SearchHistory.last_searched >= since)
        .order_by(SearchHistory.frequency.desc(), SearchHistory.query)
        .limit(limit)
    )
    return list(result.scalars())
