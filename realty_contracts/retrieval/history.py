"""Search history: tracking, suggestions and trending queries."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from realty_contracts.db import repository
from realty_contracts.db.repository import Timeframe
from realty_contracts.db.session import AsyncSessionLocal, session_scope
from realty_contracts.schemas.search import SearchSuggestion


class SearchHistory:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal):
        self._session_factory = session_factory

    async def track(self, query: str, user_id: Optional[str] = None) -> None:
        async with session_scope(self._session_factory) as db:
            await repository.record_search(db, query, user_id=user_id)

    async def suggestions(self, partial: str, limit: int = 5) -> list[SearchSuggestion]:
        async with session_scope(self._session_factory) as db:
            rows = await repository.search_suggestions(db, partial, limit=limit)
            return [SearchSuggestion(query=r.query, frequency=r.frequency) for r in rows]

    async def trending(self, limit: int = 5, timeframe: Timeframe = "week") -> list[SearchSuggestion]:
        async with session_scope(self._session_factory) as db:
            rows = await repository.trending_searches(db, limit=limit, timeframe=timeframe)
            return [SearchSuggestion(query=r.query, frequency=r.frequency) for r in rows]


__all__ = ["SearchHistory"]
