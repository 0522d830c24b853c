"""Database session management."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from realty_contracts.core.config import settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def _to_async_url(url: str) -> str:
    """Convert sync DB URL to async URL."""
    if url.startswith("postgresql://"):
        return "postgresql+asyncpg://" + url[13:]
    if url.startswith("sqlite://"):
        return "sqlite+aiosqlite://" + url[9:]
    return url


def make_engine(url: str) -> AsyncEngine:
    return create_async_engine(_to_async_url(url), pool_pre_ping=True)


async_engine = make_engine(settings.DATABASE_URL)
AsyncSessionLocal = async_sessionmaker(async_engine, expire_on_commit=False)


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
) -> AsyncIterator[AsyncSession]:
    """Async DB session that commits on success and rolls back on error."""
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine = async_engine) -> None:
    """Create all database tables."""
    from realty_contracts.db import models  # noqa: F401  registers the tables

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
