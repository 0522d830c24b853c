"""Database package."""

from realty_contracts.db.session import (
    AsyncSessionLocal,
    Base,
    async_engine,
    init_db,
    make_engine,
    session_scope,
)

__all__ = [
    "AsyncSessionLocal",
    "Base",
    "async_engine",
    "init_db",
    "make_engine",
    "session_scope",
]
