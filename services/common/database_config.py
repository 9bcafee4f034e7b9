"""
Shared database configuration utilities.

Builds async SQLAlchemy engines from plain connection URLs so settings can
carry the familiar ``sqlite://`` / ``postgresql://`` forms.
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool


def get_async_database_url(url: str) -> str:
    """Convert database URL to async format for async SQLAlchemy drivers."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    else:
        return url


def is_sqlite_database(database_url: str) -> bool:
    """Check if the given database URL is for SQLite (sync or async driver)."""
    return database_url.lower().startswith("sqlite")


def is_memory_database(database_url: str) -> bool:
    """Check if the URL points at a private in-memory SQLite database."""
    return is_sqlite_database(database_url) and (
        ":memory:" in database_url or database_url.rstrip("/").endswith("sqlite:")
    )


def get_sqlite_connect_args() -> Dict[str, Any]:
    """SQLite connection arguments shared by every engine."""
    return {
        "check_same_thread": False,
        "timeout": 30,
    }


def create_service_async_engine(
    database_url: str, echo: bool = False, **kwargs: Any
) -> AsyncEngine:
    """
    Create an async database engine for a service.

    SQLite URLs get the aiosqlite driver and shared connect args; in-memory
    SQLite databases are pinned to a single connection so every session sees
    the same data. Other databases are passed through unchanged.

    Args:
        database_url: The database URL
        echo: Whether to echo SQL statements
        **kwargs: Additional arguments to pass to create_async_engine
    """
    existing_connect_args = kwargs.pop("connect_args", {})
    database_url = get_async_database_url(database_url)

    if is_sqlite_database(database_url):
        connect_args = {**existing_connect_args, **get_sqlite_connect_args()}
        if is_memory_database(database_url):
            kwargs.setdefault("poolclass", StaticPool)
    else:
        connect_args = existing_connect_args

    return create_async_engine(
        database_url, echo=echo, connect_args=connect_args, **kwargs
    )
