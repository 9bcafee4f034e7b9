from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel

from services.common.database_config import create_service_async_engine

# Import all models so they are registered with metadata
from services.contacts.models.contact import Contact  # noqa: F401
from services.contacts.settings import get_settings

# Export metadata for Alembic
metadata = SQLModel.metadata

# Global variables for lazy initialization
_engine: AsyncEngine | None = None
_async_session_local: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get database engine with lazy initialization."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_service_async_engine(
            settings.db_url_contacts, echo=settings.DB_ECHO
        )
    return _engine


def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get async session factory with lazy initialization."""
    global _async_session_local
    if _async_session_local is None:
        _async_session_local = async_sessionmaker(
            get_engine(), class_=AsyncSession, expire_on_commit=False
        )
    return _async_session_local


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session scoped to one request; it is closed when the request ends."""
    session_factory = get_async_session_factory()
    async with session_factory() as session:
        yield session


async def create_tables() -> None:
    """Create all tables."""
    async with get_engine().begin() as conn:
        await conn.run_sync(metadata.create_all)


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine."""
    global _engine, _async_session_local
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _async_session_local = None
