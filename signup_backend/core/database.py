from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from signup_backend.core.config import settings
from signup_backend.models import Base


def build_engine(database_url: str) -> AsyncEngine:
    """Engine for the signup store.

    SQLite waits on a locked database instead of failing the insert at once;
    server databases get pre-ping so dropped connections are replaced.
    """
    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url, echo=False, connect_args={"timeout": 30}
        )
    return create_async_engine(database_url, echo=False, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def create_tables(bind: Optional[AsyncEngine] = None) -> None:
    """Create missing tables; existing ones are left untouched."""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(bind: Optional[AsyncEngine] = None) -> None:
    await (bind or engine).dispose()


async def get_db() -> AsyncIterator[AsyncSession]:
    """One session per request. Services commit through their unit of work."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
