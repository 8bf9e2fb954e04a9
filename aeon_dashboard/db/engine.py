"""Database engine configuration.

Builds the async engine and session factory for a database URL. The
objects are owned by whoever builds them (normally ``DashboardService``);
nothing here is cached at module level.

Usage:
    from aeon_dashboard.db.engine import build_engine, build_session_factory

    engine = build_engine("postgresql+asyncpg://...")
    Session = build_session_factory(engine)
    async with Session() as session:
        ...
    await engine.dispose()
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def build_engine(database_url: str, pool_size: int = 5) -> AsyncEngine:
    """Create an async database engine with its own connection pool.

    Args:
        database_url: Database connection URL (postgresql+asyncpg://...).
        pool_size: Persistent connections kept in the pool.

    Returns:
        AsyncEngine instance.
    """
    if not database_url:
        raise ValueError("DATABASE_URL not configured")

    return create_async_engine(
        database_url,
        echo=False,
        pool_size=pool_size,
        pool_pre_ping=True,  # Neon drops idle connections
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to engine.

    Args:
        engine: Engine returned by build_engine().

    Returns:
        async_sessionmaker instance for creating sessions.
    """
    return async_sessionmaker(bind=engine, expire_on_commit=False)
