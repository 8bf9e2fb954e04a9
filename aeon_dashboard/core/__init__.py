"""Dashboard service object.

Owns the process-wide resources every request shares:
- Database engine and session factory
- The guild resolver and its auto-detected guild id
- The one-shot bootstrap (schema check + guild auto-detection)

Usage:
    service = DashboardService(settings)
    await service.ensure_bootstrapped()
    async with service.session() as session:
        ...
    await service.close()
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from sqlalchemy import text

from aeon_dashboard.core.guilds import GuildResolver
from aeon_dashboard.db.bootstrap import bootstrap_schema
from aeon_dashboard.db.engine import build_engine, build_session_factory
from aeon_dashboard.db.repositories import detect_primary_guild

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

    from aeon_dashboard.config.settings import AppSettings

logger = logging.getLogger(__name__)


class DashboardService:
    """Shared database handle, guild resolver and bootstrap latch.

    Bootstrap is first-caller-wins: the first request starts it, every
    concurrent request awaits the same in-flight run. A failed bootstrap
    is forgotten so the next request tries again.
    """

    def __init__(
        self,
        settings: AppSettings,
        engine: AsyncEngine | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            settings: Application settings.
            engine: Prebuilt engine (tests); built from settings if None.
            session_factory: Prebuilt session factory; bound to engine if None.
        """
        self.settings = settings
        self.engine: AsyncEngine = engine or build_engine(
            settings.database_url, pool_size=settings.pool_size
        )
        self.session_factory: async_sessionmaker[AsyncSession] = (
            session_factory or build_session_factory(self.engine)
        )
        self.resolver = GuildResolver(default_guild_id=settings.default_guild_id)
        self._bootstrap_task: asyncio.Future[None] | None = None

    @property
    def bootstrapped(self) -> bool:
        task = self._bootstrap_task
        return task is not None and task.done() and task.exception() is None

    async def ensure_bootstrapped(self) -> None:
        """Run bootstrap once; concurrent callers share the same run."""
        if self._bootstrap_task is None:
            self._bootstrap_task = asyncio.ensure_future(self._bootstrap())

        task = self._bootstrap_task
        try:
            # shield: a cancelled request must not cancel everyone's bootstrap
            await asyncio.shield(task)
        except Exception:
            if self._bootstrap_task is task:
                self._bootstrap_task = None
            raise

    async def _bootstrap(self) -> None:
        await bootstrap_schema(self.engine)

        async with self.session_factory() as session:
            self.resolver.auto_detected = await detect_primary_guild(session)

        if self.resolver.auto_detected:
            logger.info(f"Auto-detected guild {self.resolver.auto_detected}")
        else:
            logger.info("No guild auto-detected; using configured default")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session from the shared pool."""
        async with self.session_factory() as session:
            yield session

    async def health(self) -> None:
        """Raise unless bootstrap has completed and the database answers."""
        await self.ensure_bootstrapped()
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Dispose the connection pool."""
        await self.engine.dispose()
