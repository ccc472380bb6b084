import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import DataError, DisconnectionError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from ..services.exceptions import StoreUnavailableError, ValidationError

logger = logging.getLogger(__name__)

# Failures of the store itself, as opposed to constraint violations
STORE_FAILURES = (
    OperationalError,
    InterfaceError,
    DisconnectionError,
    PoolTimeoutError,
    asyncio.TimeoutError,
    OSError,
)


class Base(DeclarativeBase):
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class EntityStore:
    """Handle on the relational store shared by the managers.

    Owns the async engine and session factory. The process entry point
    calls ``init()`` on startup and ``teardown()`` on shutdown; managers
    only open units of work through ``transaction()``.
    """

    def __init__(self, database_url: str, echo: bool = False, pool_timeout: float = None):
        url = make_url(database_url)
        engine_kwargs = {"echo": echo}
        if pool_timeout is not None and url.get_backend_name() != "sqlite":
            engine_kwargs["pool_timeout"] = pool_timeout

        self.engine = create_async_engine(url, **engine_kwargs)
        if url.get_backend_name() == "sqlite":
            # SQLite only enforces FOREIGN KEY clauses when asked to, per connection
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_maker = async_sessionmaker(self.engine, expire_on_commit=False)

    async def init(self):
        """Create missing tables."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except STORE_FAILURES as e:
            logger.exception("Entity store initialisation failed")
            raise StoreUnavailableError(f"Entity store unavailable: {e}") from e
        logger.info("Entity store ready (%s)", self.engine.url.render_as_string(hide_password=True))

    async def teardown(self):
        await self.engine.dispose()
        logger.info("Entity store closed")

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Run the enclosed block as one atomic unit of work.

        Commits when the block exits normally and rolls back on any
        exception. Store failures are re-raised as StoreUnavailableError and
        values the database rejects as out of range as ValidationError;
        everything else propagates unchanged.
        """
        try:
            async with self.session_maker() as session:
                async with session.begin():
                    yield session
        except DataError as e:
            raise ValidationError(f"Value rejected by the entity store: {e.orig}") from e
        except STORE_FAILURES as e:
            logger.exception("Entity store call failed")
            raise StoreUnavailableError(f"Entity store unavailable: {e}") from e


def get_entity_store(request: Request) -> EntityStore:
    return request.app.state.store
