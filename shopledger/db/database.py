import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import DeclarativeBase

from shopledger.config import Config
from shopledger.errors import ErrorType
from shopledger.exceptions import AppException

logger = logging.getLogger(__name__)


# SQLAlchemy Base for ORM models
class Base(DeclarativeBase):
    pass


ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "mysql": "mysql+aiomysql",
    "sqlite": "sqlite+aiosqlite",
}


def get_async_url(url: str) -> str:
    """Convert database URL to async SQLAlchemy format.

    URLs that already name a driver (``postgresql+asyncpg://``) are left alone.
    """
    scheme, sep, rest = url.partition("://")
    if not sep or "+" in scheme:
        return url
    return f"{ASYNC_DRIVERS.get(scheme, scheme)}://{rest}"


def _store_error(exc: Exception) -> AppException:
    # Surface the driver's message rather than SQLAlchemy's wrapper text
    message = str(getattr(exc, "orig", None) or exc)
    return AppException(ErrorType.STORE_ERROR, message)


class Database:
    """Process-wide handle on the async engine.

    The engine (and its connection pool) is created on first use and released
    by ``disconnect()``. Services receive a ``Database`` through the ``get_db``
    dependency instead of reaching for the module-level instance.
    """

    def __init__(self, url: str | None = None, echo: bool | None = None, ssl: bool | None = None):
        self.url = url or Config.DATABASE_URL
        self.echo = Config.DATABASE_ECHO if echo is None else echo
        self.ssl = Config.DATABASE_SSL if ssl is None else ssl
        self.engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def dialect(self) -> str:
        return get_async_url(self.url).partition("+")[0]

    async def connect(self):
        """Create database engine."""
        if self.engine is not None:
            return
        connect_args = {}
        if self.ssl and self.dialect == "postgresql":
            connect_args["ssl"] = "require"
        self.engine = create_async_engine(
            get_async_url(self.url),
            echo=self.echo,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        self._sessionmaker = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        logger.info(f"Database engine created ({self.dialect})")

    async def disconnect(self):
        """Close database engine."""
        if self.engine:
            await self.engine.dispose()
            logger.info("Database engine disposed")
        self.engine = None
        self._sessionmaker = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Plain session; store failures are raised as STORE_ERROR."""
        if self._sessionmaker is None:
            await self.connect()
        async with self._sessionmaker() as session:
            try:
                yield session
            except (SQLAlchemyError, OSError) as e:
                # OSError: the driver could not reach the server at all
                logger.error(f"Database error: {e}")
                raise _store_error(e) from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Run the block in one transaction: commit on success, roll back on any error."""
        async with self.session() as session:
            async with session.begin():
                yield session

    async def now(self) -> datetime:
        async with self.session() as session:
            result = await session.execute(select(func.now()))
            return result.scalar_one()

    async def init_schema(self):
        """Create tables and the singleton settings row if missing."""
        from shopledger.models import AppSettings

        await self.connect()
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            raise _store_error(e) from e

        async with self.transaction() as session:
            if await session.get(AppSettings, 1) is None:
                session.add(AppSettings(
                    id=1,
                    app_name=Config.DEFAULT_APP_NAME,
                    currency=Config.DEFAULT_CURRENCY
                ))


db = Database()


def get_db() -> Database:
    """FastAPI dependency returning the process-wide database."""
    return db
