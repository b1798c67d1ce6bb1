"""
Registry API — Connection Provider
====================================

What:  Owns the async SQLAlchemy engine (and so the connection pool) and hands
       out one connection per request pipeline.
How:   `ConnectionProvider.acquire()` is an async context manager: it leases a
       pooled connection, opens a transaction, yields a `StoreConnection`, and
       on every exit path commits or rolls back and returns the connection to
       the pool.
Who:   Constructed once in the FastAPI lifespan (main.py), stored on
       `app.state`, and injected into routes via `app.dependencies`.

Pool configuration (from settings):
    pool_size + max_overflow:  ceiling on concurrently leased connections
    pool_timeout:              seconds to wait for a free connection
    pool_pre_ping:             validate connections before use

Execution contract:
    StoreConnection.execute(mutation) -> ExecutionResult(rows_affected, was_duplicate)

    `was_duplicate` is the store's duplicate-key signal for upserts. Callers
    never look at driver-specific result fields; the dialect differences are
    resolved here and in the mutation builder.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, AsyncIterator, List

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import AsyncAdaptedQueuePool
from sqlalchemy.sql import Executable

from app.config import Settings
from app.exceptions import StoreUnavailableError

if TYPE_CHECKING:
    from app.services.mutations import Mutation

logger = logging.getLogger(__name__)

# MySQL/MariaDB ER_DUP_ENTRY and the PostgreSQL unique_violation SQLSTATE.
_MYSQL_DUP_ENTRY = 1062
_PG_UNIQUE_VIOLATION = "23505"


def is_duplicate_key(exc: IntegrityError) -> bool:
    """True when the store rejected a row because its key already exists."""
    orig = exc.orig
    args = getattr(orig, "args", ())
    if args and args[0] == _MYSQL_DUP_ENTRY:
        return True
    if _PG_UNIQUE_VIOLATION in (getattr(orig, "pgcode", None), getattr(orig, "sqlstate", None)):
        return True
    return "UNIQUE constraint failed" in str(orig)


class Base(DeclarativeBase):
    """Base class for the table mappings in app.models."""

    pass


@dataclass(frozen=True)
class ExecutionResult:
    """
    Store response to a single mutation.

    Attributes:
        rows_affected: Rows inserted, updated or deleted.
        was_duplicate: True when an upsert found its key already present and
                       took the update branch.
    """

    rows_affected: int
    was_duplicate: bool = False


class StoreConnection:
    """
    A leased connection with the two operations the pipelines need.

    Instances only exist inside `ConnectionProvider.acquire()`; they must not
    be kept after the block exits.
    """

    def __init__(self, connection: AsyncConnection):
        self._connection = connection

    @property
    def dialect_name(self) -> str:
        """SQLAlchemy dialect name, e.g. 'postgresql', 'sqlite', 'mysql'."""
        return self._connection.dialect.name

    async def execute(self, mutation: "Mutation") -> ExecutionResult:
        """
        Execute a mutation and report rows affected plus the duplicate signal.

        Four result shapes are handled:
            1. Statement returns an `inserted` flag (PostgreSQL upsert):
               was_duplicate = not inserted.
            2. Insert that raises on an existing key (MySQL/MariaDB upsert):
               it runs under a savepoint; a duplicate-key IntegrityError
               rolls back to it, the fallback update runs and
               was_duplicate = True. Any other error propagates.
            3. Guarded insert with a fallback update (SQLite upsert):
               zero rows inserted means the key existed, so the fallback
               update runs and was_duplicate = True.
            4. Plain insert/update/delete: rowcount only.
        """
        if mutation.duplicate_raises:
            return await self._execute_under_savepoint(mutation)

        result = await self._connection.execute(mutation.statement)

        if result.returns_rows:
            row = result.first()
            if row is None:
                return ExecutionResult(rows_affected=0)
            inserted = bool(row._mapping["inserted"])
            return ExecutionResult(rows_affected=1, was_duplicate=not inserted)

        if mutation.fallback is not None and result.rowcount == 0:
            fallback = await self._connection.execute(mutation.fallback)
            return ExecutionResult(rows_affected=fallback.rowcount, was_duplicate=True)

        return ExecutionResult(rows_affected=result.rowcount)

    async def _execute_under_savepoint(self, mutation: "Mutation") -> ExecutionResult:
        try:
            async with self._connection.begin_nested():
                result = await self._connection.execute(mutation.statement)
        except IntegrityError as exc:
            if mutation.fallback is None or not is_duplicate_key(exc):
                raise
            fallback = await self._connection.execute(mutation.fallback)
            return ExecutionResult(rows_affected=fallback.rowcount, was_duplicate=True)
        return ExecutionResult(rows_affected=result.rowcount)

    async def fetch_column(self, statement: Executable) -> List[Any]:
        """Run a single-column SELECT and return its values in row order."""
        result = await self._connection.execute(statement)
        return list(result.scalars().all())

    async def ping(self) -> None:
        await self._connection.execute(text("SELECT 1"))


class ConnectionProvider:
    """
    Scoped access to the connection pool.

    Lifecycle:
        provider = ConnectionProvider.from_settings(settings)   # startup
        async with provider.acquire() as conn: ...              # per request
        await provider.close()                                  # shutdown
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionProvider":
        """Build the engine and pool from application settings."""
        engine = create_async_engine(
            settings.database_url,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
            echo=settings.log_level == "DEBUG",
        )
        logger.info(
            "Connection pool created: dialect=%s, ceiling=%d, acquire_timeout=%.0fs",
            engine.dialect.name,
            settings.db_pool_size + settings.db_max_overflow,
            settings.db_pool_timeout,
        )
        return cls(engine)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[StoreConnection]:
        """
        Lease one connection for the duration of the block.

        Raises:
            StoreUnavailableError: the connection could not be acquired
                (store down, bad credentials, pool timeout). The cause is
                logged here and never reaches the client.

        Everything raised inside the block rolls the transaction back and
        propagates unchanged; the connection is released in all cases.
        """
        try:
            connection = await self._engine.connect()
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Database connection error: %s", exc, exc_info=True)
            raise StoreUnavailableError(
                context={"error_type": type(exc).__name__}
            ) from exc

        try:
            async with connection.begin():
                yield StoreConnection(connection)
        finally:
            await connection.close()

    async def close(self) -> None:
        """Close every pooled connection. Called once at shutdown."""
        await self._engine.dispose()
        logger.info("Connection pool disposed")
