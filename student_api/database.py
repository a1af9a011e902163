"""
Student API - Persistence Gateway
=================================

What:  Async SQLAlchemy engine wrapper that owns the connection pool for the
       lifetime of the process and runs single parameterized statements.
How:   `connect()` builds the engine from settings and verifies liveness with a
       `SELECT 1` round trip. Reads go through `fetch_all` / `fetch_one`, writes
       through `execute`, each on its own pooled connection. Driver failures are
       converted into `DatabaseError` carrying the raw driver message.
Who:   Created once by the application lifespan, stored on `app.state`, and
       handed to request handlers through the `get_gateway` dependency.

Connection Pooling:
    pool_size / max_overflow come from settings (DB_POOL_SIZE, DB_MAX_OVERFLOW)
    pool_pre_ping validates a pooled connection before it is reused
    pool_recycle=3600 drops connections older than an hour
    SQLite URLs (tests) keep SQLAlchemy's default pool and ignore the sizing.

Thread-safety and statement ordering between concurrent requests are left to
the pool and the database; the gateway adds no locking and no transactions
spanning more than one statement.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import URL, Row, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql.expression import Executable

from student_api.config import Settings, settings
from student_api.exceptions import DatabaseConnectionError, DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base holding the metadata of every mapped table."""
    pass


def _driver_message(exc: BaseException) -> str:
    """Raw error text as reported by the DBAPI driver, without SQLAlchemy's wrapping."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class DatabaseGateway:
    """
    Owns the async engine and executes one statement per call.

    The gateway holds no per-request state. Every method checks a connection
    out of the pool, runs the statement, and returns the connection.
    """

    def __init__(
        self,
        url: Union[str, URL],
        *,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = make_url(url) if isinstance(url, str) else url

        engine_options: Dict[str, Any] = {
            "pool_pre_ping": pool_pre_ping,
            "echo": echo,
        }
        if self.url.get_backend_name() != "sqlite":
            engine_options.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(self.url, **engine_options)

    @classmethod
    def from_settings(cls, config: Settings) -> "DatabaseGateway":
        return cls(
            config.database_url_resolved,
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            echo=config.log_level == "DEBUG",
        )

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def ping(self) -> None:
        """Round-trip liveness check against the database."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def connect(self) -> "DatabaseGateway":
        """
        Verify the database is reachable and return the ready gateway.

        Raises:
            DatabaseConnectionError: the connection could not be opened or the
                ping failed. Callers treat this as fatal.
        """
        try:
            await self.ping()
        except (SQLAlchemyError, OSError) as e:
            logger.critical(
                "Database connection failed for %s: %s",
                self.url.render_as_string(hide_password=True),
                _driver_message(e),
            )
            raise DatabaseConnectionError(
                message=f"Could not connect to the database: {_driver_message(e)}",
                context={"url": self.url.render_as_string(hide_password=True)},
            ) from e

        logger.info("Connected to database")
        return self

    async def dispose(self) -> None:
        """Close every pooled connection. Called once at shutdown."""
        await self.engine.dispose()
        logger.info("Database connections released")

    # ── Statement execution ───────────────────────────────────────────────

    async def fetch_all(self, statement: Executable) -> List[Row]:
        """Run a read statement and return every row in storage order."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(statement)
                return list(result.all())
        except SQLAlchemyError as e:
            raise self._wrap(e) from e

    async def fetch_one(self, statement: Executable) -> Optional[Row]:
        """Run a read statement and return its first row, or None when empty."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(statement)
                return result.first()
        except SQLAlchemyError as e:
            raise self._wrap(e) from e

    async def execute(self, statement: Executable) -> int:
        """
        Run a write statement in its own transaction.

        Returns the affected row count. Callers may ignore it: a statement
        that matches no rows is not an error.
        """
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(statement)
                return result.rowcount
        except SQLAlchemyError as e:
            raise self._wrap(e) from e

    @staticmethod
    def _wrap(exc: SQLAlchemyError) -> DatabaseError:
        message = _driver_message(exc)
        logger.error("Statement failed: %s", message)
        return DatabaseError(
            message=message,
            context={"error_type": type(exc).__name__},
        )


async def connect(config: Settings = settings) -> DatabaseGateway:
    """Build a gateway from settings and verify it is live."""
    return await DatabaseGateway.from_settings(config).connect()


# ── Request Dependency ────────────────────────────────────────────────────
def get_gateway(request: Request) -> DatabaseGateway:
    """
    FastAPI dependency returning the process-wide gateway.

    The lifespan stores it on `app.state.gateway`; tests either pass their own
    gateway to `create_app()` or override this dependency.
    """
    return request.app.state.gateway
