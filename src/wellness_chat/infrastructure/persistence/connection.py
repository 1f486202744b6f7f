"""
infrastructure.persistence.connection - Async SQLite connection manager.

Wraps aiosqlite with a context manager pattern. Outside a transaction every
acquire() opens its own connection and commits on exit. Inside
transaction(), every acquire() in the same task reuses the transaction's
connection, so a whole unit of work commits or rolls back together.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncIterator, Optional

import aiosqlite

from wellness_chat.domain.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class AsyncSQLiteConnection:
    """Async SQLite connection provider with auto-commit/rollback."""

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._active: ContextVar[Optional[aiosqlite.Connection]] = ContextVar(
            f"sqlite_tx_{id(self)}", default=None,
        )

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def in_transaction(self) -> bool:
        return self._active.get() is not None

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield an async SQLite connection with FK support.

        Joins the surrounding transaction if there is one; otherwise commits
        on success and rolls back on exception.
        """
        active = self._active.get()
        if active is not None:
            yield active
            return

        async with self._connect() as conn:
            try:
                yield conn
                await conn.commit()
            except aiosqlite.Error as exc:
                await conn.rollback()
                logger.exception("Database operation failed, transaction rolled back.")
                raise RepositoryError(str(exc)) from exc
            except Exception:
                await conn.rollback()
                raise

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Run the enclosed block as one SQLite transaction.

        Nested calls join the outer transaction.
        """
        active = self._active.get()
        if active is not None:
            yield active
            return

        async with self._connect() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            token = self._active.set(conn)
            try:
                yield conn
                await conn.commit()
            except aiosqlite.Error as exc:
                await conn.rollback()
                logger.exception("Unit of work failed, transaction rolled back.")
                raise RepositoryError(str(exc)) from exc
            except Exception:
                await conn.rollback()
                logger.warning("Unit of work aborted, transaction rolled back.")
                raise
            finally:
                self._active.reset(token)

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[aiosqlite.Connection]:
        try:
            conn = await aiosqlite.connect(self._db_path)
        except aiosqlite.Error as exc:
            raise RepositoryError(f"Cannot open database {self._db_path}: {exc}") from exc
        try:
            await conn.execute("PRAGMA foreign_keys = ON")
            conn.row_factory = aiosqlite.Row
            yield conn
        finally:
            await conn.close()
