"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns one connection pool. `main.py` creates it in the app
lifespan, stores it on `app.state.db`, and closes it on shutdown. Routes
receive it through the `get_database` dependency and pass it down to the
repository functions.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg
from fastapi import Request

logger = logging.getLogger(__name__)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(
        self,
        dsn: str,
        *,
        min_size: int = 1,
        max_size: int = 10,
        command_timeout: float | None = 30.0,
    ) -> None:
        self._dsn = dsn
        self._min_size = min(min_size, max_size)
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        """
        Create the pool and prove it can hand out a working connection.

        Failure here is fatal for the process; the error is logged and
        re-raised so the server never starts without a database.
        """
        if self._pool is not None:
            return None
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                command_timeout=self._command_timeout,
            )
            async with self._pool.acquire() as connection:
                await connection.execute("SELECT 1")
        except Exception:
            logger.exception("database_connect_failed")
            if self._pool is not None:
                await self._pool.close()
                self._pool = None
            raise
        logger.info("database_pool_ready max_size=%s", self._max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None
        logger.info("database_pool_closed")

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        async with self.pool.acquire() as connection:
            row = await connection.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with self.pool.acquire() as connection:
            rows = await connection.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement and return asyncpg's command status (e.g. "DELETE 1").
        """
        async with self.pool.acquire() as connection:
            return await connection.execute(sql, *args)


def get_database(request: Request) -> Database:
    return request.app.state.db
