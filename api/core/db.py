"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI opens it on startup and
closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Inside `async with db.transaction():` every helper runs on the same
connection, so a group of statements commits or rolls back together.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Any, AsyncIterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None
_current_connection: ContextVar[asyncpg.Connection | None] = ContextVar("qna_db_connection", default=None)


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = settings.env_str("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    min_size = max(1, settings.env_int("DB_POOL_MIN_SIZE", 1))
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=min_size,
        max_size=max(min_size, settings.env_int("DB_POOL_MAX_SIZE", 5)),
        command_timeout=settings.env_int("DB_COMMAND_TIMEOUT", 30),
    )
    logger.info("db_pool_opened min_size=%s", min_size)


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None
    logger.info("db_pool_closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _executor() -> asyncpg.Pool | asyncpg.Connection:
    conn = _current_connection.get()
    return conn if conn is not None else pool()


@asynccontextmanager
async def transaction() -> AsyncIterator[asyncpg.Connection]:
    """
    Run the enclosed helpers on one connection inside one transaction.

    Nested calls reuse the outer transaction.
    """
    existing = _current_connection.get()
    if existing is not None:
        yield existing
        return

    async with pool().acquire() as conn:
        async with conn.transaction():
            token = _current_connection.set(conn)
            try:
                yield conn
            finally:
                _current_connection.reset(token)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await _executor().fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await _executor().fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def fetch_value(sql: str, *args: Any) -> Any:
    """
    Run a query and return the first column of the first row.
    """
    return await _executor().fetchval(sql, *args)


async def execute(sql: str, *args: Any) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL) and return asyncpg's status tag,
    e.g. "DELETE 1".
    """
    return await _executor().execute(sql, *args)


def affected_rows(status_tag: str) -> int:
    try:
        return int((status_tag or "").rsplit(" ", 1)[-1])
    except ValueError:
        return 0
