"""
Async database access helpers (raw SQL) using aiosqlite.

`Database` owns the SQLite file: it applies the schema once on startup and
hands out one connection per request. FastAPI creates it in the app lifespan
and keeps it on `app.state.db` (see `api/main.py`); routes receive a
connection through the `get_connection` dependency.

SQL parameter style:
- sqlite uses positional placeholders: ?, ?, ? ...
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import aiosqlite
from fastapi import Depends, Request

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS blog_posts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    -- length() stops at the first NUL, so emptiness and size are checked without it.
    title TEXT NOT NULL CHECK (title <> '' AND length(replace(title, char(0), ' ')) <= 200),
    content TEXT NOT NULL CHECK (content <> ''),
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""


class StoreUnavailableError(RuntimeError):
    pass


class Database:
    def __init__(self, path: str, *, busy_timeout_ms: int = 5000) -> None:
        self.path = path
        self.busy_timeout_ms = busy_timeout_ms

    async def init(self) -> None:
        """
        Open the file once and apply the schema.

        Raises StoreUnavailableError when the file cannot be opened or written.
        """
        # Each request opens its own connection, so an in-memory DB would be
        # empty for every request.
        if self.path == ":memory:" or not self.path:
            raise StoreUnavailableError("A file-backed DATABASE_PATH is required.")
        try:
            async with self.connect() as conn:
                await conn.executescript(SCHEMA_SQL)
                await conn.commit()
        except (aiosqlite.Error, OSError) as exc:
            raise StoreUnavailableError(f"Cannot open database at {self.path}: {exc}") from exc
        logger.info("store_ready path=%s", self.path)

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[aiosqlite.Connection]:
        conn = await aiosqlite.connect(self.path, timeout=self.busy_timeout_ms / 1000)
        conn.row_factory = aiosqlite.Row
        try:
            yield conn
        finally:
            await conn.close()


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "db", None)
    if database is None:
        raise RuntimeError("Database is not initialized. Open it in the app lifespan.")
    return database


async def get_connection(
    database: Database = Depends(get_database),
) -> AsyncIterator[aiosqlite.Connection]:
    """
    Request-scoped connection; closed when the response is done.
    """
    async with database.connect() as conn:
        yield conn


def _row_to_dict(row: aiosqlite.Row) -> dict[str, Any]:
    return dict(row)


async def fetch_one(conn: aiosqlite.Connection, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    async with conn.execute(sql, args) as cursor:
        row = await cursor.fetchone()
    return _row_to_dict(row) if row is not None else None


async def fetch_all(conn: aiosqlite.Connection, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    async with conn.execute(sql, args) as cursor:
        rows = await cursor.fetchall()
    return [_row_to_dict(r) for r in rows]


async def execute(conn: aiosqlite.Connection, sql: str, *args: Any) -> int | None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL) and return the last row id.

    The caller owns the transaction and must commit.
    """
    async with conn.execute(sql, args) as cursor:
        return cursor.lastrowid
