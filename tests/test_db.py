"""Store bootstrap and the raw SQL helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from core import db


@pytest.mark.asyncio
async def test_init_creates_blog_posts_table(database: db.Database) -> None:
    async with database.connect() as conn:
        row = await db.fetch_one(
            conn,
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?",
            "blog_posts",
        )
    assert row == {"name": "blog_posts"}


@pytest.mark.asyncio
async def test_init_is_idempotent(database: db.Database) -> None:
    async with database.connect() as conn:
        await db.execute(conn, "INSERT INTO blog_posts (title, content) VALUES (?, ?)", "t", "c")
        await conn.commit()

    await database.init()

    async with database.connect() as conn:
        rows = await db.fetch_all(conn, "SELECT title FROM blog_posts")
    assert rows == [{"title": "t"}]


@pytest.mark.asyncio
async def test_init_fails_when_file_cannot_be_opened(tmp_path: Path) -> None:
    database = db.Database(str(tmp_path / "missing" / "blog.db"))
    with pytest.raises(db.StoreUnavailableError):
        await database.init()


@pytest.mark.asyncio
async def test_init_rejects_in_memory_database() -> None:
    with pytest.raises(db.StoreUnavailableError):
        await db.Database(":memory:").init()


@pytest.mark.asyncio
async def test_execute_returns_last_row_id(conn) -> None:
    first = await db.execute(conn, "INSERT INTO blog_posts (title, content) VALUES (?, ?)", "a", "b")
    second = await db.execute(conn, "INSERT INTO blog_posts (title, content) VALUES (?, ?)", "c", "d")
    await conn.commit()
    assert (first, second) == (1, 2)


@pytest.mark.asyncio
async def test_fetch_one_returns_none_for_no_rows(conn) -> None:
    assert await db.fetch_one(conn, "SELECT id FROM blog_posts WHERE id = ?", 42) is None
