"""
Blog post persistence (raw SQL).
"""

from __future__ import annotations

from datetime import datetime, timezone

import aiosqlite

from core import db

_COLUMNS = "id, title, content, created_at"


class PostConstraintError(RuntimeError):
    pass


def format_timestamp(value: datetime) -> str:
    """
    Store timestamps as ISO-8601 UTC text; naive values are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


async def list_posts(conn: aiosqlite.Connection) -> list[dict]:
    return await db.fetch_all(
        conn,
        f"""
        SELECT {_COLUMNS}
        FROM blog_posts
        ORDER BY id ASC
        """,
    )


async def get_post(conn: aiosqlite.Connection, post_id: int) -> dict | None:
    return await db.fetch_one(
        conn,
        f"""
        SELECT {_COLUMNS}
        FROM blog_posts
        WHERE id = ?
        """,
        post_id,
    )


async def insert_post(
    conn: aiosqlite.Connection,
    *,
    title: str,
    content: str,
    created_at: datetime | None = None,
) -> dict:
    """
    Insert one post and return it with the store-assigned id (and created_at).

    Schema violations (missing/empty title or content, title too long) raise
    PostConstraintError and leave nothing behind.
    """
    try:
        if created_at is None:
            post_id = await db.execute(
                conn,
                """
                INSERT INTO blog_posts (title, content)
                VALUES (?, ?)
                """,
                title,
                content,
            )
        else:
            post_id = await db.execute(
                conn,
                """
                INSERT INTO blog_posts (title, content, created_at)
                VALUES (?, ?, ?)
                """,
                title,
                content,
                format_timestamp(created_at),
            )
        await conn.commit()
    except aiosqlite.IntegrityError as exc:
        await conn.rollback()
        raise PostConstraintError(str(exc)) from exc
    except UnicodeEncodeError as exc:
        await conn.rollback()
        raise PostConstraintError("Text is not valid UTF-8.") from exc

    if post_id is None:
        raise RuntimeError("Failed to create post.")
    row = await get_post(conn, post_id)
    if row is None:
        raise RuntimeError("Failed to create post.")
    return row
