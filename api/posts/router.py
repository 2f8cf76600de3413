"""
FastAPI router for blog post endpoints.
"""

from __future__ import annotations

import logging

import aiosqlite
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from core import db

from . import repository, schemas

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/posts", response_model=list[schemas.BlogPost], name="list_posts")
async def list_posts(
    conn: aiosqlite.Connection = Depends(db.get_connection),
) -> list[schemas.BlogPost]:
    """
    List every post. No pagination or filtering.
    """
    rows = await repository.list_posts(conn)
    return [schemas.BlogPost.model_validate(row) for row in rows]


@router.post(
    "/posts",
    response_model=schemas.BlogPost,
    status_code=status.HTTP_201_CREATED,
    name="create_post",
)
async def create_post(
    payload: schemas.BlogPostInput,
    request: Request,
    response: Response,
    conn: aiosqlite.Connection = Depends(db.get_connection),
) -> schemas.BlogPost:
    try:
        row = await repository.insert_post(
            conn,
            title=payload.title,
            content=payload.content,
            created_at=payload.created_at,
        )
    except repository.PostConstraintError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    post = schemas.BlogPost.model_validate(row)
    response.headers["Location"] = f"{request.app.url_path_for('list_posts')}?id={post.id}"
    logger.info("post_created id=%s", post.id)
    return post
