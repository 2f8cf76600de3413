"""
Pydantic schemas for blog post endpoints.

JSON uses camelCase (`createdAt`); Python code uses snake_case.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

TITLE_MAX_LENGTH = 200


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BlogPostInput(_CamelModel):
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., min_length=1)
    # If omitted, the store stamps the insert time.
    created_at: datetime | None = None

    @field_validator("title", "content")
    @classmethod
    def _must_be_utf8(cls, value: str) -> str:
        # JSON escapes can smuggle in lone surrogates, which SQLite cannot store.
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError("must be valid UTF-8 text") from exc
        return value


class BlogPost(_CamelModel):
    id: int
    title: str
    content: str
    created_at: datetime
