"""Stored articles."""

from __future__ import annotations

from typing import Final

from .base import Record

STATUS_DRAFT: Final[str] = "draft"
STATUS_PUBLISHED: Final[str] = "published"


class Article(Record):
    """Article owned by ``author_id``.

    Like counts are derived from the likes collection on every read and are
    never stored here. ``status`` is kept as a plain string so that unknown
    values read from disk survive and are treated as invisible.
    """

    title: str
    content: str
    excerpt: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    status: str
    author_id: str
    created_at: str
    updated_at: str
