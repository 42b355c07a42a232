"""Stored comments."""

from .base import Record


class Comment(Record):
    article_id: str
    author_id: str
    content: str
    created_at: str
