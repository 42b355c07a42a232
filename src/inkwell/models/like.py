"""Stored likes: one row per (article, user) pair."""

from .base import Record


class Like(Record):
    article_id: str
    user_id: str
    created_at: str
