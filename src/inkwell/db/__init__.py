# src/inkwell/db/__init__.py
"""Flat-file storage configuration and utilities."""

from .session import get_store
from .store import ARTICLES, COMMENTS, LIKES, USERS, Collection, RecordStore, UnitOfWork

__all__ = [
    "ARTICLES", "COMMENTS", "LIKES", "USERS",
    "Collection", "RecordStore", "UnitOfWork",
    "get_store",
]
