# src/inkwell/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .articles import router as articles_router
from .auth import router as auth_router
from .comments import router as comments_router
from .search import router as search_router
from .users import router as users_router

__all__ = [
    "articles_router",
    "auth_router",
    "comments_router",
    "search_router",
    "users_router",
]
