"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .article import (
    ArticleCreate,
    ArticleListResponse,
    ArticleResponse,
    ArticleUpdate,
    CategoryCount,
    LikeStateResponse,
    SearchResponse,
)
from .comment import CommentCreate, CommentResponse
from .common import MessageResponse
from .user import AuthResponse, LoginRequest, RegisterRequest, UserPublic

__all__ = [
    "ArticleCreate", "ArticleListResponse", "ArticleResponse", "ArticleUpdate",
    "CategoryCount", "LikeStateResponse", "SearchResponse",
    "CommentCreate", "CommentResponse",
    "MessageResponse",
    "AuthResponse", "LoginRequest", "RegisterRequest", "UserPublic",
]
