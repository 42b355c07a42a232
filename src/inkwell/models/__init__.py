"""Record models for the Inkwell JSON collections."""

from .article import STATUS_DRAFT, STATUS_PUBLISHED, Article
from .base import Record, generate_id
from .comment import Comment
from .like import Like
from .user import User

__all__ = [
    "STATUS_DRAFT", "STATUS_PUBLISHED",
    "Article",
    "Comment",
    "Like",
    "Record", "generate_id",
    "User",
]
