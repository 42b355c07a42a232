"""Business logic services for the Inkwell application."""

from .likes import LikeIndex, LikeState, like_state_for
from .query import ArticleQuery

__all__ = [
    "ArticleQuery",
    "LikeIndex",
    "LikeState",
    "like_state_for",
]
