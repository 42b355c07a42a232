"""Comment-related Pydantic schemas."""

from pydantic import Field

from .common import ApiModel
from .user import UserPublic


class CommentCreate(ApiModel):
    content: str = Field(..., min_length=1, max_length=5000, description="Comment body")


class CommentResponse(ApiModel):
    """A comment joined with its author's safe projection."""

    id: str
    article_id: str
    author_id: str
    content: str
    created_at: str
    author: UserPublic
