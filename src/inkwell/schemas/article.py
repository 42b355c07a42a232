"""Article-related Pydantic schemas."""

from typing import Literal

from pydantic import Field

from .common import ApiModel
from .user import UserPublic

ArticleStatus = Literal["draft", "published"]


class ArticleCreate(ApiModel):
    """Schema for creating an article. ``status`` must be explicit."""

    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)
    status: ArticleStatus
    excerpt: str | None = Field(None, max_length=1000)
    category: str | None = Field(None, max_length=100)
    tags: list[str] | None = None


class ArticleUpdate(ApiModel):
    """Partial update. Unknown keys such as ``id`` or ``authorId`` are dropped."""

    title: str | None = Field(None, min_length=1, max_length=300)
    content: str | None = Field(None, min_length=1)
    status: ArticleStatus | None = None
    excerpt: str | None = Field(None, max_length=1000)
    category: str | None = Field(None, max_length=100)
    tags: list[str] | None = None


class ArticleResponse(ApiModel):
    """An article joined with its author's safe projection and like aggregate."""

    id: str
    title: str
    content: str
    excerpt: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    status: str
    author_id: str
    created_at: str
    updated_at: str
    author: UserPublic
    likes: int = Field(..., ge=0)
    is_liked: bool


class ArticleListResponse(ApiModel):
    """Paginated article listing envelope."""

    articles: list[ArticleResponse]
    total: int
    offset: int
    limit: int


class LikeStateResponse(ApiModel):
    """Like aggregate returned by like and unlike."""

    message: str
    likes: int
    is_liked: bool


class CategoryCount(ApiModel):
    name: str
    count: int


class SearchResponse(ApiModel):
    articles: list[ArticleResponse]
    users: list[UserPublic]
    total: int
