# src/inkwell/api/v1/endpoints/articles.py
"""Article, like and comment endpoints for the Inkwell API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from inkwell.schemas.article import (
    ArticleCreate,
    ArticleListResponse,
    ArticleResponse,
    ArticleUpdate,
    LikeStateResponse,
)
from inkwell.schemas.comment import CommentCreate, CommentResponse
from inkwell.schemas.common import MessageResponse
from inkwell.services import articles, comments, likes, query

from ..dependencies import CurrentCallerDep, OptionalCallerDep, StoreDep

router = APIRouter(prefix="/articles", tags=["articles"])


@router.get("", response_model=ArticleListResponse)
def list_articles(
    store: StoreDep,
    caller_id: OptionalCallerDep,
    search: str | None = Query(None, description="Substring matched against text and tags"),
    category: str | None = Query(None, description="Exact category, case-insensitive"),
    author: str | None = Query(None, description="Author username or id"),
    sort_by: str = Query("createdAt", alias="sortBy", description="createdAt, likes, title or author"),
    order: str = Query("desc", description="asc or desc"),
    limit: int | None = Query(None, ge=0),
    offset: int = Query(0, ge=0),
) -> ArticleListResponse:
    """List articles visible to the caller with search, filters, sort and pagination.

    Args:
        store: Record store
        caller_id: Caller id, or None for anonymous requests
        search: Free-text search term
        category: Category filter
        author: Author filter; an unknown author yields an empty page
        sort_by: Sort field
        order: Sort direction
        limit: Page size; omitted means everything after ``offset``
        offset: Number of matches to skip

    Returns:
        Envelope with the page and the total number of matches
    """
    options = query.ArticleQuery(
        search=search,
        category=category,
        author=author,
        sort_by=sort_by,
        order=order,
        limit=limit,
        offset=offset,
    )
    return query.list_articles(store, caller_id, options)


@router.get("/{article_id}", response_model=ArticleResponse)
def get_article(article_id: str, store: StoreDep, caller_id: OptionalCallerDep) -> ArticleResponse:
    """Get a specific article by ID.

    Raises:
        ArticleNotFound: If the article does not exist
        Forbidden: If the article is another user's draft
    """
    return query.get_article(store, caller_id, article_id)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
def create_article(
    payload: ArticleCreate,
    caller_id: CurrentCallerDep,
    store: StoreDep,
) -> ArticleResponse:
    """Create an article authored by the caller."""
    return articles.create_article(store, caller_id, payload)


@router.put("/{article_id}", response_model=ArticleResponse)
def update_article(
    article_id: str,
    payload: ArticleUpdate,
    caller_id: CurrentCallerDep,
    store: StoreDep,
) -> ArticleResponse:
    """Apply a partial update; only the author or an admin may do this."""
    return articles.update_article(store, caller_id, article_id, payload)


@router.delete("/{article_id}", response_model=MessageResponse)
def delete_article(article_id: str, caller_id: CurrentCallerDep, store: StoreDep) -> MessageResponse:
    """Delete an article with its comments and likes."""
    articles.delete_article(store, caller_id, article_id)
    return MessageResponse(message="Article deleted")


@router.post("/{article_id}/like", response_model=LikeStateResponse)
def like_article(article_id: str, caller_id: CurrentCallerDep, store: StoreDep) -> LikeStateResponse:
    """Like an article; liking twice is a conflict."""
    state = likes.like_article(store, article_id, caller_id)
    return LikeStateResponse(message="Article liked", likes=state.total_likes, is_liked=state.is_liked)


@router.delete("/{article_id}/like", response_model=LikeStateResponse)
def unlike_article(article_id: str, caller_id: CurrentCallerDep, store: StoreDep) -> LikeStateResponse:
    """Remove the caller's like from an article."""
    state = likes.unlike_article(store, article_id, caller_id)
    return LikeStateResponse(message="Article unliked", likes=state.total_likes, is_liked=state.is_liked)


@router.get("/{article_id}/comments", response_model=list[CommentResponse])
def list_comments(
    article_id: str,
    store: StoreDep,
    caller_id: OptionalCallerDep,
) -> list[CommentResponse]:
    """List comments on an article the caller can read."""
    return comments.list_comments(store, article_id, caller_id)


@router.post(
    "/{article_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    article_id: str,
    payload: CommentCreate,
    caller_id: CurrentCallerDep,
    store: StoreDep,
) -> CommentResponse:
    """Comment on an article as the caller."""
    return comments.add_comment(store, caller_id, article_id, payload.content)
