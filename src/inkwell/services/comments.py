"""Comment listing and write paths."""
from __future__ import annotations

import logging

from inkwell.core.errors import ArticleNotFound, NotFound, ValidationFailed
from inkwell.db.store import ARTICLES, COMMENTS, USERS, RecordStore
from inkwell.db.time import utcnow_iso
from inkwell.models import Comment, generate_id
from inkwell.schemas.comment import CommentResponse

from .authors import index_users, public_view
from .ownership import ensure_owner_or_admin
from .visibility import ensure_readable, is_visible

logger = logging.getLogger(__name__)


def _enrich(comments: list[Comment], store: RecordStore) -> list[CommentResponse]:
    users_by_id = index_users(store.read_all(USERS))
    return [
        CommentResponse(**comment.model_dump(), author=public_view(users_by_id, comment.author_id))
        for comment in comments
    ]


def list_comments(store: RecordStore, article_id: str, caller_id: str | None) -> list[CommentResponse]:
    """Comments on an article in creation order.

    Returns an empty list when the article is missing or hidden from the caller.
    """
    article = next((a for a in store.read_all(ARTICLES) if a.id == article_id), None)
    if article is None or not is_visible(article, caller_id):
        return []
    comments = [c for c in store.read_all(COMMENTS) if c.article_id == article_id]
    return _enrich(comments, store)


def add_comment(store: RecordStore, caller_id: str, article_id: str, content: str) -> CommentResponse:
    """Append a comment by ``caller_id`` to a readable article.

    Raises:
        ValidationFailed: If the content is blank.
        ArticleNotFound: If the article does not exist.
        Forbidden: If the article is a draft the caller may not read.
    """
    body = content.strip()
    if not body:
        raise ValidationFailed("Comment content is required")

    with store.transaction(ARTICLES, COMMENTS) as uow:
        article = next((a for a in uow.get(ARTICLES) if a.id == article_id), None)
        if article is None:
            raise ArticleNotFound()
        ensure_readable(article, caller_id)
        comment = Comment(
            id=generate_id(),
            article_id=article_id,
            author_id=caller_id,
            content=body,
            created_at=utcnow_iso(),
        )
        comments = uow.get(COMMENTS)
        comments.append(comment)
        uow.put(COMMENTS, comments)
    logger.info("Comment %s added to article %s by %s", comment.id, article_id, caller_id)
    return _enrich([comment], store)[0]


def delete_comment(store: RecordStore, caller_id: str, comment_id: str) -> None:
    """Remove a comment.

    Raises:
        NotFound: If the comment does not exist.
        Forbidden: If the caller is neither the comment's author nor an admin.
    """
    with store.transaction(USERS, COMMENTS) as uow:
        comments = uow.get(COMMENTS)
        index = next((i for i, c in enumerate(comments) if c.id == comment_id), None)
        if index is None:
            raise NotFound("Comment not found")
        ensure_owner_or_admin(uow.get(USERS), caller_id, comments[index].author_id)
        del comments[index]
        uow.put(COMMENTS, comments)
    logger.info("Comment %s deleted by %s", comment_id, caller_id)
