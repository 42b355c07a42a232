"""Article write paths: create, update and delete."""
from __future__ import annotations

import logging

from inkwell.core.errors import ArticleNotFound
from inkwell.db.store import ARTICLES, COMMENTS, LIKES, USERS, RecordStore
from inkwell.db.time import utcnow_iso
from inkwell.models import Article, generate_id
from inkwell.schemas.article import ArticleCreate, ArticleResponse, ArticleUpdate

from .ownership import ensure_owner_or_admin
from .query import enrich_one

logger = logging.getLogger(__name__)

# Fields that may be cleared with an explicit null in a patch.
_NULLABLE_FIELDS = frozenset({"excerpt", "category", "tags"})


def _find_index(articles: list[Article], article_id: str) -> int:
    for index, article in enumerate(articles):
        if article.id == article_id:
            return index
    raise ArticleNotFound()


def create_article(store: RecordStore, caller_id: str, data: ArticleCreate) -> ArticleResponse:
    """Persist a new article authored by ``caller_id``."""
    now = utcnow_iso()
    article = Article(
        id=generate_id(),
        title=data.title,
        content=data.content,
        excerpt=data.excerpt,
        category=data.category,
        tags=data.tags,
        status=data.status,
        author_id=caller_id,
        created_at=now,
        updated_at=now,
    )
    with store.transaction(ARTICLES) as uow:
        articles = uow.get(ARTICLES)
        articles.append(article)
        uow.put(ARTICLES, articles)
    logger.info("Article %s created by %s (%s)", article.id, caller_id, article.status)
    return enrich_one(store, article, caller_id)


def update_article(
    store: RecordStore,
    caller_id: str,
    article_id: str,
    patch: ArticleUpdate,
) -> ArticleResponse:
    """Shallow-merge ``patch`` over the stored article.

    Only fields present in the request are applied. ``id``, ``authorId`` and
    the timestamps cannot be changed through a patch.

    Raises:
        ArticleNotFound: If the article does not exist.
        Forbidden: If the caller is neither the author nor an admin.
    """
    changes = {
        field: value
        for field, value in patch.model_dump(exclude_unset=True).items()
        if value is not None or field in _NULLABLE_FIELDS
    }
    with store.transaction(USERS, ARTICLES) as uow:
        articles = uow.get(ARTICLES)
        index = _find_index(articles, article_id)
        current = articles[index]
        ensure_owner_or_admin(uow.get(USERS), caller_id, current.author_id)
        updated = current.model_copy(update={**changes, "updated_at": utcnow_iso()})
        articles[index] = updated
        uow.put(ARTICLES, articles)
    logger.info("Article %s updated by %s: %s", article_id, caller_id, sorted(changes))
    return enrich_one(store, updated, caller_id)


def delete_article(store: RecordStore, caller_id: str, article_id: str) -> None:
    """Delete an article together with its comments and likes.

    Raises:
        ArticleNotFound: If the article does not exist.
        Forbidden: If the caller is neither the author nor an admin.
    """
    with store.transaction(USERS, ARTICLES, COMMENTS, LIKES) as uow:
        articles = uow.get(ARTICLES)
        index = _find_index(articles, article_id)
        ensure_owner_or_admin(uow.get(USERS), caller_id, articles[index].author_id)
        del articles[index]
        uow.put(ARTICLES, articles)

        comments = uow.get(COMMENTS)
        kept_comments = [comment for comment in comments if comment.article_id != article_id]
        if len(kept_comments) != len(comments):
            uow.put(COMMENTS, kept_comments)

        likes = uow.get(LIKES)
        kept_likes = [like for like in likes if like.article_id != article_id]
        if len(kept_likes) != len(likes):
            uow.put(LIKES, kept_likes)
    logger.info(
        "Article %s deleted by %s (%d comment(s), %d like(s) removed)",
        article_id,
        caller_id,
        len(comments) - len(kept_comments),
        len(likes) - len(kept_likes),
    )
