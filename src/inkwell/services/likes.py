"""Like aggregation and the like/unlike write paths.

Like counts are always derived from the likes collection; nothing is cached on
article records. Each (article, user) pair has at most one like row.
"""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from inkwell.core.errors import ArticleNotFound, Conflict, NotLiked
from inkwell.db.store import ARTICLES, LIKES, RecordStore
from inkwell.db.time import utcnow_iso
from inkwell.models import Like, generate_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LikeState:
    """Like aggregate for one article as seen by one (optional) caller."""

    total_likes: int
    is_liked: bool


def like_state_for(likes: Iterable[Like], article_id: str, caller_id: str | None) -> LikeState:
    """Count likes on ``article_id`` and whether ``caller_id`` is among them."""
    total = 0
    liked = False
    for like in likes:
        if like.article_id != article_id:
            continue
        total += 1
        if caller_id is not None and like.user_id == caller_id:
            liked = True
    return LikeState(total_likes=total, is_liked=liked)


class LikeIndex:
    """Precomputed like aggregates for enriching many articles at once."""

    def __init__(self, likes: Iterable[Like]) -> None:
        self._counts: Counter[str] = Counter()
        self._pairs: set[tuple[str, str]] = set()
        for like in likes:
            self._counts[like.article_id] += 1
            self._pairs.add((like.article_id, like.user_id))

    def state_for(self, article_id: str, caller_id: str | None) -> LikeState:
        liked = caller_id is not None and (article_id, caller_id) in self._pairs
        return LikeState(total_likes=self._counts[article_id], is_liked=liked)


def like_article(store: RecordStore, article_id: str, caller_id: str) -> LikeState:
    """Record that ``caller_id`` likes ``article_id``.

    Raises:
        ArticleNotFound: If the article does not exist.
        Conflict: If the caller already likes the article.
    """
    with store.transaction(ARTICLES, LIKES) as uow:
        if not any(article.id == article_id for article in uow.get(ARTICLES)):
            raise ArticleNotFound()
        likes = uow.get(LIKES)
        if any(like.article_id == article_id and like.user_id == caller_id for like in likes):
            raise Conflict("Article already liked")
        likes.append(
            Like(
                id=generate_id(),
                article_id=article_id,
                user_id=caller_id,
                created_at=utcnow_iso(),
            )
        )
        uow.put(LIKES, likes)
    logger.debug("User %s liked article %s", caller_id, article_id)
    return like_state_for(likes, article_id, caller_id)


def unlike_article(store: RecordStore, article_id: str, caller_id: str) -> LikeState:
    """Remove the like ``caller_id`` placed on ``article_id``.

    Raises:
        ArticleNotFound: If the article does not exist.
        NotLiked: If the caller does not like the article.
    """
    with store.transaction(ARTICLES, LIKES) as uow:
        if not any(article.id == article_id for article in uow.get(ARTICLES)):
            raise ArticleNotFound()
        likes = uow.get(LIKES)
        for index, like in enumerate(likes):
            if like.article_id == article_id and like.user_id == caller_id:
                del likes[index]
                break
        else:
            raise NotLiked()
        uow.put(LIKES, likes)
    logger.debug("User %s unliked article %s", caller_id, article_id)
    return like_state_for(likes, article_id, caller_id)
