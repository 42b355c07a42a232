"""Article retrieval: visibility, search, filters, enrichment, sort, pagination.

Every read endpoint goes through this module so listing, search and the
dashboard views apply the same rules.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from inkwell.core.errors import ArticleNotFound, ValidationFailed
from inkwell.db.store import ARTICLES, LIKES, USERS, RecordStore
from inkwell.db.time import parse_instant
from inkwell.models import STATUS_PUBLISHED, Article, User
from inkwell.schemas.article import (
    ArticleListResponse,
    ArticleResponse,
    CategoryCount,
    SearchResponse,
)
from inkwell.schemas.user import UserPublic

from .authors import index_users, public_view, to_public
from .likes import LikeIndex
from .visibility import ensure_readable, visible_to

SearchType = Literal["all", "articles", "users"]


@dataclass(frozen=True)
class ArticleQuery:
    """Options accepted by :func:`list_articles`."""

    search: str | None = None
    category: str | None = None
    author: str | None = None
    sort_by: str = "createdAt"
    order: str = "desc"
    limit: int | None = None
    offset: int = 0


def matches_search(article: Article, term: str) -> bool:
    """Case-insensitive substring match on title, content, excerpt or any tag."""
    needle = term.casefold()
    if needle in article.title.casefold() or needle in article.content.casefold():
        return True
    if article.excerpt and needle in article.excerpt.casefold():
        return True
    return any(needle in tag.casefold() for tag in article.tags or ())


def matches_category(article: Article, category: str) -> bool:
    return article.category is not None and article.category.casefold() == category.casefold()


def resolve_author(users: Iterable[User], author: str) -> User | None:
    """Find a user by case-insensitive username or exact id."""
    wanted = author.casefold()
    for user in users:
        if user.username.casefold() == wanted or user.id == author:
            return user
    return None


def enrich(
    articles: Iterable[Article],
    users_by_id: Mapping[str, User],
    like_index: LikeIndex,
    caller_id: str | None,
) -> list[ArticleResponse]:
    """Join articles with their author projection and like aggregate."""
    enriched = []
    for article in articles:
        state = like_index.state_for(article.id, caller_id)
        enriched.append(
            ArticleResponse(
                **article.model_dump(),
                author=public_view(users_by_id, article.author_id),
                likes=state.total_likes,
                is_liked=state.is_liked,
            )
        )
    return enriched


_SORT_KEYS: dict[str, Callable[[ArticleResponse], Any]] = {
    "createdAt": lambda item: parse_instant(item.created_at),
    "likes": lambda item: item.likes,
    "title": lambda item: item.title.casefold(),
    "author": lambda item: item.author.username.casefold(),
}


def sort_articles(
    items: list[ArticleResponse],
    sort_by: str = "createdAt",
    order: str = "desc",
) -> list[ArticleResponse]:
    """Stable sort; unknown fields fall back to ``createdAt``, unknown orders to desc."""
    key = _SORT_KEYS.get(sort_by, _SORT_KEYS["createdAt"])
    return sorted(items, key=key, reverse=order != "asc")


def list_articles(
    store: RecordStore,
    caller_id: str | None,
    query: ArticleQuery,
) -> ArticleListResponse:
    """Return the page of articles visible to ``caller_id`` matching ``query``.

    ``total`` counts every match before pagination.
    """
    users = store.read_all(USERS)
    articles = visible_to(store.read_all(ARTICLES), caller_id)

    if query.search:
        articles = [article for article in articles if matches_search(article, query.search)]
    if query.category:
        articles = [article for article in articles if matches_category(article, query.category)]
    if query.author:
        author = resolve_author(users, query.author)
        if author is None:
            articles = []
        else:
            articles = [article for article in articles if article.author_id == author.id]

    items = enrich(articles, index_users(users), LikeIndex(store.read_all(LIKES)), caller_id)
    items = sort_articles(items, query.sort_by, query.order)

    total = len(items)
    offset = max(query.offset, 0)
    end = None if query.limit is None else offset + query.limit
    return ArticleListResponse(
        articles=items[offset:end],
        total=total,
        offset=offset,
        limit=total if query.limit is None else query.limit,
    )


def get_article(store: RecordStore, caller_id: str | None, article_id: str) -> ArticleResponse:
    """Return one enriched article.

    Raises:
        ArticleNotFound: If no article has ``article_id``.
        Forbidden: If the article is a draft and the caller is not its author.
    """
    article = next((a for a in store.read_all(ARTICLES) if a.id == article_id), None)
    if article is None:
        raise ArticleNotFound()
    ensure_readable(article, caller_id)
    return enrich_one(store, article, caller_id)


def enrich_one(store: RecordStore, article: Article, caller_id: str | None) -> ArticleResponse:
    users_by_id = index_users(store.read_all(USERS))
    return enrich([article], users_by_id, LikeIndex(store.read_all(LIKES)), caller_id)[0]


def my_articles(store: RecordStore, caller_id: str) -> list[ArticleResponse]:
    """Every article authored by the caller, drafts included."""
    own = [article for article in store.read_all(ARTICLES) if article.author_id == caller_id]
    users_by_id = index_users(store.read_all(USERS))
    return enrich(own, users_by_id, LikeIndex(store.read_all(LIKES)), caller_id)


def matches_user(user: User, term: str) -> bool:
    needle = term.casefold()
    return (
        needle in user.username.casefold()
        or needle in user.first_name.casefold()
        or needle in user.last_name.casefold()
        or needle in user.full_name.casefold()
    )


def search(
    store: RecordStore,
    term: str | None,
    search_type: SearchType = "all",
    caller_id: str | None = None,
) -> SearchResponse:
    """Global search over published articles and users.

    Drafts never appear here, whoever the caller is.

    Raises:
        ValidationFailed: If ``term`` is empty.
    """
    if not term:
        raise ValidationFailed("Search query is required")

    users = store.read_all(USERS)
    found_articles: list[ArticleResponse] = []
    found_users: list[UserPublic] = []

    if search_type in ("all", "articles"):
        published = [
            article
            for article in store.read_all(ARTICLES)
            if article.status == STATUS_PUBLISHED and matches_search(article, term)
        ]
        found_articles = enrich(
            published, index_users(users), LikeIndex(store.read_all(LIKES)), caller_id
        )

    if search_type in ("all", "users"):
        found_users = [to_public(user) for user in users if matches_user(user, term)]

    return SearchResponse(
        articles=found_articles,
        users=found_users,
        total=len(found_articles) + len(found_users),
    )


def categories(store: RecordStore) -> list[CategoryCount]:
    """Distinct categories of published articles with their counts, first-seen order."""
    counts: dict[str, int] = {}
    for article in store.read_all(ARTICLES):
        if article.status == STATUS_PUBLISHED and article.category:
            counts[article.category] = counts.get(article.category, 0) + 1
    return [CategoryCount(name=name, count=count) for name, count in counts.items()]
