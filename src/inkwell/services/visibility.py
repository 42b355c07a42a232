"""Article visibility policy.

Published articles are visible to everyone. Drafts are visible only to their
author; admins get no override here. Any other status fails closed.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from inkwell.core.errors import Forbidden
from inkwell.models import STATUS_DRAFT, STATUS_PUBLISHED, Article

logger = logging.getLogger(__name__)

DRAFT_FORBIDDEN_DETAIL = "Access denied. Draft articles can only be viewed by their authors."


def is_visible(article: Article, caller_id: str | None) -> bool:
    """Return True if ``caller_id`` (or an anonymous caller) may read ``article``."""
    if article.status == STATUS_PUBLISHED:
        return True
    if article.status == STATUS_DRAFT:
        return caller_id is not None and caller_id == article.author_id
    return False


def visible_to(articles: Iterable[Article], caller_id: str | None) -> list[Article]:
    """Return the articles ``caller_id`` may read, preserving order."""
    return [article for article in articles if is_visible(article, caller_id)]


def ensure_readable(article: Article, caller_id: str | None) -> None:
    """Raise ``Forbidden`` for an existing article the caller may not read.

    Existence of the article is revealed to the caller; its content is not.
    """
    if not is_visible(article, caller_id):
        logger.debug("Denied read of article %s (status=%s)", article.id, article.status)
        raise Forbidden(DRAFT_FORBIDDEN_DETAIL)
