"""Ownership checks for write paths."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from inkwell.core.errors import Forbidden
from inkwell.models import User

logger = logging.getLogger(__name__)


def is_admin(users: Iterable[User], caller_id: str) -> bool:
    """Return True if ``caller_id`` resolves to a user flagged as admin."""
    return any(user.id == caller_id and user.is_admin for user in users)


def ensure_owner_or_admin(
    users: Iterable[User],
    caller_id: str,
    owner_id: str,
    *,
    detail: str = "Not authorized",
) -> None:
    """Raise ``Forbidden`` unless the caller owns the resource or is an admin."""
    if caller_id == owner_id:
        return
    if is_admin(users, caller_id):
        logger.info("Admin %s acting on resource owned by %s", caller_id, owner_id)
        return
    logger.debug("Denied write by %s on resource owned by %s", caller_id, owner_id)
    raise Forbidden(detail)
