"""Safe author projections for enriched articles and comments."""
from __future__ import annotations

from collections.abc import Iterable, Mapping

from inkwell.models import User
from inkwell.schemas.user import UserPublic

UNKNOWN_USER_ID = "unknown"

# Rendered in place of authors whose record no longer resolves.
UNKNOWN_AUTHOR = UserPublic(
    id=UNKNOWN_USER_ID,
    username="Unknown User",
    email="unknown@example.com",
    first_name="Unknown",
    last_name="User",
    is_admin=False,
)


def to_public(user: User) -> UserPublic:
    """Strip credential material from a stored user."""
    return UserPublic(
        id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        is_admin=user.is_admin,
        created_at=user.created_at or None,
    )


def index_users(users: Iterable[User]) -> dict[str, User]:
    """Map user ids to records; the first record wins on duplicate ids."""
    index: dict[str, User] = {}
    for user in users:
        index.setdefault(user.id, user)
    return index


def public_view(users_by_id: Mapping[str, User], user_id: str) -> UserPublic:
    """Return the safe projection of ``user_id`` or the unknown-user sentinel.

    Never fails, so one dangling reference cannot break a listing.
    """
    user = users_by_id.get(user_id)
    if user is None:
        return UNKNOWN_AUTHOR.model_copy()
    return to_public(user)
