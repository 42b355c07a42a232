"""Account registration, login and user lookups."""
from __future__ import annotations

import logging

from inkwell.core.errors import Conflict, InvalidCredential, NotFound
from inkwell.core.security import create_access_token, hash_password, verify_password
from inkwell.db.store import USERS, RecordStore
from inkwell.db.time import utcnow_iso
from inkwell.models import User, generate_id
from inkwell.schemas.user import AuthResponse, RegisterRequest, UserPublic

from .authors import to_public

logger = logging.getLogger(__name__)


def _issue(user: User) -> AuthResponse:
    return AuthResponse(user=to_public(user), token=create_access_token(user.id, user.email))


def register(store: RecordStore, data: RegisterRequest) -> AuthResponse:
    """Create an account and return it with a fresh token.

    Raises:
        Conflict: If the username or email is already registered.
    """
    email = data.email.lower()
    with store.transaction(USERS) as uow:
        users = uow.get(USERS)
        for existing in users:
            if existing.email.lower() == email or existing.username.lower() == data.username.lower():
                raise Conflict("User already exists")
        user = User(
            id=generate_id(),
            username=data.username,
            email=email,
            first_name=data.first_name,
            last_name=data.last_name,
            password_hash=hash_password(data.password),
            is_admin=False,
            created_at=utcnow_iso(),
        )
        users.append(user)
        uow.put(USERS, users)
    logger.info("Registered user %s (%s)", user.id, user.username)
    return _issue(user)


def login(store: RecordStore, email: str, password: str) -> AuthResponse:
    """Exchange credentials for a token.

    Raises:
        InvalidCredential: If the email is unknown or the password is wrong.
    """
    wanted = email.strip().lower()
    user = next((u for u in store.read_all(USERS) if u.email.lower() == wanted), None)
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredential("Invalid credentials")
    return _issue(user)


def get_user(store: RecordStore, user_id: str) -> UserPublic:
    """Return the safe projection of one user.

    Raises:
        NotFound: If no user has ``user_id``.
    """
    user = next((u for u in store.read_all(USERS) if u.id == user_id), None)
    if user is None:
        raise NotFound("User not found")
    return to_public(user)


def list_users(store: RecordStore) -> list[UserPublic]:
    return [to_public(user) for user in store.read_all(USERS)]


def set_admin(store: RecordStore, identifier: str, is_admin: bool) -> UserPublic:
    """Grant or revoke admin rights for a user given by username or id.

    Raises:
        NotFound: If the identifier matches no user.
    """
    with store.transaction(USERS) as uow:
        users = uow.get(USERS)
        for index, user in enumerate(users):
            if user.id == identifier or user.username.lower() == identifier.lower():
                users[index] = user.model_copy(update={"is_admin": is_admin})
                uow.put(USERS, users)
                break
        else:
            raise NotFound("User not found")
    logger.info("User %s admin flag set to %s", users[index].id, is_admin)
    return to_public(users[index])
