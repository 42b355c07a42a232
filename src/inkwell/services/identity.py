"""Resolve the calling user's id from a bearer token."""
from __future__ import annotations

from jose import JWTError

from inkwell.core.errors import InvalidCredential, Unauthenticated
from inkwell.core.security import decode_access_token


def resolve_optional(token: str | None) -> str | None:
    """Return the caller id, or None for any missing or unverifiable token."""
    if not token:
        return None
    try:
        return decode_access_token(token)
    except JWTError:
        return None


def resolve_required(token: str | None) -> str:
    """Return the caller id for a protected operation.

    Raises:
        Unauthenticated: If no token was presented.
        InvalidCredential: If the token cannot be verified.
    """
    if not token:
        raise Unauthenticated()
    try:
        return decode_access_token(token)
    except JWTError as err:
        raise InvalidCredential() from err
