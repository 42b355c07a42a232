"""Shared API dependencies for authentication and storage."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from inkwell.db.session import get_store
from inkwell.db.store import RecordStore
from inkwell.services.identity import resolve_optional, resolve_required

# HTTP Bearer scheme; missing credentials are handled by the resolvers.
bearer_scheme = HTTPBearer(auto_error=False)

BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]

# Type alias for record store dependency
StoreDep = Annotated[RecordStore, Depends(get_store)]


def _token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    return credentials.credentials if credentials is not None else None


def get_optional_caller(credentials: BearerDep) -> str | None:
    """Return the caller id for public endpoints, or None when anonymous."""
    return resolve_optional(_token(credentials))


def get_current_caller(credentials: BearerDep) -> str:
    """Return the caller id for protected endpoints.

    Raises:
        Unauthenticated: If no bearer token was sent.
        InvalidCredential: If the token cannot be verified.
    """
    return resolve_required(_token(credentials))


# Type aliases for caller dependencies
OptionalCallerDep = Annotated[str | None, Depends(get_optional_caller)]
CurrentCallerDep = Annotated[str, Depends(get_current_caller)]
