"""Domain error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; ``inkwell.main`` registers a single handler
that renders them as ``{"detail": ...}`` responses with the attached status.
"""

from __future__ import annotations

from fastapi import status


class InkwellError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Request failed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(InkwellError):
    """No credential was presented to a protected operation."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class InvalidCredential(InkwellError):
    """A credential was presented but could not be verified."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"


class Forbidden(InkwellError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized"


class NotFound(InkwellError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ArticleNotFound(NotFound):
    default_detail = "Article not found"


class Conflict(InkwellError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class NotLiked(InkwellError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Article not liked by user"


class ValidationFailed(InkwellError):
    """Malformed or missing input that passed schema validation."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "Invalid input"


class StorageError(InkwellError):
    """The backing collection files could not be written."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Storage unavailable"


AUTH_ERRORS = (Unauthenticated, InvalidCredential)

__all__ = [
    "AUTH_ERRORS",
    "ArticleNotFound",
    "Conflict",
    "Forbidden",
    "InkwellError",
    "InvalidCredential",
    "NotFound",
    "NotLiked",
    "StorageError",
    "Unauthenticated",
    "ValidationFailed",
]
