"""User directory endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from inkwell.schemas.article import ArticleResponse
from inkwell.schemas.user import UserPublic
from inkwell.services import accounts, query

from ..dependencies import CurrentCallerDep, StoreDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserPublic])
def list_users(store: StoreDep) -> list[UserPublic]:
    """List every user as a safe projection."""
    return accounts.list_users(store)


@router.get("/me/articles", response_model=list[ArticleResponse])
def list_my_articles(caller_id: CurrentCallerDep, store: StoreDep) -> list[ArticleResponse]:
    """List the caller's own articles, drafts included."""
    return query.my_articles(store, caller_id)


@router.get("/{user_id}", response_model=UserPublic)
def get_user(user_id: str, store: StoreDep) -> UserPublic:
    """Return one user as a safe projection."""
    return accounts.get_user(store, user_id)
