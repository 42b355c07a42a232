# src/inkwell/api/v1/endpoints/auth.py
"""Authentication endpoints for the Inkwell API."""

from __future__ import annotations

from fastapi import APIRouter, status

from inkwell.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from inkwell.services import accounts

from ..dependencies import CurrentCallerDep, StoreDep

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, store: StoreDep) -> AuthResponse:
    """Create an account and return it with a bearer token."""
    return accounts.register(store, payload)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, store: StoreDep) -> AuthResponse:
    """Exchange email and password for a bearer token."""
    return accounts.login(store, payload.email, payload.password)


@router.get("/me", response_model=UserPublic)
def me(caller_id: CurrentCallerDep, store: StoreDep) -> UserPublic:
    """Return the authenticated user's profile."""
    return accounts.get_user(store, caller_id)
