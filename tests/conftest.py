# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from inkwell.core.security import create_access_token
from inkwell.db.session import get_store
from inkwell.db.store import ARTICLES, COMMENTS, LIKES, USERS, RecordStore
from inkwell.main import app as fastapi_app
from inkwell.models import Article, Comment, Like, User, generate_id

_ARTICLE_COUNTER = count(1)


@pytest.fixture()
def store(tmp_path) -> RecordStore:
    """Provide an empty record store rooted in a temporary directory."""
    record_store = RecordStore(tmp_path / "data")
    record_store.ensure_collections()
    return record_store


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_store_dependency(app: FastAPI, store: RecordStore) -> Iterator[None]:
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_store, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _add(store: RecordStore, collection: Any, record: Any) -> Any:
    with store.transaction(collection) as uow:
        records = uow.get(collection)
        records.append(record)
        uow.put(collection, records)
    return record


@pytest.fixture()
def make_user(store: RecordStore) -> Callable[..., User]:
    """Return a factory persisting users straight into the store."""

    def _make_user(username: str, *, is_admin: bool = False, **fields: Any) -> User:
        user = User(
            id=fields.pop("id", generate_id()),
            username=username,
            email=fields.pop("email", f"{username}@inkwell.dev"),
            first_name=fields.pop("first_name", username.capitalize()),
            last_name=fields.pop("last_name", "Tester"),
            password_hash=fields.pop("password_hash", "not-a-real-hash"),
            is_admin=is_admin,
            created_at=fields.pop("created_at", "2024-01-01T00:00:00.000Z"),
        )
        return _add(store, USERS, user)

    return _make_user


@pytest.fixture()
def make_article(store: RecordStore) -> Callable[..., Article]:
    """Return a factory persisting articles straight into the store."""

    def _make_article(author: User | str, **fields: Any) -> Article:
        seq = next(_ARTICLE_COUNTER)
        author_id = author if isinstance(author, str) else author.id
        created_at = fields.pop("created_at", f"2024-02-01T00:00:{seq % 60:02d}.000Z")
        article = Article(
            id=fields.pop("id", generate_id()),
            title=fields.pop("title", f"Article {seq}"),
            content=fields.pop("content", "Body text"),
            status=fields.pop("status", "published"),
            author_id=author_id,
            created_at=created_at,
            updated_at=fields.pop("updated_at", created_at),
            **fields,
        )
        return _add(store, ARTICLES, article)

    return _make_article


@pytest.fixture()
def make_like(store: RecordStore) -> Callable[[Article | str, User | str], Like]:
    def _make_like(article: Article | str, user: User | str) -> Like:
        like = Like(
            id=generate_id(),
            article_id=article if isinstance(article, str) else article.id,
            user_id=user if isinstance(user, str) else user.id,
            created_at="2024-03-01T00:00:00.000Z",
        )
        return _add(store, LIKES, like)

    return _make_like


@pytest.fixture()
def make_comment(store: RecordStore) -> Callable[..., Comment]:
    def _make_comment(article: Article, author: User, content: str = "Nice read") -> Comment:
        comment = Comment(
            id=generate_id(),
            article_id=article.id,
            author_id=author.id,
            content=content,
            created_at="2024-03-02T00:00:00.000Z",
        )
        return _add(store, COMMENTS, comment)

    return _make_comment


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user."""
    return make_user("alice", first_name="Alice", last_name="Liddell")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second user."""
    return make_user("bob", first_name="Bob", last_name="Builder")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("root", is_admin=True, first_name="Ada", last_name="Admin")


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return bearer(other_user)


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    """Return a helper building bearer headers for any user."""
    return bearer
