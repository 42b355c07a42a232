# mypy: ignore-errors
"""Tests for the flat-file record store."""

import json
import threading

import pytest

from inkwell.core.errors import StorageError
from inkwell.db.store import ALL_COLLECTIONS, ARTICLES, COMMENTS, LIKES, USERS, RecordStore
from inkwell.models import Like
from inkwell.services.articles import delete_article


def _like(article_id: str, user_id: str, like_id: str = "l1") -> Like:
    return Like(id=like_id, article_id=article_id, user_id=user_id, created_at="2024-01-01T00:00:00Z")


def test_ensure_collections_creates_empty_arrays(tmp_path) -> None:
    """Every collection file is created as an empty JSON array."""
    record_store = RecordStore(tmp_path / "fresh")
    record_store.ensure_collections()

    for collection in ALL_COLLECTIONS:
        path = record_store.path_for(collection)
        assert path.exists()
        assert json.loads(path.read_text()) == []


def test_ensure_collections_keeps_existing_data(store) -> None:
    store.write_all(LIKES, [_like("a1", "u1")])
    store.ensure_collections()
    assert len(store.read_all(LIKES)) == 1


def test_read_missing_file_is_empty(tmp_path) -> None:
    assert RecordStore(tmp_path / "nowhere").read_all(ARTICLES) == []


@pytest.mark.parametrize("raw", ["{not json", '{"id": "x"}', "", "   "])
def test_read_corrupt_file_is_empty(store, raw) -> None:
    """Corrupt or non-array documents degrade to an empty collection."""
    store.path_for(ARTICLES).write_text(raw)
    assert store.read_all(ARTICLES) == []


def test_read_skips_invalid_records(store) -> None:
    store.path_for(LIKES).write_text(json.dumps([
        {"id": "l1", "articleId": "a1", "userId": "u1", "createdAt": "2024-01-01T00:00:00Z"},
        {"id": "l2"},
        "garbage",
    ]))
    likes = store.read_all(LIKES)
    assert [like.id for like in likes] == ["l1"]


def test_write_uses_camel_case_keys(store) -> None:
    store.write_all(LIKES, [_like("a1", "u1")])
    documents = json.loads(store.path_for(LIKES).read_text())
    assert documents == [
        {"id": "l1", "articleId": "a1", "userId": "u1", "createdAt": "2024-01-01T00:00:00Z"}
    ]


def test_write_leaves_no_temp_files(store) -> None:
    store.write_all(LIKES, [_like("a1", "u1")])
    leftovers = [p.name for p in store.data_dir.iterdir() if p.name.endswith(".tmp")]
    assert leftovers == []


def test_write_failure_raises_storage_error(tmp_path) -> None:
    blocker = tmp_path / "blocked"
    blocker.write_text("not a directory")
    record_store = RecordStore(blocker / "data")
    with pytest.raises(StorageError):
        record_store.write_all(LIKES, [_like("a1", "u1")])


def test_transaction_commits_staged_collections(store) -> None:
    with store.transaction(LIKES) as uow:
        likes = uow.get(LIKES)
        likes.append(_like("a1", "u1"))
        uow.put(LIKES, likes)
    assert len(store.read_all(LIKES)) == 1


def test_transaction_discards_changes_on_error(store) -> None:
    """Nothing is written when the body raises."""
    with pytest.raises(RuntimeError):
        with store.transaction(LIKES) as uow:
            uow.put(LIKES, [_like("a1", "u1")])
            raise RuntimeError("boom")
    assert store.read_all(LIKES) == []


def test_commit_writes_dependents_first(store, monkeypatch) -> None:
    written = []
    original = store._write

    def recording_write(collection, records):
        written.append(collection.name)
        original(collection, records)

    monkeypatch.setattr(store, "_write", recording_write)
    with store.transaction(*ALL_COLLECTIONS) as uow:
        for collection in ALL_COLLECTIONS:
            uow.put(collection, [])

    assert written == ["likes", "comments", "articles", "users"]


def test_failed_cascade_never_orphans_children(store, test_user, other_user, make_article, make_comment, make_like, monkeypatch) -> None:
    """If the articles write fails, the article survives and its children are gone or intact."""
    article = make_article(test_user)
    make_comment(article, other_user)
    make_like(article, other_user)
    original = store._write

    def failing_write(collection, records):
        if collection is ARTICLES:
            raise StorageError()
        original(collection, records)

    monkeypatch.setattr(store, "_write", failing_write)
    with pytest.raises(StorageError):
        delete_article(store, test_user.id, article.id)

    assert [a.id for a in store.read_all(ARTICLES)] == [article.id]
    live = {a.id for a in store.read_all(ARTICLES)}
    assert all(c.article_id in live for c in store.read_all(COMMENTS))
    assert all(like.article_id in live for like in store.read_all(LIKES))


def test_transaction_releases_locks_after_error(store) -> None:
    with pytest.raises(RuntimeError):
        with store.transaction(USERS, LIKES):
            raise RuntimeError("boom")

    acquired = threading.Event()

    def _worker() -> None:
        with store.transaction(LIKES, USERS):
            acquired.set()

    thread = threading.Thread(target=_worker)
    thread.start()
    thread.join(timeout=5)
    assert acquired.is_set()


def test_transaction_rejects_unlocked_collection(store) -> None:
    with store.transaction(ARTICLES) as uow:
        with pytest.raises(RuntimeError):
            uow.get(COMMENTS)


def test_transaction_get_returns_staged_value(store) -> None:
    with store.transaction(LIKES) as uow:
        uow.put(LIKES, [_like("a1", "u1")])
        assert [like.id for like in uow.get(LIKES)] == ["l1"]


def test_transaction_requires_a_collection(store) -> None:
    with pytest.raises(ValueError):
        with store.transaction():
            pass


def test_concurrent_appends_are_serialized(store) -> None:
    """Parallel read-modify-write cycles never lose each other's rows."""
    workers = 16
    barrier = threading.Barrier(workers)

    def _append(n: int) -> None:
        barrier.wait()
        with store.transaction(LIKES) as uow:
            likes = uow.get(LIKES)
            likes.append(_like("a1", f"u{n}", like_id=f"l{n}"))
            uow.put(LIKES, likes)

    threads = [threading.Thread(target=_append, args=(n,)) for n in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(like.user_id for like in store.read_all(LIKES)) == sorted(
        f"u{n}" for n in range(workers)
    )
