# tests/test_manage.py
from inkwell.db.store import ALL_COLLECTIONS, USERS, RecordStore
from inkwell.scripts.manage import main


def test_init_creates_collections(tmp_path, capsys) -> None:
    data_dir = tmp_path / "fresh"

    assert main(["--data-dir", str(data_dir), "init"]) == 0

    for collection in ALL_COLLECTIONS:
        assert (data_dir / collection.filename).read_text().strip() == "[]"
    assert "users: 0 record(s)" in capsys.readouterr().out


def test_promote_and_demote(store: RecordStore, test_user) -> None:
    assert main(["--data-dir", str(store.data_dir), "promote", "ALICE"]) == 0
    assert store.read_all(USERS)[0].is_admin is True

    assert main(["--data-dir", str(store.data_dir), "demote", test_user.id]) == 0
    assert store.read_all(USERS)[0].is_admin is False


def test_promote_unknown_user(store: RecordStore, capsys) -> None:
    assert main(["--data-dir", str(store.data_dir), "promote", "nobody"]) == 1
    assert "User not found" in capsys.readouterr().err
