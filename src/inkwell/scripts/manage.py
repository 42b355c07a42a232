"""Operator commands for the Inkwell data directory."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from inkwell.core.errors import InkwellError
from inkwell.core.settings import settings
from inkwell.db.store import ALL_COLLECTIONS, RecordStore
from inkwell.services.accounts import set_admin


def init_store(store: RecordStore) -> None:
    """Create the data directory and empty collections."""
    store.ensure_collections()
    for collection in ALL_COLLECTIONS:
        count = len(store.read_all(collection))
        print(f"[manage] {collection.name}: {count} record(s) in {store.path_for(collection)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the Inkwell data directory")
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Override the data directory (defaults to the DATA_DIR setting)",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("init", help="Create the data directory and empty collections.")
    promote = commands.add_parser("promote", help="Grant admin rights to a user.")
    promote.add_argument("user", help="Username or user id")
    demote = commands.add_parser("demote", help="Revoke admin rights from a user.")
    demote.add_argument("user", help="Username or user id")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    store = RecordStore(Path(args.data_dir) if args.data_dir else settings.collections_dir)
    try:
        if args.command == "init":
            init_store(store)
        else:
            user = set_admin(store, args.user, is_admin=args.command == "promote")
            print(f"[manage] {user.username} ({user.id}) is_admin={user.is_admin}")
    except InkwellError as exc:
        print(f"[manage] ERROR: {exc.detail}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
