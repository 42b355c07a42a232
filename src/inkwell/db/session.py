"""Record store configuration."""

from __future__ import annotations

from functools import lru_cache

from inkwell.core.settings import settings
from inkwell.db.store import RecordStore


@lru_cache(maxsize=1)
def get_store() -> RecordStore:
    """Return the process-wide record store for dependency injection.

    The store owns the per-collection locks, so every request must share it.
    """
    return RecordStore(settings.collections_dir)
