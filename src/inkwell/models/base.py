"""Shared base for records persisted in the JSON collections."""

from __future__ import annotations

import random
import string
import time

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_SUFFIX_LENGTH = 9


def generate_id() -> str:
    """Return an opaque record id: millisecond timestamp plus a base-36 suffix."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=_ID_SUFFIX_LENGTH))
    return f"{int(time.time() * 1000)}{suffix}"


class Record(BaseModel):
    """Base model for stored entities.

    Attributes are snake_case in Python and camelCase on disk.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str

    def to_document(self) -> dict[str, object]:
        """Return the camelCase mapping written to the collection file."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
