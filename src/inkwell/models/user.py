"""Stored user accounts."""

from __future__ import annotations

from pydantic import Field

from .base import Record


class User(Record):
    """Registered account; ``password_hash`` never leaves the service layer."""

    username: str
    email: str
    first_name: str = ""
    last_name: str = ""
    password_hash: str = Field(default="", alias="passwordHash")
    is_admin: bool = False
    created_at: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
