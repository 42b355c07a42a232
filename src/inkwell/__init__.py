"""Inkwell: publishing and blogging API backed by flat JSON collections."""

__version__ = "0.1.0"
