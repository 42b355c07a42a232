"""Operator scripts for Inkwell."""
