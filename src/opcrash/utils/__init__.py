"""Utility exports."""
from .importing import import_string

__all__ = ["import_string"]
