"""Literal value library exports."""
from .library import BUILTIN_VALUES, ValueLibrary, library, register_values

__all__ = [
    "BUILTIN_VALUES",
    "ValueLibrary",
    "library",
    "register_values",
]
