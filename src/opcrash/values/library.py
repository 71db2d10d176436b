"""Representative leaf values per type (zero, boundary and null values)."""
from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, Tuple

from opcrash.core.types import TypeRef
from opcrash.errors import InvalidArgumentError
from opcrash.expr import Literal

BUILTIN_VALUES: Dict[str, Tuple[Any, ...]] = {
    "boolean": (True, False),
    "byte": (0, 1, -1),
    "short": (0, 1, -1),
    "char": (" ", "a"),
    "int": (0, 1, -1),
    "long": (0, 1, -1),
    "float": (0.0, 1.0, -1.0),
    "double": (0.0, 1.0, -1.0),
    "java.lang.String": ("", "hallo"),
}


class ValueLibrary:
    """Stores literal values usable as leaf plans, keyed by type.

    Reference and array types always offer ``null`` first, followed by any
    registered non-null literals.
    """

    def __init__(self) -> None:
        self._values: Dict[TypeRef, Tuple[Literal, ...]] = {}

    def register(self, type_ref: TypeRef, values: Iterable[Any], *, replace: bool = False) -> Tuple[Literal, ...]:
        if type_ref is None or type_ref.is_void:
            raise InvalidArgumentError("Values must be registered for a non-void type")
        literals = tuple(Literal(value, type_ref) for value in values if value is not None)
        if replace or type_ref not in self._values:
            self._values[type_ref] = literals
        else:
            known = self._values[type_ref]
            self._values[type_ref] = known + tuple(lit for lit in literals if lit not in known)
        return self._values[type_ref]

    def values_for(self, type_ref: TypeRef) -> Tuple[Literal, ...]:
        if type_ref.is_void:
            return tuple()
        registered = self._values.get(type_ref, tuple())
        if type_ref.is_primitive:
            return registered
        return (Literal.null(type_ref),) + registered

    def __contains__(self, type_ref: TypeRef) -> bool:
        return type_ref in self._values

    def __iter__(self) -> Iterator[TypeRef]:
        return iter(self._values)

    def clear(self) -> None:
        self._values.clear()

    def load_builtins(self) -> None:
        for name, values in BUILTIN_VALUES.items():
            self.register(TypeRef.parse(name), values, replace=True)

    @classmethod
    def with_builtins(cls) -> "ValueLibrary":
        library = cls()
        library.load_builtins()
        return library


library = ValueLibrary.with_builtins()


def register_values(type_name: str, values: Iterable[Any]) -> Tuple[Literal, ...]:
    """Plugin hook: add literal values for ``type_name`` to the default library."""

    return library.register(TypeRef.parse(type_name), values)
