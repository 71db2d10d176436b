"""Expression interface shared by all plan nodes."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from opcrash.core.types import TypeRef

Scope = Mapping[str, Any]


class Expression:
    """A node of a call plan that can be evaluated and rendered as source.

    Expressions are immutable and may be shared between blocks. ``context`` is
    the type under test and only affects name qualification.
    """

    @property
    def return_type(self) -> TypeRef:  # pragma: no cover - interface
        raise NotImplementedError

    def evaluate(self, scope: Optional[Scope] = None) -> Any:  # pragma: no cover - interface
        raise NotImplementedError

    def render(self, context: Optional[TypeRef] = None) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def call_depth(self) -> int:
        """Nesting depth of operation calls inside this expression."""

        return 0

    def __str__(self) -> str:
        return self.render()


def assignable(value_type: TypeRef, target_type: TypeRef) -> bool:
    """Conservative assignment check that needs no type hierarchy.

    Primitives must match exactly and array dimensionalities must agree;
    reference types are accepted since subtyping is decided by the introspector.
    """

    if target_type.is_primitive or value_type.is_primitive:
        return value_type == target_type
    if target_type.is_array:
        value_leaf, value_dims = value_type.decompose()
        target_leaf, target_dims = target_type.decompose()
        if value_dims != target_dims:
            return False
        if value_leaf.is_primitive or target_leaf.is_primitive:
            return value_leaf == target_leaf
    return True
