"""Array creation with initializer, for any element type and dimensionality."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from opcrash.core.types import TypeRef
from opcrash.errors import InvalidArgumentError

from .base import Expression, Scope, assignable


@dataclass(frozen=True)
class ArrayCreateAndInit(Expression):
    """``new T[]...[]{c0, c1, ...}`` built from one component plan per slot.

    For dimensionality ``d > 1`` every component is an array of
    dimensionality ``d - 1`` (typically another ``ArrayCreateAndInit``).
    """

    array_type: TypeRef
    components: Tuple[Expression, ...] = tuple()

    def __post_init__(self) -> None:
        if self.array_type is None:
            raise InvalidArgumentError("ArrayCreateAndInit requires an array type")
        if not self.array_type.is_array:
            raise InvalidArgumentError(f"{self.array_type.qualified_name} is not an array type")
        if self.components is None:
            raise InvalidArgumentError("Component plans must not be None")
        object.__setattr__(self, "components", tuple(self.components))
        component_type = self.array_type.component
        assert component_type is not None
        for position, component in enumerate(self.components):
            if component is None:
                raise InvalidArgumentError(f"Component {position} of {self.array_type.qualified_name} is None")
            if not assignable(component.return_type, component_type):
                raise InvalidArgumentError(
                    f"Component {position} has type {component.return_type.qualified_name}, "
                    f"expected {component_type.qualified_name}"
                )

    @classmethod
    def of(
        cls,
        leaf_type: TypeRef,
        dimensionality: int,
        components: Sequence[Expression] = (),
    ) -> "ArrayCreateAndInit":
        if leaf_type is None:
            raise InvalidArgumentError("Leaf type must not be None")
        if leaf_type.is_array:
            raise InvalidArgumentError("Leaf type must not itself be an array")
        if dimensionality < 1:
            raise InvalidArgumentError(f"Dimensionality must be positive, got {dimensionality}")
        return cls(leaf_type.array_of(dimensionality), tuple(components))

    def with_components(self, components: Sequence[Expression]) -> "ArrayCreateAndInit":
        return ArrayCreateAndInit(self.array_type, tuple(components))

    @property
    def leaf_type(self) -> TypeRef:
        return self.array_type.decompose()[0]

    @property
    def dimensionality(self) -> int:
        return self.array_type.decompose()[1]

    @property
    def return_type(self) -> TypeRef:
        return self.array_type

    def evaluate(self, scope: Optional[Scope] = None) -> np.ndarray:
        values = [component.evaluate(scope) for component in self.components]
        if self.dimensionality == 1 and self.leaf_type.dtype != np.dtype(object):
            return np.array(values, dtype=self.leaf_type.dtype)
        # Element-wise assignment keeps nested arrays as elements (rows may be jagged).
        result = np.empty(len(values), dtype=object)
        for index, value in enumerate(values):
            result[index] = value
        return result

    def render(self, context: Optional[TypeRef] = None) -> str:
        leaf_name = self.leaf_type.source_name(context)
        brackets = "[]" * self.dimensionality
        body = ", ".join(component.render(context) for component in self.components)
        return f"new {leaf_name}{brackets}{{{body}}}"

    def call_depth(self) -> int:
        return max((component.call_depth() for component in self.components), default=0)
