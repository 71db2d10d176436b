"""Type introspector protocol consumed by the planner."""
from __future__ import annotations

from typing import Protocol, Sequence, Tuple

from opcrash.core.models import OperationDescriptor, Visibility
from opcrash.core.types import TypeRef


class TypeIntrospector(Protocol):
    """Protocol all introspectors must follow."""

    def types(self) -> Sequence[TypeRef]:
        ...

    def available_operations(self, type_ref: TypeRef, visibility: Visibility) -> Sequence[OperationDescriptor]:
        """Operations declared by ``type_ref`` that ``visibility`` may use, in declaration order."""
        ...

    def producers(self, type_ref: TypeRef, visibility: Visibility) -> Sequence[OperationDescriptor]:
        """Operations whose result can be assigned to ``type_ref``."""
        ...

    def is_nested_non_static_type(self, type_ref: TypeRef) -> bool:
        ...

    def is_abstract(self, type_ref: TypeRef) -> bool:
        ...

    def decompose_array_type(self, type_ref: TypeRef) -> Tuple[TypeRef, int]:
        ...
