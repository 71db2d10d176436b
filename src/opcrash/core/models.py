"""Core dataclasses shared across opcrash subsystems."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .types import VOID, TypeRef

CONSTRUCTOR_NAME = "<init>"


class Visibility(str, Enum):
    """Access level of an operation; ``allows`` implements the Java rules we need."""

    PUBLIC = "public"
    PACKAGE = "package"
    PRIVATE = "private"

    def allows(self, other: "Visibility") -> bool:
        """Whether code restricted to ``self`` may use an operation declared ``other``."""

        if self is Visibility.PUBLIC:
            return other is Visibility.PUBLIC
        if self is Visibility.PACKAGE:
            return other is not Visibility.PRIVATE
        return True


@dataclass(frozen=True)
class OperationDescriptor:
    """Metadata describing a constructor or method of a type."""

    declaring_type: TypeRef
    name: str
    param_types: Tuple[TypeRef, ...] = tuple()
    return_type: TypeRef = VOID
    is_static: bool = False
    is_constructor: bool = False
    is_abstract: bool = False
    visibility: Visibility = Visibility.PUBLIC
    throws: Tuple[TypeRef, ...] = tuple()
    implementation: Optional[str] = None  # dotted path "module:attr"

    @classmethod
    def constructor(
        cls,
        declaring_type: TypeRef,
        param_types: Tuple[TypeRef, ...] = tuple(),
        **kwargs,
    ) -> "OperationDescriptor":
        return cls(
            declaring_type=declaring_type,
            name=CONSTRUCTOR_NAME,
            param_types=tuple(param_types),
            return_type=declaring_type,
            is_constructor=True,
            **kwargs,
        )

    @classmethod
    def method(
        cls,
        declaring_type: TypeRef,
        name: str,
        param_types: Tuple[TypeRef, ...] = tuple(),
        return_type: TypeRef = VOID,
        **kwargs,
    ) -> "OperationDescriptor":
        return cls(
            declaring_type=declaring_type,
            name=name,
            param_types=tuple(param_types),
            return_type=return_type,
            **kwargs,
        )

    @property
    def needs_enclosing_instance(self) -> bool:
        return self.is_constructor and self.declaring_type.is_inner

    @property
    def needs_receiver(self) -> bool:
        return not self.is_constructor and not self.is_static

    @property
    def slot_offset(self) -> int:
        """Number of implicit leading slots (receiver or enclosing instance)."""

        return 1 if self.needs_receiver or self.needs_enclosing_instance else 0

    @property
    def slot_types(self) -> Tuple[TypeRef, ...]:
        if self.needs_enclosing_instance:
            assert self.declaring_type.outer is not None
            return (self.declaring_type.outer,) + self.param_types
        if self.needs_receiver:
            return (self.declaring_type,) + self.param_types
        return self.param_types

    def qualified_name(self) -> str:
        return f"{self.declaring_type.qualified_name}.{self.name}"

    def signature(self) -> str:
        params = ", ".join(param.qualified_name for param in self.param_types)
        return f"{self.qualified_name()}({params})"

    def __str__(self) -> str:
        return self.signature()
