"""Immutable type references for the universe of types under test."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from opcrash.errors import InvalidArgumentError


class TypeKind(str, Enum):
    PRIMITIVE = "primitive"
    REFERENCE = "reference"
    ARRAY = "array"


PRIMITIVE_DTYPES = {
    "boolean": np.dtype(np.bool_),
    "byte": np.dtype(np.int8),
    "short": np.dtype(np.int16),
    "char": np.dtype("<U1"),
    "int": np.dtype(np.int32),
    "long": np.dtype(np.int64),
    "float": np.dtype(np.float32),
    "double": np.dtype(np.float64),
}
PRIMITIVE_NAMES = tuple(PRIMITIVE_DTYPES) + ("void",)

# Namespaces whose types are visible without qualification everywhere.
IMPLICIT_NAMESPACES = ("java.lang",)
JAVA_LANG_NAMES = frozenset(
    {
        "ArithmeticException",
        "ArrayIndexOutOfBoundsException",
        "ClassCastException",
        "Error",
        "Exception",
        "IllegalArgumentException",
        "IllegalStateException",
        "NullPointerException",
        "RuntimeException",
        "Throwable",
        "UnsupportedOperationException",
        "Boolean",
        "Byte",
        "CharSequence",
        "Character",
        "Double",
        "Float",
        "Integer",
        "Long",
        "Number",
        "Object",
        "Short",
        "String",
    }
)


@dataclass(frozen=True)
class TypeRef:
    """Name and shape of a primitive, reference or array type.

    Identity is the name: nesting staticness is metadata and does not take
    part in equality, so a type parsed from a parameter list compares equal
    to the declared one.
    """

    name: str
    namespace: str = ""
    kind: TypeKind = TypeKind.REFERENCE
    component: Optional["TypeRef"] = None
    outer: Optional["TypeRef"] = None
    is_static: bool = field(default=True, compare=False)

    @classmethod
    def primitive(cls, name: str) -> "TypeRef":
        if name not in PRIMITIVE_NAMES:
            raise InvalidArgumentError(f"'{name}' is not a primitive type")
        return cls(name=name, kind=TypeKind.PRIMITIVE)

    @classmethod
    def parse(cls, text: str) -> "TypeRef":
        """Parse ``int``, ``java.lang.String[][]`` or ``pkg.Outer$Inner``."""

        if not isinstance(text, str) or not text.strip():
            raise InvalidArgumentError("Type name must be a non-empty string")
        base = text.strip()
        dimensions = 0
        while base.endswith("[]"):
            base = base[:-2].rstrip()
            dimensions += 1
        if base in PRIMITIVE_NAMES:
            leaf = cls.primitive(base)
        else:
            leaf = cls._parse_reference(base)
        if dimensions:
            if leaf.is_void:
                raise InvalidArgumentError("Arrays of void are not valid types")
            return leaf.array_of(dimensions)
        return leaf

    @classmethod
    def _parse_reference(cls, text: str) -> "TypeRef":
        namespace, _, nested = text.rpartition(".")
        if not namespace and nested in JAVA_LANG_NAMES:
            namespace = "java.lang"
        parts = nested.split("$")
        if any(not part.isidentifier() for part in parts):
            raise InvalidArgumentError(f"Invalid type name '{text}'")
        current: Optional[TypeRef] = None
        for part in parts:
            current = cls(name=part, namespace=namespace, outer=current)
        assert current is not None
        return current

    def array_of(self, dimensions: int = 1) -> "TypeRef":
        if dimensions < 1:
            raise InvalidArgumentError(f"Array dimensionality must be positive, got {dimensions}")
        result = self
        for _ in range(dimensions):
            result = TypeRef(name=result.name + "[]", kind=TypeKind.ARRAY, component=result)
        return result

    def nested(self, name: str, *, is_static: bool = True) -> "TypeRef":
        return TypeRef(name=name, namespace=self.namespace, outer=self, is_static=is_static)

    def with_static(self, is_static: bool) -> "TypeRef":
        return TypeRef(
            name=self.name,
            namespace=self.namespace,
            kind=self.kind,
            component=self.component,
            outer=self.outer,
            is_static=is_static,
        )

    @property
    def is_primitive(self) -> bool:
        return self.kind is TypeKind.PRIMITIVE

    @property
    def is_void(self) -> bool:
        return self.is_primitive and self.name == "void"

    @property
    def is_array(self) -> bool:
        return self.kind is TypeKind.ARRAY

    @property
    def is_nested(self) -> bool:
        return self.outer is not None

    @property
    def is_inner(self) -> bool:
        """Nested and non-static: construction needs an enclosing instance."""

        return self.is_nested and not self.is_static

    def decompose(self) -> Tuple["TypeRef", int]:
        """Strip array dimensions, returning ``(leaf_type, dimensionality)``."""

        leaf, dimensions = self, 0
        while leaf.is_array:
            assert leaf.component is not None
            leaf = leaf.component
            dimensions += 1
        return leaf, dimensions

    @property
    def nested_name(self) -> str:
        """Simple names of the enclosing chain joined with dots: ``Outer.Inner``."""

        if self.outer is None:
            return self.name
        return f"{self.outer.nested_name}.{self.name}"

    @property
    def qualified_name(self) -> str:
        if self.is_array:
            assert self.component is not None
            return self.component.qualified_name + "[]"
        if self.is_primitive or not self.namespace:
            return self.nested_name
        return f"{self.namespace}.{self.nested_name}"

    @property
    def binary_name(self) -> str:
        if self.is_array:
            assert self.component is not None
            return self.component.binary_name + "[]"
        local = self.name if self.outer is None else f"{self.outer.binary_name.rpartition('.')[2]}${self.name}"
        if self.is_primitive or not self.namespace:
            return local
        return f"{self.namespace}.{local}"

    def is_visible_from(self, context: Optional["TypeRef"]) -> bool:
        if self.is_array:
            assert self.component is not None
            return self.component.is_visible_from(context)
        if self.is_primitive or not self.namespace or self.namespace in IMPLICIT_NAMESPACES:
            return True
        if context is None:
            return False
        leaf, _ = context.decompose()
        return leaf.namespace == self.namespace

    def source_name(self, context: Optional["TypeRef"] = None) -> str:
        """Name as written in generated source, short when visible from ``context``."""

        if self.is_array:
            assert self.component is not None
            return self.component.source_name(context) + "[]"
        if self.is_visible_from(context):
            return self.nested_name
        return self.qualified_name

    @property
    def dtype(self) -> np.dtype:
        """numpy dtype used for a one-dimensional array of this element type."""

        if self.is_primitive and self.name in PRIMITIVE_DTYPES:
            return PRIMITIVE_DTYPES[self.name]
        return np.dtype(object)

    def __str__(self) -> str:
        return self.binary_name


VOID = TypeRef.primitive("void")
BOOLEAN = TypeRef.primitive("boolean")
BYTE = TypeRef.primitive("byte")
SHORT = TypeRef.primitive("short")
CHAR = TypeRef.primitive("char")
INT = TypeRef.primitive("int")
LONG = TypeRef.primitive("long")
FLOAT = TypeRef.primitive("float")
DOUBLE = TypeRef.primitive("double")
STRING = TypeRef(name="String", namespace="java.lang")
OBJECT = TypeRef(name="Object", namespace="java.lang")
