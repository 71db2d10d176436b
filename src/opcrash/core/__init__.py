"""Core models and helpers exposed at the package level."""
from .invoker import invoke, resolve_implementation
from .models import CONSTRUCTOR_NAME, OperationDescriptor, Visibility
from .types import (
    BOOLEAN,
    BYTE,
    CHAR,
    DOUBLE,
    FLOAT,
    INT,
    LONG,
    OBJECT,
    SHORT,
    STRING,
    VOID,
    TypeKind,
    TypeRef,
)

__all__ = [
    "BOOLEAN",
    "BYTE",
    "CHAR",
    "CONSTRUCTOR_NAME",
    "DOUBLE",
    "FLOAT",
    "INT",
    "LONG",
    "OBJECT",
    "SHORT",
    "STRING",
    "VOID",
    "OperationDescriptor",
    "TypeKind",
    "TypeRef",
    "Visibility",
    "invoke",
    "resolve_implementation",
]
