"""Literal leaf expressions and their Java source syntax."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from opcrash.core.types import BOOLEAN, CHAR, DOUBLE, FLOAT, INT, STRING, TypeRef
from opcrash.errors import InvalidArgumentError

from .base import Expression, Scope

INTEGRAL_RANGES = {
    "byte": (-(2**7), 2**7 - 1),
    "short": (-(2**15), 2**15 - 1),
    "int": (-(2**31), 2**31 - 1),
    "long": (-(2**63), 2**63 - 1),
}
_FLOAT_MAX = float(np.finfo(np.float32).max)
_DOUBLE_MAX = float(np.finfo(np.float64).max)

_ESCAPES = {
    "\\": "\\\\",
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


@dataclass(frozen=True)
class Literal(Expression):
    """A constant value of a primitive type, ``String``, or ``null``."""

    value: Any
    declared_type: TypeRef

    def __post_init__(self) -> None:
        if self.declared_type is None:
            raise InvalidArgumentError("Literal requires a declared type")
        _check_value(self.value, self.declared_type)
        if self.declared_type == FLOAT:
            # javac rounds f literals to float32
            object.__setattr__(self, "value", float(np.float32(self.value)))

    @classmethod
    def null(cls, type_ref: TypeRef) -> "Literal":
        return cls(None, type_ref)

    @classmethod
    def of_boolean(cls, value: bool) -> "Literal":
        return cls(bool(value), BOOLEAN)

    @classmethod
    def of_int(cls, value: int) -> "Literal":
        return cls(value, INT)

    @classmethod
    def of_string(cls, value: str) -> "Literal":
        return cls(value, STRING)

    @property
    def return_type(self) -> TypeRef:
        return self.declared_type

    def evaluate(self, scope: Optional[Scope] = None) -> Any:
        return self.value

    def render(self, context: Optional[TypeRef] = None) -> str:
        if self.value is None:
            return f"({self.declared_type.source_name(context)})null"
        name = self.declared_type.name if self.declared_type.is_primitive else None
        if name == "boolean":
            return "true" if self.value else "false"
        if name in ("byte", "short"):
            return f"({name}){self.value}"
        if name == "int":
            return str(self.value)
        if name == "long":
            return f"{self.value}L"
        if name == "float":
            return _render_floating(self.value, "Float", "f")
        if name == "double":
            return _render_floating(self.value, "Double", "d")
        if name == "char":
            return "'" + _escape(self.value, quote="'") + "'"
        return '"' + _escape(self.value, quote='"') + '"'


def _check_value(value: Any, type_ref: TypeRef) -> None:
    if type_ref.is_void:
        raise InvalidArgumentError("Literals cannot have type void")
    if value is None:
        if type_ref.is_primitive:
            raise InvalidArgumentError(f"null is not a value of primitive type {type_ref.name}")
        return
    if type_ref == BOOLEAN:
        if not isinstance(value, bool):
            raise InvalidArgumentError(f"boolean literal expects a bool, got {value!r}")
        return
    if type_ref.name in INTEGRAL_RANGES and type_ref.is_primitive:
        low, high = INTEGRAL_RANGES[type_ref.name]
        if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
            raise InvalidArgumentError(f"{value!r} is not a valid {type_ref.name} literal")
        return
    if type_ref in (FLOAT, DOUBLE):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidArgumentError(f"{value!r} is not a valid {type_ref.name} literal")
        limit = _FLOAT_MAX if type_ref == FLOAT else _DOUBLE_MAX
        if abs(value) > limit and not (isinstance(value, float) and math.isinf(value)):
            raise InvalidArgumentError(f"{value!r} is outside the range of {type_ref.name}")
        return
    if type_ref == CHAR:
        if not isinstance(value, str) or len(value) != 1:
            raise InvalidArgumentError(f"char literal expects a single character, got {value!r}")
        return
    if type_ref == STRING:
        if not isinstance(value, str):
            raise InvalidArgumentError(f"String literal expects a str, got {value!r}")
        return
    raise InvalidArgumentError(f"No literal syntax for non-null values of {type_ref.qualified_name}")


def _render_floating(value: float, box: str, suffix: str) -> str:
    number = float(value)
    if math.isnan(number):
        return f"{box}.NaN"
    if math.isinf(number):
        return f"{box}.POSITIVE_INFINITY" if number > 0 else f"{box}.NEGATIVE_INFINITY"
    text = str(np.float32(number)) if suffix == "f" else repr(number)
    return text + suffix


def _escape(text: str, *, quote: str) -> str:
    parts = []
    for char in text:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif char == quote:
            parts.append("\\" + quote)
        elif " " <= char <= "~":
            parts.append(char)
        else:
            parts.append(_unicode_escape(char))
    return "".join(parts)


def _unicode_escape(char: str) -> str:
    code = ord(char)
    if code <= 0xFFFF:
        return f"\\u{code:04x}"
    # Java strings are UTF-16; characters beyond the BMP need a surrogate pair.
    code -= 0x10000
    high, low = 0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF)
    return f"\\u{high:04x}\\u{low:04x}"
