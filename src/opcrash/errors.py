"""Exception hierarchy shared by planner, expressions and writers."""
from __future__ import annotations

from typing import Optional


class OpcrashError(Exception):
    """Base class for all errors raised by opcrash."""


class InvalidArgumentError(OpcrashError, ValueError):
    """Malformed construction input (missing reference, arity mismatch, ...)."""


class PlanIndexError(OpcrashError, IndexError):
    """Plan or block index outside ``[0, size)``."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Plan index {index} outside [0, {size})")
        self.index = index
        self.size = size


class CatalogError(OpcrashError, ValueError):
    """Invalid operation catalogue or generation plan file."""


class EvaluationFailure(OpcrashError):
    """Evaluating an expression did not produce a value."""

    def __init__(self, message: str, operation: Optional[object] = None) -> None:
        super().__init__(message)
        self.operation = operation


class InvocationFailure(EvaluationFailure):
    """The operation under test raised while being evaluated.

    The raised exception is available as ``__cause__`` (and ``cause``).
    """

    def __init__(self, operation: object, cause: BaseException) -> None:
        super().__init__(f"{operation} raised {type(cause).__name__}: {cause}", operation)
        self.cause = cause


class AccessFailure(EvaluationFailure):
    """Invocation of the operation is not permitted."""


class InstantiationFailure(EvaluationFailure):
    """The requested type cannot be constructed."""
