"""Telling expected failures apart from crashes of the operation under test."""
from __future__ import annotations

import pathlib
import traceback
from enum import Enum
from typing import FrozenSet

from opcrash.core.models import OperationDescriptor
from opcrash.errors import EvaluationFailure, InvocationFailure

_PACKAGE_ROOT = pathlib.Path(__file__).resolve().parent.parent
_ARGUMENT_ERRORS = (ValueError, TypeError)


class Verdict(str, Enum):
    EXPECTED = "expected"
    UNEXPECTED = "unexpected"


def classify_failure(failure: EvaluationFailure, operation: OperationDescriptor) -> Verdict:
    """Classify a failure raised while executing a block testing ``operation``.

    Expected failures are those declared in ``throws``, argument validation
    errors raised directly by the operation, failures while preparing the
    arguments, and failures coming from opcrash itself. Anything else
    escaped the operation's contract and is reported as a crash.
    """

    if not isinstance(failure, InvocationFailure):
        return Verdict.EXPECTED
    if failure.operation != operation:
        return Verdict.EXPECTED
    cause = failure.cause
    if isinstance(cause, EvaluationFailure):
        return Verdict.EXPECTED
    if _is_declared(cause, operation):
        return Verdict.EXPECTED
    frames = traceback.extract_tb(cause.__traceback__)
    if not frames:
        return Verdict.UNEXPECTED
    innermost = frames[-1]
    if _inside_package(innermost.filename):
        return Verdict.EXPECTED
    if innermost.name in _entry_names(operation) and _is_argument_error(cause):
        return Verdict.EXPECTED
    return Verdict.UNEXPECTED


def _is_declared(cause: BaseException, operation: OperationDescriptor) -> bool:
    declared = {t.nested_name for t in operation.throws} | {t.qualified_name for t in operation.throws}
    for klass in type(cause).__mro__:
        if klass.__name__ in declared or f"{klass.__module__}.{klass.__qualname__}" in declared:
            return True
    return False


def _is_argument_error(cause: BaseException) -> bool:
    if isinstance(cause, _ARGUMENT_ERRORS):
        return True
    return isinstance(cause, AttributeError) and "'NoneType' object" in str(cause)


def _entry_names(operation: OperationDescriptor) -> FrozenSet[str]:
    names = {operation.name}
    if operation.implementation:
        names.add(operation.implementation.replace(":", ".").rsplit(".", 1)[-1])
    if operation.is_constructor:
        names.update({"__init__", "__new__", "__post_init__"})
    return frozenset(names)


def _inside_package(filename: str) -> bool:
    try:
        pathlib.Path(filename).resolve().relative_to(_PACKAGE_ROOT)
    except ValueError:
        return False
    return True
