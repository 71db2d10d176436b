"""Binding operation descriptors to Python callables and invoking them."""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from opcrash.errors import AccessFailure, InstantiationFailure, InvocationFailure
from opcrash.utils import import_string

from .models import OperationDescriptor, Visibility

logger = logging.getLogger(__name__)

_MISSING = object()


def resolve_implementation(operation: OperationDescriptor) -> Optional[Callable[..., Any]]:
    """Import the callable bound to ``operation``; ``None`` when nothing is bound."""

    path = operation.implementation
    if not path:
        return None
    try:
        target = import_string(path)
    except (ImportError, AttributeError, ValueError) as exc:
        raise AccessFailure(f"Cannot resolve implementation '{path}' of {operation}: {exc}", operation) from exc
    if not callable(target):
        failure = InstantiationFailure if operation.is_constructor else AccessFailure
        raise failure(f"Implementation '{path}' of {operation} is not callable", operation)
    return target


def invoke(
    operation: OperationDescriptor,
    arguments: Sequence[Any],
    receiver: Any = _MISSING,
) -> Any:
    """Call ``operation`` with evaluated ``arguments``.

    ``receiver`` is the receiver instance for instance methods or the
    enclosing instance for constructors of inner types. Anything the
    implementation raises is wrapped in :class:`InvocationFailure`.
    """

    if operation.visibility is Visibility.PRIVATE:
        raise AccessFailure(f"{operation} is private", operation)
    if operation.is_constructor and operation.is_abstract:
        raise InstantiationFailure(f"Cannot instantiate abstract type {operation.declaring_type}", operation)
    target = resolve_implementation(operation)
    call_args = list(arguments)
    if operation.slot_offset:
        if receiver is _MISSING:
            raise AccessFailure(f"{operation} requires a receiver or enclosing instance", operation)
        if target is None and operation.needs_receiver:
            return _dispatch_on_receiver(operation, receiver, call_args)
        call_args.insert(0, receiver)
    if target is None:
        raise AccessFailure(f"No implementation bound for {operation}", operation)
    logger.debug("invoking %s with %d argument(s)", operation, len(call_args))
    try:
        return target(*call_args)
    except Exception as exc:
        raise InvocationFailure(operation, exc) from exc


def _dispatch_on_receiver(operation: OperationDescriptor, receiver: Any, arguments: Sequence[Any]) -> Any:
    logger.debug("dispatching %s on %r", operation.name, type(receiver).__name__)
    try:
        method = getattr(receiver, operation.name)
        return method(*arguments)
    except Exception as exc:
        raise InvocationFailure(operation, exc) from exc
