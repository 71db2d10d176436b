"""Shared lookups for tests."""
from __future__ import annotations

from opcrash.core import Visibility


def operation_named(catalog, type_ref, name, arity=None):
    for operation in catalog.available_operations(type_ref, Visibility.PRIVATE):
        if operation.name == name and (arity is None or len(operation.param_types) == arity):
            return operation
    raise LookupError(f"{type_ref}.{name}")
