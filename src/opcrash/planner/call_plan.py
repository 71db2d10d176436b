"""Turning an operation plus one plan per slot into a test block."""
from __future__ import annotations

from typing import List, Optional, Sequence

from opcrash.core.models import OperationDescriptor
from opcrash.errors import InvalidArgumentError
from opcrash.expr import Expression, OperationCall, Variable

from .blocks import Block, ExpressionStatement, LocalVariableDeclaration


def build_block(operation: OperationDescriptor, plans: Optional[Sequence[Expression]]) -> Block:
    """Declare one local per plan, then invoke ``operation`` on those locals.

    ``plans`` follows ``operation.slot_types``: the enclosing instance (inner
    type constructors) or the receiver (instance methods) comes first. The
    constructor under test is bound to a fresh local; a method call is a bare
    expression statement.
    """

    if operation is None:
        raise InvalidArgumentError("build_block requires an operation")
    if plans is None:
        raise InvalidArgumentError(f"build_block({operation}) requires argument plans")
    plans = tuple(plans)
    slot_types = operation.slot_types
    if len(plans) != len(slot_types):
        raise InvalidArgumentError(
            f"{operation} needs {len(slot_types)} plan(s) "
            f"({operation.slot_offset} implicit), got {len(plans)}"
        )
    block = Block(operation)
    variables: List[Variable] = []
    for slot_type, plan in zip(slot_types, plans):
        if plan is None:
            raise InvalidArgumentError(f"Missing plan for a {slot_type.qualified_name} slot of {operation}")
        variable = block.next_variable(slot_type)
        block.append(LocalVariableDeclaration(variable, plan))
        variables.append(variable)

    if operation.slot_offset:
        call = OperationCall(operation, tuple(variables[1:]), variables[0])
    else:
        call = OperationCall(operation, tuple(variables))

    if operation.is_constructor:
        block.append(LocalVariableDeclaration(block.next_variable(operation.declaring_type), call))
    else:
        block.append(ExpressionStatement(call))
    return block
