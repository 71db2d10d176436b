"""Depth-bounded construction of plan spaces from an introspector."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from opcrash.core.models import OperationDescriptor, Visibility
from opcrash.core.types import TypeRef
from opcrash.errors import InvalidArgumentError
from opcrash.expr import ArrayCreateAndInit, Literal
from opcrash.introspect.base import TypeIntrospector
from opcrash.values import ValueLibrary, library

from .space import ArrayProducer, Combination, CompositeNode, OperationProducer, PlanSpaceNode, ValueNode

logger = logging.getLogger(__name__)


class PlanSpaceBuilder:
    """Builds and caches type and function plan-space nodes.

    A type node with budget ``r`` offers the type's literal values and, while
    ``r > 0``, one function node per producing operation whose parameters are
    planned with budget ``r - 1``. Exhausted budgets and types without any
    value or producer yield empty nodes, never errors. Nodes are cached per
    ``(type, budget, nullable)`` and shared between parents.
    """

    def __init__(
        self,
        introspector: TypeIntrospector,
        *,
        values: Optional[ValueLibrary] = None,
        visibility: Visibility = Visibility.PUBLIC,
    ) -> None:
        if introspector is None:
            raise InvalidArgumentError("PlanSpaceBuilder requires a type introspector")
        self._introspector = introspector
        self._values = values if values is not None else library
        self._visibility = visibility
        self._type_nodes: Dict[Tuple[TypeRef, int, bool], CompositeNode] = {}

    @property
    def introspector(self) -> TypeIntrospector:
        return self._introspector

    def type_node(self, type_ref: TypeRef, remaining_recursion: int, *, nullable: bool = True) -> CompositeNode:
        if type_ref is None:
            raise InvalidArgumentError("type_node requires a type")
        budget = max(remaining_recursion, 0)
        key = (type_ref, budget, nullable)
        cached = self._type_nodes.get(key)
        if cached is not None:
            return cached
        children: List[PlanSpaceNode] = []
        values = self._values.values_for(type_ref)
        if not nullable:
            values = tuple(value for value in values if not (isinstance(value, Literal) and value.value is None))
        if values:
            children.append(ValueNode(values, label=f"values:{type_ref.qualified_name}"))
        leaf, dimensions = self._introspector.decompose_array_type(type_ref)
        if dimensions:
            component = leaf.array_of(dimensions - 1) if dimensions > 1 else leaf
            children.extend(self._array_children(type_ref, component, budget))
        elif budget > 0 and not type_ref.is_primitive:
            for operation in self._introspector.producers(type_ref, self._visibility):
                try:
                    children.append(self.function_node(operation, budget))
                except InvalidArgumentError as exc:
                    logger.warning("skipping producer %s of %s: %s", operation, type_ref, exc)
        node = CompositeNode(children, Combination.ALTERNATIVE, label=type_ref.qualified_name)
        logger.debug("type node %s depth=%d size=%d", type_ref, budget, node.size)
        self._type_nodes[key] = node
        return node

    def function_node(self, operation: OperationDescriptor, remaining_recursion: int) -> CompositeNode:
        """Cartesian node over the slots of ``operation`` (receiver first, then parameters)."""

        if operation is None:
            raise InvalidArgumentError("function_node requires an operation")
        if operation.slot_offset and operation.slot_types[0].is_primitive:
            raise InvalidArgumentError(f"{operation} declares a primitive receiver type")
        if operation.is_constructor:
            inner = self._introspector.is_nested_non_static_type(operation.declaring_type)
            if inner != operation.needs_enclosing_instance:
                raise InvalidArgumentError(
                    f"{operation} does not match the nesting of {operation.declaring_type.qualified_name}"
                )
        slots: List[PlanSpaceNode] = []
        for position, slot_type in enumerate(operation.slot_types):
            implicit = position < operation.slot_offset
            slots.append(self.type_node(slot_type, remaining_recursion - 1, nullable=not implicit))
        return CompositeNode(
            slots,
            Combination.CARTESIAN,
            producer=OperationProducer(operation),
            label=operation.signature(),
        )

    def _array_children(self, array_type: TypeRef, component: TypeRef, budget: int) -> List[PlanSpaceNode]:
        children: List[PlanSpaceNode] = [
            ValueNode([ArrayCreateAndInit(array_type, ())], label=f"empty:{array_type.qualified_name}")
        ]
        if budget > 0:
            element = self.type_node(component, budget - 1)
            children.append(
                CompositeNode(
                    [element],
                    Combination.CARTESIAN,
                    producer=ArrayProducer(array_type),
                    label=f"array:{array_type.qualified_name}",
                )
            )
        return children
