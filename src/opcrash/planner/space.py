"""Index-addressable plan spaces.

A plan space is a tree of two node shapes:

* ``ValueNode``: a leaf holding literal expressions; its size is the number
  of values and ``plan_at`` returns the value at that index.
* ``CompositeNode``: children combined either as *alternatives* (size is the
  sum of child sizes, e.g. the different ways to produce one type) or as
  *cartesian* slots (size is the product of child sizes, e.g. the parameters
  of one operation).

Sizes are computed once, eagerly, when a node is created from already-sized
children; afterwards nodes are read-only and can be shared between
enumerations. Sizes saturate at ``MAX_PLAN_SPACE_SIZE`` instead of growing
without bound.

Alternative indexing uses a prefix-range table. For child sizes ``(3, 5, 2)``
the table of upper bounds is ``(2, 7, 9)``, i.e. ranges ``[0..2]``,
``[3..7]`` and ``[8..9]``; index 8 therefore maps to the third child at local
index ``8 - 8 = 0``. Empty children produce empty ranges and are never hit.

Cartesian indexing is mixed radix with the last slot varying fastest, so
consecutive indices exhaust the last slot's alternatives before advancing the
earlier ones.
"""
from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional, Sequence, Tuple, Union

from opcrash.core.models import OperationDescriptor
from opcrash.core.types import TypeRef
from opcrash.errors import InvalidArgumentError, PlanIndexError
from opcrash.expr import ArrayCreateAndInit, Expression, OperationCall

MAX_PLAN_SPACE_SIZE = 2**63 - 1


class Combination(str, Enum):
    ALTERNATIVE = "alternative"
    CARTESIAN = "cartesian"


@dataclass(frozen=True)
class OperationProducer:
    """Builds the call of ``operation`` from one plan per slot."""

    operation: OperationDescriptor

    def __call__(self, plans: Tuple[Expression, ...]) -> Expression:
        if self.operation.slot_offset:
            return OperationCall(self.operation, plans[1:], plans[0])
        return OperationCall(self.operation, plans)


@dataclass(frozen=True)
class ArrayProducer:
    """Builds an array literal whose components are the slot plans."""

    array_type: TypeRef

    def __call__(self, plans: Tuple[Expression, ...]) -> Expression:
        return ArrayCreateAndInit(self.array_type, plans)


Producer = Callable[[Tuple[Expression, ...]], Expression]


def saturating_add(left: int, right: int) -> int:
    return min(left + right, MAX_PLAN_SPACE_SIZE)


def saturating_mul(left: int, right: int) -> int:
    return min(left * right, MAX_PLAN_SPACE_SIZE)


def check_index(index: int, size: int) -> int:
    try:
        value = operator.index(index)
    except TypeError as exc:
        raise InvalidArgumentError(f"Plan index must be an integer, got {index!r}") from exc
    if isinstance(index, bool) or not 0 <= value < size:
        raise PlanIndexError(value, size)
    return value


class ValueNode:
    """Leaf plan space over a fixed tuple of literal expressions."""

    def __init__(self, values: Sequence[Expression], *, label: str = "") -> None:
        if values is None:
            raise InvalidArgumentError("ValueNode requires a sequence of values")
        self.values: Tuple[Expression, ...] = tuple(values)
        self.size = min(len(self.values), MAX_PLAN_SPACE_SIZE)
        self.label = label

    def plan_at(self, index: int) -> Expression:
        return self.values[check_index(index, self.size)]

    def __repr__(self) -> str:
        return f"ValueNode({self.label!r}, size={self.size})"


class CompositeNode:
    """Plan space combining child spaces as alternatives or cartesian slots."""

    def __init__(
        self,
        children: Sequence["PlanSpaceNode"],
        combination: Combination,
        *,
        producer: Optional[Producer] = None,
        label: str = "",
    ) -> None:
        if children is None:
            raise InvalidArgumentError("CompositeNode requires a sequence of children")
        if combination is Combination.CARTESIAN and producer is None:
            raise InvalidArgumentError("Cartesian nodes need a producer for their slot plans")
        self.children: Tuple[PlanSpaceNode, ...] = tuple(children)
        self.combination = combination
        self.producer = producer
        self.label = label
        self.child_sizes: Tuple[int, ...] = tuple(child.size for child in self.children)
        if combination is Combination.ALTERNATIVE:
            ranges = []
            total = 0
            for child_size in self.child_sizes:
                total = saturating_add(total, child_size)
                ranges.append(total - 1)
            self.child_ranges: Tuple[int, ...] = tuple(ranges)
            self.size = total
        else:
            self.child_ranges = tuple()
            total = 1  # no slots: exactly one plan, the argument-less call
            for child_size in self.child_sizes:
                total = saturating_mul(total, child_size)
            self.size = total

    def child_range(self, child_index: int) -> Tuple[int, int]:
        """Inclusive ``(lowest, highest)`` index range of an alternative child."""

        if self.combination is not Combination.ALTERNATIVE:
            raise InvalidArgumentError("Only alternative nodes partition their index range")
        if not 0 <= child_index < len(self.children):
            raise PlanIndexError(child_index, len(self.children))
        low = self.child_ranges[child_index - 1] + 1 if child_index > 0 else 0
        return low, self.child_ranges[child_index]

    def locate(self, index: int) -> Tuple[int, int]:
        """Map ``index`` to ``(child_index, child_local_index)``."""

        index = check_index(index, self.size)
        if self.combination is not Combination.ALTERNATIVE:
            raise InvalidArgumentError("Cartesian nodes map indices to slot tuples, use slot_indices()")
        low = 0
        for child_index, high in enumerate(self.child_ranges):
            if index <= high:
                return child_index, index - low
            low = high + 1
        raise PlanIndexError(index, self.size)  # pragma: no cover - ranges cover [0, size)

    def slot_indices(self, index: int) -> Tuple[int, ...]:
        """Mixed-radix decomposition of ``index``, last slot fastest."""

        index = check_index(index, self.size)
        if self.combination is not Combination.CARTESIAN:
            raise InvalidArgumentError("Alternative nodes map indices to one child, use locate()")
        digits = [0] * len(self.children)
        for position in range(len(self.children) - 1, -1, -1):
            index, digits[position] = divmod(index, self.child_sizes[position])
        return tuple(digits)

    def slot_plans(self, index: int) -> Tuple[Expression, ...]:
        return tuple(
            child.plan_at(local) for child, local in zip(self.children, self.slot_indices(index))
        )

    def plan_at(self, index: int) -> Expression:
        if self.combination is Combination.ALTERNATIVE:
            child_index, local = self.locate(index)
            return self.children[child_index].plan_at(local)
        assert self.producer is not None
        return self.producer(self.slot_plans(index))

    def __repr__(self) -> str:
        return f"CompositeNode({self.label!r}, {self.combination.value}, size={self.size})"


PlanSpaceNode = Union[ValueNode, CompositeNode]


def iter_plans(node: PlanSpaceNode, start: int = 0, stop: Optional[int] = None) -> Iterator[Expression]:
    """Yield the plans of ``node`` for indices in ``[start, stop)``."""

    stop = node.size if stop is None else min(stop, node.size)
    for index in range(start, stop):
        yield node.plan_at(index)
