"""Blocks: local variable declarations followed by the call under test."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from opcrash.core.models import OperationDescriptor
from opcrash.core.types import TypeRef
from opcrash.errors import InvalidArgumentError
from opcrash.expr import Expression, Variable, assignable

NL = "\n"
TAB = "\t"


@dataclass(frozen=True)
class LocalVariableDeclaration:
    """``Type name = initializer;``"""

    variable: Variable
    initializer: Expression

    def __post_init__(self) -> None:
        if self.variable is None or self.initializer is None:
            raise InvalidArgumentError("Declarations need a variable and an initializer")
        if not assignable(self.initializer.return_type, self.variable.return_type):
            raise InvalidArgumentError(
                f"Cannot assign {self.initializer.return_type.qualified_name} "
                f"to {self.variable.return_type.qualified_name} {self.variable.name}"
            )

    def render(self, context: Optional[TypeRef] = None) -> str:
        type_name = self.variable.return_type.source_name(context)
        return f"{type_name} {self.variable.name} = {self.initializer.render(context)};"

    def execute(self, scope: Dict[str, Any]) -> Any:
        value = self.initializer.evaluate(scope)
        scope[self.variable.name] = value
        return value


@dataclass(frozen=True)
class ExpressionStatement:
    """``expression;``"""

    expression: Expression

    def __post_init__(self) -> None:
        if self.expression is None:
            raise InvalidArgumentError("Expression statements need an expression")

    def render(self, context: Optional[TypeRef] = None) -> str:
        return f"{self.expression.render(context)};"

    def execute(self, scope: Dict[str, Any]) -> Any:
        return self.expression.evaluate(scope)


Statement = Union[LocalVariableDeclaration, ExpressionStatement]


class Block:
    """Ordered statements testing one operation, with a local name allocator."""

    def __init__(self, operation: OperationDescriptor) -> None:
        if operation is None:
            raise InvalidArgumentError("Block requires the operation under test")
        self.operation = operation
        self._statements: List[Statement] = []
        self._names: Dict[str, TypeRef] = {}

    @property
    def statements(self) -> Tuple[Statement, ...]:
        return tuple(self._statements)

    def next_variable(self, type_ref: TypeRef) -> Variable:
        """Allocate a fresh local, e.g. ``i1`` for an ``int`` or ``l2`` for a ``Loadee``."""

        leaf, _ = type_ref.decompose()
        name = f"{leaf.name[0].lower()}{len(self._names) + 1}"
        if name in self._names:  # pragma: no cover - counter makes names unique
            raise InvalidArgumentError(f"Variable '{name}' already declared")
        self._names[name] = type_ref
        return Variable(name, type_ref)

    def append(self, statement: Statement) -> None:
        if isinstance(statement, LocalVariableDeclaration) and statement.variable.name not in self._names:
            raise InvalidArgumentError(f"Variable '{statement.variable.name}' was not allocated by this block")
        self._statements.append(statement)

    def render(self, indent: str = "", context: Optional[TypeRef] = None) -> str:
        lines = "".join(indent + TAB + statement.render(context) + NL for statement in self._statements)
        return "{" + NL + lines + indent + "}"

    def execute(self) -> Any:
        """Run the statements in order; returns the value of the last one."""

        scope: Dict[str, Any] = {}
        result = None
        for statement in self._statements:
            result = statement.execute(scope)
        return result

    def __len__(self) -> int:
        return len(self._statements)

    def __str__(self) -> str:
        return self.render()
