"""Variable references and operation-call expressions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from opcrash.core.invoker import invoke
from opcrash.core.models import OperationDescriptor
from opcrash.core.types import TypeRef
from opcrash.errors import InvalidArgumentError

from .base import Expression, Scope, assignable


@dataclass(frozen=True)
class Variable(Expression):
    """Reference to a local variable declared earlier in the same block."""

    name: str
    declared_type: TypeRef

    def __post_init__(self) -> None:
        if not self.name or not self.name.isidentifier():
            raise InvalidArgumentError(f"Invalid variable name {self.name!r}")
        if self.declared_type is None or self.declared_type.is_void:
            raise InvalidArgumentError(f"Variable '{self.name}' needs a non-void type")

    @property
    def return_type(self) -> TypeRef:
        return self.declared_type

    def evaluate(self, scope: Optional[Scope] = None) -> Any:
        if scope is None or self.name not in scope:
            raise InvalidArgumentError(f"Variable '{self.name}' is not bound in the current scope")
        return scope[self.name]

    def render(self, context: Optional[TypeRef] = None) -> str:
        return self.name


@dataclass(frozen=True)
class OperationCall(Expression):
    """Invocation of a constructor or method.

    ``receiver`` holds the receiver instance of an instance method or the
    enclosing instance of an inner-type constructor; it is rendered in its
    syntactic position, never as an ordinary argument.
    """

    operation: OperationDescriptor
    arguments: Tuple[Expression, ...] = tuple()
    receiver: Optional[Expression] = None

    def __post_init__(self) -> None:
        if self.operation is None:
            raise InvalidArgumentError("OperationCall requires an operation")
        if self.arguments is None:
            raise InvalidArgumentError(f"Arguments of {self.operation} must not be None")
        object.__setattr__(self, "arguments", tuple(self.arguments))
        expected = len(self.operation.param_types)
        if len(self.arguments) != expected:
            raise InvalidArgumentError(
                f"{self.operation} takes {expected} argument(s), got {len(self.arguments)}"
            )
        if self.operation.slot_offset and self.receiver is None:
            role = "enclosing instance" if self.operation.is_constructor else "receiver"
            raise InvalidArgumentError(f"{self.operation} requires a {role}")
        if not self.operation.slot_offset and self.receiver is not None:
            raise InvalidArgumentError(f"{self.operation} does not take a receiver")
        if self.receiver is not None and not assignable(self.receiver.return_type, self.operation.slot_types[0]):
            raise InvalidArgumentError(
                f"Receiver of {self.operation} has type {self.receiver.return_type.qualified_name}"
            )
        for position, (argument, param_type) in enumerate(zip(self.arguments, self.operation.param_types)):
            if argument is None:
                raise InvalidArgumentError(f"Argument {position} of {self.operation} is None")
            if not assignable(argument.return_type, param_type):
                raise InvalidArgumentError(
                    f"Argument {position} of {self.operation} has type "
                    f"{argument.return_type.qualified_name}, expected {param_type.qualified_name}"
                )

    @property
    def return_type(self) -> TypeRef:
        return self.operation.return_type

    def evaluate(self, scope: Optional[Scope] = None) -> Any:
        if self.receiver is not None:
            receiver = self.receiver.evaluate(scope)
            arguments = [argument.evaluate(scope) for argument in self.arguments]
            return invoke(self.operation, arguments, receiver)
        return invoke(self.operation, [argument.evaluate(scope) for argument in self.arguments])

    def render(self, context: Optional[TypeRef] = None) -> str:
        operation = self.operation
        arguments = ", ".join(argument.render(context) for argument in self.arguments)
        if operation.is_constructor:
            if operation.needs_enclosing_instance:
                outer = _receiver_text(self.receiver, context)
                return f"{outer}.new {operation.declaring_type.name}({arguments})"
            return f"new {operation.declaring_type.source_name(context)}({arguments})"
        if operation.is_static:
            return f"{operation.declaring_type.source_name(context)}.{operation.name}({arguments})"
        return f"{_receiver_text(self.receiver, context)}.{operation.name}({arguments})"

    def call_depth(self) -> int:
        nested = [argument.call_depth() for argument in self.arguments]
        if self.receiver is not None:
            nested.append(self.receiver.call_depth())
        return 1 + max(nested, default=0)


def _receiver_text(receiver: Optional[Expression], context: Optional[TypeRef]) -> str:
    assert receiver is not None
    text = receiver.render(context)
    if isinstance(receiver, Variable):
        return text
    return f"({text})"
