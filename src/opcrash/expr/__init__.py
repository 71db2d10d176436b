"""Expression model: literals, variables, operation calls and arrays."""
from .arrays import ArrayCreateAndInit
from .base import Expression, assignable
from .calls import OperationCall, Variable
from .literals import Literal

__all__ = [
    "ArrayCreateAndInit",
    "Expression",
    "Literal",
    "OperationCall",
    "Variable",
    "assignable",
]
