"""Plan-space construction, indexing and block building."""
from .blocks import NL, TAB, Block, ExpressionStatement, LocalVariableDeclaration, Statement
from .builder import PlanSpaceBuilder
from .call_plan import build_block
from .class_under_test import ClassUnderTest
from .space import (
    MAX_PLAN_SPACE_SIZE,
    ArrayProducer,
    Combination,
    CompositeNode,
    OperationProducer,
    PlanSpaceNode,
    ValueNode,
    iter_plans,
)

__all__ = [
    "MAX_PLAN_SPACE_SIZE",
    "NL",
    "TAB",
    "ArrayProducer",
    "Block",
    "ClassUnderTest",
    "Combination",
    "CompositeNode",
    "ExpressionStatement",
    "LocalVariableDeclaration",
    "OperationProducer",
    "PlanSpaceBuilder",
    "PlanSpaceNode",
    "Statement",
    "ValueNode",
    "build_block",
    "iter_plans",
]
