"""Result data structures produced by the block runner."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from opcrash.core.types import TypeRef
from opcrash.planner.blocks import Block


@dataclass(frozen=True)
class BlockCase:
    """One generated block, addressed by its index in the type's plan space."""

    type_ref: TypeRef
    index: int
    block: Block

    def identifier(self) -> str:
        return f"{self.type_ref.qualified_name}#{self.index}:{self.block.operation.name}"


@dataclass
class CaseResult:
    """Outcome of executing a single block.

    ``status`` is ``passed`` (no failure), ``expected`` (failure within the
    operation's contract), ``crash`` or ``error`` (the runner itself failed).
    """

    case: BlockCase
    status: str
    duration_s: float
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status in {"passed", "expected"}
