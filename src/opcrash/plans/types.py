"""Dataclasses representing generation plan structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from opcrash.core.models import Visibility
from opcrash.core.types import TypeRef
from opcrash.introspect import CatalogIntrospector
from opcrash.runtime import BlockCase
from opcrash.values import ValueLibrary


@dataclass
class RunSettings:
    catalog_path: str
    depth: int = 3
    visibility: Visibility = Visibility.PUBLIC
    visibility_used: Visibility = Visibility.PUBLIC
    max_plans: Optional[int] = None
    seed: int = 0
    classify: bool = True
    methods_per_file: int = 500
    out_dir: str = "generated"
    fail_fast: bool = False
    report_format: str = "terminal"
    report_path: Optional[str] = None
    color: bool = True


@dataclass
class GenerationPlan:
    settings: RunSettings
    introspector: CatalogIntrospector
    types: Tuple[TypeRef, ...]
    values: ValueLibrary


@dataclass
class RunOptions:
    plan_path: Optional[str] = None
    catalog_path: Optional[str] = None
    types: Tuple[str, ...] = tuple()
    depth: Optional[int] = None
    visibility: Optional[str] = None
    max_plans: Optional[int] = None
    seed: Optional[int] = None
    classify: Optional[bool] = None
    methods_per_file: Optional[int] = None
    out_dir: Optional[str] = None
    fail_fast: bool = False
    report_format: Optional[str] = None
    report_path: Optional[str] = None
    color: Optional[bool] = None


@dataclass
class ExecutionPlan:
    """Cases to execute; ``total`` is required when ``cases`` is a generator."""

    cases: Iterable[BlockCase]
    settings: RunSettings
    total: Optional[int] = None

    def __post_init__(self) -> None:
        if self.total is None:
            self.total = len(self.cases) if isinstance(self.cases, Sequence) else 0
