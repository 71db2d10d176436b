"""Running a generation plan: counting, writing and executing blocks."""
from __future__ import annotations

import logging
from typing import Iterator, List, Sequence, Tuple

from colorama import Fore, Style, init as colorama_init

from opcrash.core.types import TypeRef
from opcrash.errors import CatalogError
from opcrash.planner import ClassUnderTest, PlanSpaceBuilder
from opcrash.planner.space import saturating_add
from opcrash.reporting import ReportManager
from opcrash.runtime import BlockCase, BlockRunner
from opcrash.writer import write_test_units

from .types import ExecutionPlan, GenerationPlan

logger = logging.getLogger(__name__)

# Largest plan space generated or executed in full; bigger ones need max_plans.
MAX_UNSAMPLED_PLANS = 100_000


def classes_under_test(plan: GenerationPlan) -> List[ClassUnderTest]:
    """One plan space per type, sharing the type nodes between them."""

    settings = plan.settings
    builder = PlanSpaceBuilder(plan.introspector, values=plan.values, visibility=settings.visibility_used)
    return [
        ClassUnderTest(
            type_ref,
            plan.introspector,
            remaining_recursion=settings.depth,
            visibility_tested=settings.visibility,
            visibility_used=settings.visibility_used,
            builder=builder,
        )
        for type_ref in plan.types
    ]


Selection = List[Tuple[ClassUnderTest, Sequence[int]]]


def selected_indices(plan: GenerationPlan, classes: Sequence[ClassUnderTest]) -> Selection:
    """Indices to generate per type; fails before any block is built when a space is too large."""

    settings = plan.settings
    selection: Selection = []
    for cut in classes:
        if settings.max_plans is None and cut.size > MAX_UNSAMPLED_PLANS:
            raise CatalogError(
                f"{cut.type_ref.qualified_name} has {cut.size} plans, more than {MAX_UNSAMPLED_PLANS} "
                "can be processed in full; pass --max-plans (or set 'max_plans') to sample them"
            )
        selection.append((cut, cut.sample_indices(settings.max_plans, settings.seed)))
    return selection


def selected_cases(plan: GenerationPlan, classes: Sequence[ClassUnderTest]) -> Iterator[BlockCase]:
    return _cases(selected_indices(plan, classes))


def _cases(selection: Selection) -> Iterator[BlockCase]:
    for cut, indices in selection:
        for index in indices:
            yield BlockCase(type_ref=cut.type_ref, index=index, block=cut.get_block(index))


def count_plan(plan: GenerationPlan, *, use_color: bool = True) -> int:
    """Print plan space sizes per type and per operation; returns the exit code."""

    colorama_init()
    total = 0
    for cut in classes_under_test(plan):
        total = saturating_add(total, cut.size)
        _print_type(cut.type_ref, cut.size, use_color=use_color)
        for operation, size in cut.function_sizes():
            print(f"    {size:>12}  {operation.signature()}")
    _print_total("Plans", total, use_color=use_color)
    return 0


def generate_plan(plan: GenerationPlan, *, use_color: bool = True) -> int:
    """Write the selected blocks of every type as JUnit classes."""

    colorama_init()
    settings = plan.settings
    written = 0
    for cut, indices in selected_indices(plan, classes_under_test(plan)):
        if not indices:
            logger.warning("%s: no testable operation, nothing written", cut.type_ref)
            _print_type(cut.type_ref, 0, use_color=use_color)
            continue
        paths = write_test_units(
            cut.type_ref,
            cut.blocks(indices),
            settings.out_dir,
            classify=settings.classify,
            methods_per_file=settings.methods_per_file,
        )
        written += len(indices)
        _print_type(cut.type_ref, len(indices), use_color=use_color)
        for path in paths:
            print(f"    {path}")
    _print_total("Test methods", written, use_color=use_color)
    return 0


def execute_plan(plan: GenerationPlan, manager: ReportManager) -> Tuple[int, ExecutionPlan]:
    """Execute the selected blocks in process; exit code 1 when any block crashed."""

    settings = plan.settings
    selection = selected_indices(plan, classes_under_test(plan))
    total = sum(len(indices) for _, indices in selection)
    execution = ExecutionPlan(cases=_cases(selection), settings=settings, total=total)
    runner = BlockRunner(fail_fast=settings.fail_fast)
    manager.start(execution)
    results = runner.run(execution.cases, total=execution.total, on_result=manager.handle_result)
    manager.complete(results)
    return (0 if all(result.passed for result in results) else 1), execution


def _print_type(type_ref: TypeRef, count: int, *, use_color: bool) -> None:
    color = (Fore.CYAN if count else Fore.YELLOW) if use_color else ""
    reset = Style.RESET_ALL if use_color else ""
    print(f"{color}{count:>12}{reset}  {type_ref.qualified_name}")


def _print_total(label: str, total: int, *, use_color: bool) -> None:
    color = Fore.GREEN if use_color else ""
    reset = Style.RESET_ALL if use_color else ""
    print(f"{color}{label}{reset}: total={total}")
