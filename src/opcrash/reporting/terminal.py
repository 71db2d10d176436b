"""Terminal reporter streaming block outcomes and a summary."""
from __future__ import annotations

import time
from typing import TYPE_CHECKING, Sequence

import click

from opcrash.runtime import CaseResult

from .base import Reporter

if TYPE_CHECKING:  # pragma: no cover
    from opcrash.plans.types import ExecutionPlan


STATUS_COLORS = {
    "passed": "green",
    "expected": "blue",
    "crash": "red",
    "error": "yellow",
}


class TerminalReporter(Reporter):
    """Human-readable reporter that streams to stdout."""

    def __init__(self, *, use_color: bool = True, show_source: bool = True) -> None:
        self._use_color = use_color
        self._show_source = show_source
        self._start_time = 0.0
        self._crashes: list[tuple[int, CaseResult]] = []

    def on_start(self, plan: ExecutionPlan) -> None:
        self._start_time = time.perf_counter()
        self._crashes.clear()
        settings = plan.settings
        click.echo(
            self._styled(
                f"Executing {plan.total} block(s) depth={settings.depth} "
                f"seed={settings.seed} fail_fast={settings.fail_fast}",
                force_color="cyan",
            )
        )

    def on_case_result(self, result: CaseResult, index: int, total: int) -> None:
        ms = result.duration_s * 1000
        status_text = self._styled(result.status.upper())
        suffix = f" {result.error_type}" if result.error_type else ""
        click.echo(f"[{index}/{total}] {result.case.identifier()} -> {status_text}{suffix} ({ms:.2f} ms)")
        if result.status in {"crash", "error"}:
            self._crashes.append((index, result))

    def on_complete(self, results: Sequence[CaseResult]) -> None:
        duration = time.perf_counter() - self._start_time
        counts = {status: sum(1 for r in results if r.status == status) for status in STATUS_COLORS}
        click.echo(
            self._styled(
                f"Summary: total={len(results)} passed={counts['passed']} expected={counts['expected']} "
                f"crashes={counts['crash']} errors={counts['error']} duration={duration:.2f}s",
                force_color="cyan",
            )
        )
        if self._crashes:
            click.echo(self._styled("Crash details:", force_color="red"))
            for index, result in self._crashes:
                click.echo(f"  [{index}] {result.case.identifier()} -> {result.status}")
                self._print_crash_details(result, indent="    ")

    def _styled(self, text: str, *, force_color: str | None = None) -> str:
        if not self._use_color:
            return text
        color = force_color or STATUS_COLORS.get(text.lower(), None)
        if color:
            return click.style(text, fg=color)
        return text

    def _print_crash_details(self, result: CaseResult, *, indent: str) -> None:
        if result.error:
            click.echo(f"{indent}error: {result.error}")
        if self._show_source:
            block = result.case.block
            source = block.render(indent, result.case.type_ref)
            click.echo(f"{indent}{source}")
