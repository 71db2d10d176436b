"""JSON reporter emitting structured execution results."""
from __future__ import annotations

import datetime as dt
import json
import pathlib
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

import click
from jsonschema import validate

from opcrash.runtime import CaseResult

from .base import Reporter
from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION

if TYPE_CHECKING:  # pragma: no cover
    from opcrash.plans.types import ExecutionPlan


class JsonReporter(Reporter):
    """Writes results to a JSON file validated against the schema."""

    def __init__(self, path: str) -> None:
        self._path = pathlib.Path(path)
        self._records: list[Dict[str, Any]] = []
        self._plan: Optional[ExecutionPlan] = None
        self._start_time = 0.0

    def on_start(self, plan: ExecutionPlan) -> None:
        self._plan = plan
        self._records.clear()
        self._start_time = _now().timestamp()

    def on_case_result(self, result: CaseResult, index: int, total: int) -> None:
        self._records.append(_case_to_dict(result))

    def on_complete(self, results: Sequence[CaseResult]) -> None:
        if self._plan is None:
            return
        total_duration = _now().timestamp() - self._start_time
        payload = {
            "schema_version": SCHEMA_VERSION,
            "generated_at": _now().isoformat(timespec="seconds").replace("+00:00", "Z"),
            "summary": _build_summary(self._plan, results, total_duration),
            "cases": self._records,
        }
        validate(instance=payload, schema=JSON_SCHEMA_V1)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem protection
            raise RuntimeError(f"Failed to write JSON report to {self._path}: {exc}") from exc
        click.echo(f"JSON report written to {self._path}")


def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _build_summary(plan: ExecutionPlan, results: Sequence[CaseResult], duration: float) -> Dict[str, Any]:
    return {
        "total": len(results),
        "passed": sum(1 for result in results if result.status == "passed"),
        "expected": sum(1 for result in results if result.status == "expected"),
        "crashes": sum(1 for result in results if result.status == "crash"),
        "errors": sum(1 for result in results if result.status == "error"),
        "seed": plan.settings.seed,
        "depth": plan.settings.depth,
        "duration_s": duration,
    }


def _case_to_dict(result: CaseResult) -> Dict[str, Any]:
    case = result.case
    record: Dict[str, Any] = {
        "id": case.identifier(),
        "type": case.type_ref.qualified_name,
        "index": case.index,
        "operation": case.block.operation.signature(),
        "status": result.status,
        "duration_ms": result.duration_s * 1000,
        "source": case.block.render("", case.type_ref),
    }
    if result.error:
        record["error"] = result.error
    if result.error_type:
        record["error_type"] = result.error_type
    return record
