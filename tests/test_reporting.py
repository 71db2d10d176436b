from __future__ import annotations

import json
from unittest import mock

from opcrash.plans.types import ExecutionPlan, RunSettings
from opcrash.planner import ClassUnderTest
from opcrash.reporting import JsonReporter, ReportManager, TerminalReporter
from opcrash.runtime import BlockCase, CaseResult


def _plan_and_results(catalog, builtin_values, loadee):
    cut = ClassUnderTest(loadee, catalog, remaining_recursion=2, values=builtin_values)
    cases = [BlockCase(type_ref=loadee, index=index, block=cut.get_block(index)) for index in (0, 6, 7)]
    results = [
        CaseResult(case=cases[0], status="passed", duration_s=0.001),
        CaseResult(
            case=cases[1],
            status="crash",
            duration_s=0.002,
            error="staticMeth raised ZeroDivisionError",
            error_type="ZeroDivisionError",
        ),
        CaseResult(case=cases[2], status="expected", duration_s=0.001, error="bad", error_type="ValueError"),
    ]
    settings = RunSettings(catalog_path="catalog.yaml", depth=2, seed=5, report_format="json", report_path="r.json")
    return ExecutionPlan(cases=cases, settings=settings), results


def test_json_reporter_writes_file(tmp_path, catalog, builtin_values, loadee) -> None:
    plan, results = _plan_and_results(catalog, builtin_values, loadee)
    output_path = tmp_path / "reports" / "report.json"
    reporter = JsonReporter(path=str(output_path))
    reporter.on_start(plan)
    for index, result in enumerate(results, start=1):
        reporter.on_case_result(result, index=index, total=len(results))
    reporter.on_complete(results)
    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert payload["summary"]["total"] == 3
    assert payload["summary"]["crashes"] == 1
    assert payload["summary"]["expected"] == 1
    assert payload["summary"]["depth"] == 2
    crash = payload["cases"][1]
    assert crash["id"] == "client.sub.Loadee#6:staticMeth"
    assert crash["status"] == "crash"
    assert crash["error_type"] == "ZeroDivisionError"
    assert "Loadee.staticMeth(i1);" in crash["source"]


def test_json_reporter_without_start_writes_nothing(tmp_path) -> None:
    reporter = JsonReporter(path=str(tmp_path / "never.json"))
    with mock.patch("pathlib.Path.write_text") as mock_write:
        reporter.on_complete([])
    mock_write.assert_not_called()


def test_terminal_reporter_lists_crash_details(capsys, catalog, builtin_values, loadee) -> None:
    plan, results = _plan_and_results(catalog, builtin_values, loadee)
    manager = ReportManager([TerminalReporter(use_color=False)])
    manager.start(plan)
    for index, result in enumerate(results, start=1):
        manager.handle_result(result, index, len(results))
    manager.complete(results)
    output = capsys.readouterr().out
    assert "Executing 3 block(s) depth=2 seed=5" in output
    assert "[2/3] client.sub.Loadee#6:staticMeth -> CRASH ZeroDivisionError" in output
    assert "Summary: total=3 passed=1 expected=1 crashes=1 errors=0" in output
    assert "Crash details:" in output
    assert "Loadee.staticMeth(i1);" in output
