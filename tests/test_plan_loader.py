from pathlib import Path

import pytest

from opcrash.core import INT, Visibility
from opcrash.errors import CatalogError
from opcrash.plans import RunOptions, build_generation_plan


def _write_plan(tmp_path: Path, catalog_path: Path, body: str = "") -> Path:
    plan = tmp_path / "plan.yaml"
    plan.write_text(f"catalog: {catalog_path.as_posix()}\n{body}", encoding="utf-8")
    return plan


def test_defaults_from_catalog_only(catalog_path) -> None:
    plan = build_generation_plan(RunOptions(catalog_path=str(catalog_path)))
    settings = plan.settings
    assert settings.depth == 3
    assert settings.visibility is Visibility.PUBLIC
    assert settings.max_plans is None
    assert settings.classify is True
    assert settings.methods_per_file == 500
    assert len(plan.types) == 6
    assert [lit.value for lit in plan.values.values_for(INT)] == [0, 1, -1, 7]


def test_plan_file_values(tmp_path, catalog_path) -> None:
    path = _write_plan(
        tmp_path,
        catalog_path,
        "types: [client.sub.Loadee, 'client.sub.Loadee$Inner']\n"
        "depth: 2\nvisibility: private\nmax_plans: 4\nseed: 9\nclassify: false\n"
        "methods_per_file: 10\nout: generated-tests\n"
        "report: {format: json, path: out/report.json, color: false}\n",
    )
    plan = build_generation_plan(RunOptions(plan_path=str(path)))
    settings = plan.settings
    assert [t.name for t in plan.types] == ["Loadee", "Inner"]
    assert plan.types[1].is_inner
    assert settings.depth == 2
    assert settings.visibility is Visibility.PRIVATE
    assert settings.max_plans == 4
    assert settings.seed == 9
    assert settings.classify is False
    assert settings.methods_per_file == 10
    assert settings.out_dir == str(tmp_path / "generated-tests")
    assert settings.report_format == "json"
    assert settings.report_path == "out/report.json"
    assert settings.color is False


def test_cli_options_override_the_plan(tmp_path, catalog_path) -> None:
    path = _write_plan(tmp_path, catalog_path, "depth: 2\nseed: 9\ntypes: [client.Util]\n")
    options = RunOptions(
        plan_path=str(path),
        types=("client.sub.Square",),
        depth=4,
        seed=1,
        classify=False,
        out_dir="elsewhere",
    )
    plan = build_generation_plan(options)
    assert [t.name for t in plan.types] == ["Square"]
    assert plan.settings.depth == 4
    assert plan.settings.seed == 1
    assert plan.settings.classify is False
    assert plan.settings.out_dir == "elsewhere"


def test_relative_catalog_is_resolved_next_to_the_plan(tmp_path, catalog_path) -> None:
    (tmp_path / "catalog.yaml").write_text(catalog_path.read_text(encoding="utf-8"), encoding="utf-8")
    plan_path = tmp_path / "plan.yaml"
    plan_path.write_text("catalog: catalog.yaml\n", encoding="utf-8")
    plan = build_generation_plan(RunOptions(plan_path=str(plan_path)))
    assert plan.settings.catalog_path == str(tmp_path / "catalog.yaml")


@pytest.mark.parametrize(
    "body",
    [
        "depth: 0\n",
        "depth: deep\n",
        "visibility: protected\n",
        "types: [client.Nowhere]\n",
        "report: {format: json}\n",
        "report: {format: xml, path: r.xml}\n",
        "unknown_key: 1\n",
        "classify: \"false\"\n",
        "fail_fast: 1\n",
        "report: {color: \"no\"}\n",
    ],
)
def test_invalid_plans(tmp_path, catalog_path, body: str) -> None:
    path = _write_plan(tmp_path, catalog_path, body)
    with pytest.raises(CatalogError):
        build_generation_plan(RunOptions(plan_path=str(path)))


def test_missing_catalogue_is_reported(tmp_path) -> None:
    plan_path = tmp_path / "plan.yaml"
    plan_path.write_text("depth: 2\n", encoding="utf-8")
    with pytest.raises(CatalogError):
        build_generation_plan(RunOptions(plan_path=str(plan_path)))
    plan_path.write_text("- not a mapping\n", encoding="utf-8")
    with pytest.raises(CatalogError):
        build_generation_plan(RunOptions(plan_path=str(plan_path)))
