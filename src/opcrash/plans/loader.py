"""Generation plan loader combining CLI options and YAML files."""
from __future__ import annotations

import logging
import pathlib
from typing import Any, Mapping, Optional, Tuple

import yaml

from opcrash.core.models import Visibility
from opcrash.core.types import TypeRef
from opcrash.errors import CatalogError
from opcrash.introspect import CatalogIntrospector, load_catalog
from opcrash.values import library as default_values

from .types import GenerationPlan, RunOptions, RunSettings

logger = logging.getLogger(__name__)

_PLAN_KEYS = {
    "catalog",
    "types",
    "depth",
    "visibility",
    "visibility_used",
    "max_plans",
    "seed",
    "classify",
    "methods_per_file",
    "out",
    "fail_fast",
    "report",
}


def build_generation_plan(options: RunOptions) -> GenerationPlan:
    raw = _load_yaml(options.plan_path)
    settings = _build_run_settings(options, raw)
    introspector = load_catalog(settings.catalog_path)
    types = _resolve_types(options, raw, introspector)
    if not types:
        raise CatalogError("No types to test resolved from CLI, plan file or catalogue")
    values = introspector.value_library(default_values)
    logger.info("plan: %d type(s) from %s", len(types), settings.catalog_path)
    return GenerationPlan(settings=settings, introspector=introspector, types=types, values=values)


def _load_yaml(path: Optional[str]) -> Mapping[str, Any]:
    if not path:
        return {}
    try:
        data = yaml.safe_load(pathlib.Path(path).read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise CatalogError(f"{path}: not valid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise CatalogError("Plan file must contain a mapping at the top level")
    unknown = sorted(set(data) - _PLAN_KEYS)
    if unknown:
        raise CatalogError(f"Unknown plan key(s): {', '.join(map(str, unknown))}")
    return data


def _build_run_settings(options: RunOptions, raw: Mapping[str, Any]) -> RunSettings:
    catalog_path = options.catalog_path or _relative_to_plan(raw.get("catalog"), options.plan_path)
    if not catalog_path:
        raise CatalogError("Specify a catalogue via --catalog or the plan file's 'catalog' key")
    depth = options.depth if options.depth is not None else raw.get("depth", 3)
    max_plans = options.max_plans if options.max_plans is not None else raw.get("max_plans")
    seed = options.seed if options.seed is not None else raw.get("seed", 0)
    classify = options.classify if options.classify is not None else _flag(raw.get("classify", True), "classify")
    methods_per_file = options.methods_per_file or raw.get("methods_per_file", 500)
    out_dir = options.out_dir or _relative_to_plan(raw.get("out"), options.plan_path) or "generated"
    fail_fast = options.fail_fast or _flag(raw.get("fail_fast", False), "fail_fast")
    report_cfg = raw.get("report", {}) if isinstance(raw.get("report"), Mapping) else {}
    report_format = options.report_format or report_cfg.get("format", "terminal")
    report_path = options.report_path or report_cfg.get("path")
    color_default = _flag(report_cfg.get("color", True), "report.color") if report_cfg else True
    color = options.color if options.color is not None else color_default
    settings = RunSettings(
        catalog_path=str(catalog_path),
        depth=_positive_int(depth, "depth"),
        visibility=_visibility(options.visibility or raw.get("visibility", "public")),
        visibility_used=_visibility(raw.get("visibility_used", "public")),
        max_plans=None if max_plans is None else _positive_int(max_plans, "max_plans"),
        seed=int(seed),
        classify=classify,
        methods_per_file=_positive_int(methods_per_file, "methods_per_file"),
        out_dir=str(out_dir),
        fail_fast=bool(fail_fast),
        report_format=report_format,
        report_path=report_path,
        color=color,
    )
    if settings.report_format not in {"terminal", "json"}:
        raise CatalogError(f"Unknown report format '{settings.report_format}'")
    if settings.report_format == "json" and not settings.report_path:
        raise CatalogError("JSON reports need a path (--report-path or report.path)")
    return settings


def _resolve_types(
    options: RunOptions,
    raw: Mapping[str, Any],
    introspector: CatalogIntrospector,
) -> Tuple[TypeRef, ...]:
    names = options.types or tuple(raw.get("types") or ())
    if not names:
        return tuple(introspector.types())
    declared = set(introspector.types())
    resolved = []
    for name in names:
        type_ref = introspector.resolve(str(name))
        if type_ref not in declared:
            raise CatalogError(f"Type '{name}' is not declared in {options.catalog_path or 'the catalogue'}")
        resolved.append(type_ref)
    return tuple(resolved)


def _relative_to_plan(value: Any, plan_path: Optional[str]) -> Optional[str]:
    if not value:
        return None
    path = pathlib.Path(str(value))
    if plan_path and not path.is_absolute():
        path = pathlib.Path(plan_path).parent / path
    return str(path)


def _positive_int(value: Any, key: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"'{key}' must be an integer, got {value!r}") from exc
    if number < 1:
        raise CatalogError(f"'{key}' must be positive, got {number}")
    return number


def _flag(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise CatalogError(f"'{key}' must be true or false, got {value!r}")
    return value


def _visibility(value: Any) -> Visibility:
    try:
        return Visibility(str(value).lower())
    except ValueError as exc:
        choices = ", ".join(v.value for v in Visibility)
        raise CatalogError(f"Unknown visibility '{value}' (choose from {choices})") from exc
