"""Generation plans: YAML/CLI configuration and plan execution."""
from .loader import build_generation_plan
from .runner import (
    MAX_UNSAMPLED_PLANS,
    classes_under_test,
    count_plan,
    execute_plan,
    generate_plan,
    selected_cases,
    selected_indices,
)
from .types import ExecutionPlan, GenerationPlan, RunOptions, RunSettings

__all__ = [
    "ExecutionPlan",
    "GenerationPlan",
    "MAX_UNSAMPLED_PLANS",
    "RunOptions",
    "RunSettings",
    "build_generation_plan",
    "classes_under_test",
    "count_plan",
    "execute_plan",
    "generate_plan",
    "selected_cases",
    "selected_indices",
]
