"""In-process execution of generated blocks."""
from .dispatch import Verdict, classify_failure
from .results import BlockCase, CaseResult
from .runner import BlockRunner

__all__ = [
    "BlockCase",
    "BlockRunner",
    "CaseResult",
    "Verdict",
    "classify_failure",
]
