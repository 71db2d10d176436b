"""Executing generated blocks in process and classifying their failures."""
from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, List, Optional

from opcrash.errors import EvaluationFailure, InvocationFailure

from .dispatch import Verdict, classify_failure
from .results import BlockCase, CaseResult

logger = logging.getLogger(__name__)


class BlockRunner:
    """Executes a collection of blocks sequentially."""

    def __init__(self, *, fail_fast: bool = False) -> None:
        self._fail_fast = fail_fast

    def run(
        self,
        cases: Iterable[BlockCase],
        *,
        total: Optional[int] = None,
        on_result: Optional[Callable[[CaseResult, int, int], None]] = None,
    ) -> List[CaseResult]:
        """Execute ``cases`` in order; ``total`` defaults to ``len(cases)``."""

        results: List[CaseResult] = []
        if total is None:
            cases = list(cases)
            total = len(cases)
        for index, case in enumerate(cases, start=1):
            result = self._execute_case(case)
            results.append(result)
            if on_result:
                on_result(result, index, total)
            if self._fail_fast and not result.passed:
                break
        return results

    def _execute_case(self, case: BlockCase) -> CaseResult:
        start = time.perf_counter()
        try:
            case.block.execute()
        except EvaluationFailure as failure:
            duration = time.perf_counter() - start
            verdict = classify_failure(failure, case.block.operation)
            cause = failure.cause if isinstance(failure, InvocationFailure) else failure
            logger.debug("%s -> %s (%s)", case.identifier(), verdict.value, failure)
            return CaseResult(
                case=case,
                status="expected" if verdict is Verdict.EXPECTED else "crash",
                duration_s=duration,
                error=str(failure),
                error_type=type(cause).__name__,
            )
        except Exception as exc:  # pragma: no cover - aggregated error path
            duration = time.perf_counter() - start
            return CaseResult(
                case=case,
                status="error",
                duration_s=duration,
                error=str(exc),
                error_type=type(exc).__name__,
            )
        return CaseResult(case=case, status="passed", duration_s=time.perf_counter() - start)
