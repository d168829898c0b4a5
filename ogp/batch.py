"""
ogp/batch.py - Parallel Contradiction Runs

Each contradiction test is pure, so many (start, end, solver) cases can run in
worker threads without coordination. Results keep input order. A case that
ends in a StopRule is recorded with its error; any other exception from a
caller's solver propagates.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from receipts import StopRule, emit_receipt, merkle

from .configuration import Configuration
from .constants import Outcome
from .export import report_to_dict
from .path import StepwisePath
from .simulator import CandidateSolver, Oracle, run_contradiction_test
from .types_config import DEFAULT_THRESHOLDS, Thresholds
from .types_result import ContradictionReport

logger = logging.getLogger(__name__)

# Module exports for receipt types
RECEIPT_SCHEMA = ["batch_summary"]


@dataclass(frozen=True)
class BatchCase:
    """One simulator invocation."""
    name: str
    n: int
    start: Configuration
    end: Configuration
    path: StepwisePath
    solver: CandidateSolver
    thresholds: Thresholds = DEFAULT_THRESHOLDS
    oracle: Optional[Oracle] = None


@dataclass(frozen=True)
class BatchResult:
    name: str
    report: Optional[ContradictionReport]
    error: Optional[StopRule]

    @property
    def label(self) -> str:
        """Outcome name, or the error class name for a setup failure."""
        if self.report is not None:
            return self.report.outcome.value
        return type(self.error).__name__


def _run_case(case: BatchCase) -> BatchResult:
    try:
        report = run_contradiction_test(case.n, case.start, case.end, case.path,
                                        case.solver, case.thresholds, case.oracle)
    except StopRule as e:
        return BatchResult(name=case.name, report=None, error=e)
    return BatchResult(name=case.name, report=report, error=None)


def summarize(results: Sequence[BatchResult]) -> Dict[str, int]:
    """Count of results per label, every Outcome present."""
    counts = {o.value: 0 for o in Outcome}
    for r in results:
        counts[r.label] = counts.get(r.label, 0) + 1
    return counts


def batch_merkle_root(results: Sequence[BatchResult]) -> str:
    """Merkle root over the per-case findings, in input order."""
    leaves = []
    for r in results:
        leaf = {"name": r.name, "label": r.label}
        if r.report is not None:
            leaf["report"] = report_to_dict(r.report)
        else:
            leaf["error"] = str(r.error)
        leaves.append(leaf)
    return merkle(leaves)


def run_batch(cases: Sequence[BatchCase], max_workers: int = 4) -> List[BatchResult]:
    """
    Run every case, in parallel, preserving input order.

    Args:
        cases: BatchCase list
        max_workers: Thread pool size (1 runs sequentially in the pool)

    Returns:
        List of BatchResult, same order as cases
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        results = list(pool.map(_run_case, cases))

    counts = summarize(results)
    logger.info("batch of %d cases: %s", len(results), counts)
    emit_receipt("batch_summary", {
        "tenant_id": "ogp",
        "n_cases": len(results),
        "counts": counts,
        "merkle_root": batch_merkle_root(results),
    })
    return results
