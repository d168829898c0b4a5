"""
ogp/simulator.py - Stability Contradiction Simulator

Walks a stepwise path between two far-apart instances and tracks how far the
candidate solver's output drifts from the start endpoint:

    f(i) = distance(start, solver(path[i])),  i = 0..k

If f starts below the low band, ends above the high band and never moves by
step_bound or more in one step, it must land inside [low_band, high_band]
somewhere (discrete intermediate value). A correct solver landing there sits
in the forbidden band: that is the contradiction this run looks for.

Stages: SETUP -> BOUNDARY_CHECK -> STEP_CHECK -> GAP_SCAN -> ORACLE_CHECK -> REPORT.
Pure per call. The solver is invoked exactly once per path element.
"""

import logging
import numbers
from typing import Callable, List, Optional, Sequence

from receipts import emit_receipt

from .configuration import Configuration, distance
from .constants import Outcome, Stage
from .errors import stoprule_assertion, stoprule_boundary, stoprule_invariant, stoprule_parameter_domain
from .path import StepwisePath, validate_path
from .types_config import DEFAULT_THRESHOLDS, Thresholds
from .types_result import ContradictionReport

logger = logging.getLogger(__name__)

CandidateSolver = Callable[[Configuration], Configuration]
Oracle = Callable[[Configuration, Configuration], bool]

# Module exports for receipt types
RECEIPT_SCHEMA = ["contradiction_report"]


# =============================================================================
# RECEIPT TYPE 1: contradiction_report
# =============================================================================

# --- SCHEMA ---
CONTRADICTION_REPORT_SCHEMA = {
    "receipt_type": "contradiction_report",
    "ts": "ISO8601",
    "tenant_id": "str",
    "n": "int",
    "k": "int",
    "outcome": "str (CONTRADICTION_FOUND|NO_CONTRADICTION|STABILITY_VIOLATED)",
    "found": "bool",
    "index": "int | None",
    "distance": "float | None",
    "stage": "str",
    "payload_hash": "str (SHA256:BLAKE3)"
}


# --- EMIT ---
def emit_contradiction_report_receipt(report: ContradictionReport, n: int, k: int,
                                      tenant_id: str = "ogp") -> dict:
    """Emit contradiction_report receipt."""
    return emit_receipt("contradiction_report", {
        "tenant_id": tenant_id,
        "n": n,
        "k": k,
        "outcome": report.outcome.value,
        "found": report.found,
        "index": report.index,
        "distance": report.distance,
        "stage": report.stage.value,
    })


# =============================================================================
# THRESHOLDS
# =============================================================================

def validate_thresholds(thresholds: Thresholds) -> None:
    """
    Raises:
        ParameterDomainError: bands not ordered inside [0, 1], or step_bound
            not strictly between 0 and the band width.
    """
    lo, hi, step = thresholds.low_band, thresholds.high_band, thresholds.step_bound
    if not 0.0 <= lo < hi <= 1.0:
        stoprule_parameter_domain("low_band/high_band", [lo, hi], "0 <= low_band < high_band <= 1")
    if not 0.0 < step < hi - lo:
        stoprule_parameter_domain("step_bound", step, "0 < step_bound < high_band - low_band")


# =============================================================================
# CORE FUNCTION 1: drift trace
# =============================================================================

def drift_trace(start: Configuration, outputs: Sequence[Configuration]) -> List[float]:
    """f(i) = distance(start, outputs[i])."""
    return [distance(start, out) for out in outputs]


# =============================================================================
# CORE FUNCTION 2: first_unstable_step
# =============================================================================

def first_unstable_step(values: Sequence[float], step_bound: float) -> Optional[int]:
    """First i with |f(i+1) - f(i)| >= step_bound, or None."""
    for i in range(len(values) - 1):
        if abs(values[i + 1] - values[i]) >= step_bound:
            return i
    return None


# =============================================================================
# CORE FUNCTION 3: band entries (discrete intermediate value)
# =============================================================================

def band_indices(values: Sequence[float], thresholds: Thresholds) -> List[int]:
    """Every i with low_band <= f(i) <= high_band, in path order."""
    lo, hi = thresholds.low_band, thresholds.high_band
    return [i for i, v in enumerate(values) if lo <= v <= hi]


def find_band_entry(values: Sequence[float], thresholds: Thresholds) -> Optional[int]:
    """
    First index where the trace lands inside the forbidden band.

    Forward scan form of the discrete intermediate value lemma: a sequence that
    starts below low_band, ends above high_band and moves less than the band
    width per step cannot skip the band.
    """
    hits = band_indices(values, thresholds)
    return hits[0] if hits else None


# =============================================================================
# CORE FUNCTION 4: run_contradiction_test
# =============================================================================

def run_contradiction_test(n: int, start: Configuration, end: Configuration,
                           path: StepwisePath, solver: CandidateSolver,
                           thresholds: Thresholds = DEFAULT_THRESHOLDS,
                           oracle: Optional[Oracle] = None) -> ContradictionReport:
    """
    Test a claimed stable solver for a forced entry into the forbidden band.

    Args:
        n: Problem size (configuration length)
        start, end: Endpoint instances, must be more than high_band apart
        path: StepwisePath from start to end, steps below 1.5/n
        solver: Deterministic Configuration -> Configuration capability
        thresholds: Band and drift bound
        oracle: check(instance, output) -> bool; None means the solver is
            taken as always correct

    Returns:
        ContradictionReport with outcome CONTRADICTION_FOUND, NO_CONTRADICTION
        or STABILITY_VIOLATED

    Raises:
        ParameterDomainError: bad n or thresholds
        InvariantViolation: path/endpoint precondition failed
        BoundaryConditionNotMet: f(0) >= low_band or f(k) <= high_band
        AssertionFailed: no in-band index despite passing every check
    """
    # --- SETUP ---
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n <= 0:
        stoprule_parameter_domain("n", n, "a positive integer")
    n = int(n)
    validate_thresholds(thresholds)
    validate_path(path, n, start, end)
    endpoint_gap = distance(start, end)
    if not endpoint_gap > thresholds.high_band:
        stoprule_invariant(
            "endpoints_far_apart",
            f"distance(start, end)={endpoint_gap:.6f} <= high_band={thresholds.high_band}")
    logger.debug("setup ok: n=%d k=%d endpoint_gap=%.4f", n, path.k, endpoint_gap)

    outputs = [solver(x) for x in path]
    for i, out in enumerate(outputs):
        if not isinstance(out, Configuration) or len(out) != n:
            stoprule_invariant("solver_output_shape",
                               f"solver output at step {i} is not a length-{n} Configuration", i)
    trace = drift_trace(start, outputs)

    # --- BOUNDARY_CHECK ---
    if not trace[0] < thresholds.low_band:
        stoprule_boundary("f(0) < low_band", trace[0], trace)
    if not trace[-1] > thresholds.high_band:
        stoprule_boundary("f(k) > high_band", trace[-1], trace)

    # --- STEP_CHECK ---
    jump = first_unstable_step(trace, thresholds.step_bound)
    if jump is not None:
        delta = abs(trace[jump + 1] - trace[jump])
        logger.warning("stability violated at step %d: |delta f|=%.6f >= %.6f",
                       jump, delta, thresholds.step_bound)
        return _finish(ContradictionReport(
            outcome=Outcome.STABILITY_VIOLATED,
            found=False,
            index=jump,
            distance=trace[jump],
            trace=tuple(trace),
            stage=Stage.STEP_CHECK,
            detail=(f"|f({jump + 1}) - f({jump})| = {delta:.6f} "
                    f">= step_bound {thresholds.step_bound}"),
        ), n, path.k)

    # --- GAP_SCAN ---
    hits = band_indices(trace, thresholds)
    if not hits:
        stoprule_assertion(
            "no index with f(i) in the forbidden band although boundary and step checks passed",
            trace)
    logger.debug("gap scan: %d in-band indices, first=%d", len(hits), hits[0])

    # --- ORACLE_CHECK ---
    rejected = []
    for i in hits:
        if oracle is None or oracle(path[i], outputs[i]):
            return _finish(ContradictionReport(
                outcome=Outcome.CONTRADICTION_FOUND,
                found=True,
                index=i,
                distance=trace[i],
                trace=tuple(trace),
                stage=Stage.REPORT,
                detail=f"valid output at step {i} lies in the forbidden band",
                oracle_rejections=tuple(rejected),
            ), n, path.k)
        rejected.append(i)

    return _finish(ContradictionReport(
        outcome=Outcome.NO_CONTRADICTION,
        found=False,
        index=None,
        distance=None,
        trace=tuple(trace),
        stage=Stage.REPORT,
        detail=f"oracle rejected the output at every in-band index {rejected}",
        oracle_rejections=tuple(rejected),
    ), n, path.k)


def _finish(report: ContradictionReport, n: int, k: int) -> ContradictionReport:
    emit_contradiction_report_receipt(report, n, k)
    return report
