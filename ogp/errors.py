"""
ogp/errors.py - Error Taxonomy and Stoprules

Every error is a StopRule. Each stoprule_* function emits an anomaly receipt
and logs a warning before raising, so no failure leaves without a trace.
"""

import logging
from typing import Any, List, Optional, Sequence

from receipts import StopRule, emit_anomaly

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class ParameterDomainError(StopRule):
    """A model or threshold parameter is outside its numeric domain."""

    def __init__(self, field: str, value: Any, requirement: str):
        self.field = field
        self.value = value
        self.requirement = requirement
        super().__init__(f"{field}={value!r} violates {requirement}")


class InvariantViolation(StopRule):
    """Caller-supplied path or endpoints fail a precondition."""

    def __init__(self, invariant: str, detail: str, index: Optional[int] = None):
        self.invariant = invariant
        self.detail = detail
        self.index = index
        super().__init__(f"{invariant}: {detail}")


class BoundaryConditionNotMet(StopRule):
    """The drift trace does not start near and end far. A setup defect."""

    def __init__(self, condition: str, value: float, trace: Sequence[float]):
        self.condition = condition
        self.value = value
        self.trace = tuple(trace)
        super().__init__(f"boundary condition {condition} not met (value={value:.6f})")


class AssertionFailed(StopRule):
    """The discrete intermediate-value guarantee did not hold on well-formed input."""

    def __init__(self, detail: str, trace: Sequence[float]):
        self.detail = detail
        self.trace = tuple(trace)
        super().__init__(detail)


# =============================================================================
# STOPRULES
# =============================================================================

def stoprule_parameter_domain(field: str, value: Any, requirement: str) -> None:
    """Emit anomaly and raise ParameterDomainError."""
    detail = f"{field}={value!r} violates {requirement}"
    logger.warning("parameter domain: %s", detail)
    emit_anomaly(field, "ParameterDomainError", detail,
                 value=value if isinstance(value, (int, float)) else repr(value))
    raise ParameterDomainError(field, value, requirement)


def stoprule_invariant(invariant: str, detail: str, index: Optional[int] = None) -> None:
    """Emit anomaly and raise InvariantViolation."""
    logger.warning("invariant %s violated: %s", invariant, detail)
    emit_anomaly(invariant, "InvariantViolation", detail, index=index)
    raise InvariantViolation(invariant, detail, index)


def stoprule_boundary(condition: str, value: float, trace: List[float]) -> None:
    """Emit anomaly and raise BoundaryConditionNotMet."""
    logger.warning("boundary condition %s not met: value=%.6f", condition, value)
    emit_anomaly(condition, "BoundaryConditionNotMet",
                 f"{condition} not met", value=value, trace_length=len(trace))
    raise BoundaryConditionNotMet(condition, value, trace)


def stoprule_assertion(detail: str, trace: List[float]) -> None:
    """Emit anomaly and raise AssertionFailed."""
    logger.warning("assertion failed: %s", detail)
    emit_anomaly("band_entry", "AssertionFailed", detail, trace_length=len(trace))
    raise AssertionFailed(detail, trace)
