"""
ogp/band.py - Forbidden Band Sweep

Vectorised annealing coefficient over a grid of overlap fractions beta for a
fixed clause density. Every maximal run of grid points with a negative
coefficient is reported as a forbidden interval: pairs of solutions at those
overlaps are absent with high probability.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from receipts import emit_receipt

from .constants import BAND_SWEEP_STEPS, CLAUSE_OVERLAP_BIAS, CLAUSE_SAT_PROBABILITY
from .errors import stoprule_parameter_domain
from .types_config import ModelParameters
from .entropy_gap import validate_parameters

logger = logging.getLogger(__name__)

# Module exports for receipt types
RECEIPT_SCHEMA = ["band_scan"]


@dataclass(frozen=True)
class BandInterval:
    """Closed beta interval on the sweep grid with negative coefficient."""
    beta_lo: float
    beta_hi: float


@dataclass(frozen=True)
class BandScan:
    """Result of a beta sweep."""
    alpha: float
    clause_bias: float
    betas: Tuple[float, ...]
    coefficients: Tuple[float, ...]
    intervals: Tuple[BandInterval, ...]

    @property
    def has_gap(self) -> bool:
        return len(self.intervals) > 0


# =============================================================================
# CORE FUNCTION 1: coefficient_grid
# =============================================================================

def default_beta_grid(steps: int = BAND_SWEEP_STEPS) -> np.ndarray:
    """Evenly spaced betas strictly inside (0, 1)."""
    if steps < 1:
        stoprule_parameter_domain("steps", steps, "steps >= 1")
    return np.linspace(0.0, 1.0, steps + 2)[1:-1]


def coefficient_grid(alpha: float, betas: np.ndarray,
                     clause_bias: float = CLAUSE_OVERLAP_BIAS) -> np.ndarray:
    """H(beta) + alpha * log2((7/8) * (1 - bias * beta)) for every beta."""
    betas = np.asarray(betas, dtype=float)
    if betas.ndim != 1 or betas.size == 0:
        stoprule_parameter_domain("betas", list(betas.shape), "a non-empty 1-D grid")
    prob_pair = CLAUSE_SAT_PROBABILITY * (1.0 - clause_bias * betas)
    # extremes of beta and prob_pair are enough to bound the whole grid
    for i in (int(np.argmin(betas)), int(np.argmax(betas)),
              int(np.argmin(prob_pair)), int(np.argmax(prob_pair))):
        validate_parameters(ModelParameters(alpha, float(betas[i]), float(prob_pair[i])))
    entropy = -betas * np.log2(betas) - (1.0 - betas) * np.log2(1.0 - betas)
    return entropy + alpha * np.log2(prob_pair)


def negative_runs(mask: np.ndarray) -> List[Tuple[int, int]]:
    """Inclusive (start, end) index pairs of every maximal True run."""
    padded = np.concatenate(([False], np.asarray(mask, dtype=bool), [False]))
    edges = np.flatnonzero(np.diff(padded.astype(np.int8)))
    return [(int(s), int(e) - 1) for s, e in zip(edges[::2], edges[1::2])]


# =============================================================================
# CORE FUNCTION 2: scan_forbidden_band
# =============================================================================

def scan_forbidden_band(alpha: float, betas: Optional[np.ndarray] = None,
                        clause_bias: float = CLAUSE_OVERLAP_BIAS) -> BandScan:
    """
    Sweep beta and collect forbidden intervals.

    Args:
        alpha: Clause density (> 0)
        betas: Sorted grid inside (0, 1); default_beta_grid() if None
        clause_bias: Overlap bias in the pair probability model

    Returns:
        BandScan with the grid, the coefficients and the negative intervals
    """
    grid = default_beta_grid() if betas is None else np.asarray(betas, dtype=float)
    if grid.size > 1 and np.any(np.diff(grid) <= 0):
        stoprule_parameter_domain("betas", "unsorted grid", "a strictly increasing grid")
    coeffs = coefficient_grid(alpha, grid, clause_bias)
    runs = negative_runs(coeffs < 0.0)
    intervals = tuple(BandInterval(float(grid[s]), float(grid[e])) for s, e in runs)

    logger.debug("band scan alpha=%s points=%d intervals=%d", alpha, grid.size, len(intervals))
    emit_receipt("band_scan", {
        "tenant_id": "ogp",
        "alpha": alpha,
        "clause_bias": clause_bias,
        "n_points": int(grid.size),
        "intervals": [[iv.beta_lo, iv.beta_hi] for iv in intervals],
    })
    return BandScan(
        alpha=float(alpha),
        clause_bias=float(clause_bias),
        betas=tuple(float(b) for b in grid),
        coefficients=tuple(float(c) for c in coeffs),
        intervals=intervals,
    )
