"""
ogp/constants.py - Model and Simulator Constants

Literature parameters, band thresholds and receipt names. Centralized for tuning.
Pure data, no behavior.
"""

from enum import Enum

# =============================================================================
# RANDOM 3-SAT MODEL (literature parameters)
# =============================================================================

LITERATURE_ALPHA = 4.5       # Clause density
LITERATURE_BETA = 0.3        # Overlap fraction
CLAUSE_SAT_PROBABILITY = 7.0 / 8.0  # A random 3-clause is satisfied w.p. 7/8
CLAUSE_OVERLAP_BIAS = 0.1    # prob_pair = 7/8 * (1 - bias * beta)

# Regression pins from the cited model. Axioms there, checked here.
ENTROPY_TERM_BOUND = 0.89    # H(beta) < 0.89 at beta = 0.3
LOG_PROB_TERM_BOUND = -0.2   # log2(prob_pair) < -0.2

# =============================================================================
# GAP BAND THRESHOLDS
# =============================================================================

LOW_BAND = 0.1               # Drift below this = near the start endpoint
HIGH_BAND = 0.5              # Drift above this = far regime
STEP_BOUND = 0.05            # Max solver drift per path step under stability

# Consecutive path elements must be within PATH_STEP_FACTOR / n
PATH_STEP_FACTOR = 1.5

# =============================================================================
# BAND SWEEP DEFAULTS
# =============================================================================

BAND_SWEEP_STEPS = 199       # Grid points strictly inside (0, 1)

# =============================================================================
# SCENARIO DEFAULTS
# =============================================================================

DEFAULT_N = 100
DEFAULT_START_DISTANCE = 0.6
DEFAULT_SEED = 42

# =============================================================================
# RECEIPT SCHEMA
# =============================================================================

RECEIPT_SCHEMA = [
    "gap_certificate", "band_scan", "contradiction_report",
    "batch_summary", "run_export", "config_load", "config_validation", "anomaly",
]


# =============================================================================
# ENUMS
# =============================================================================

class Outcome(Enum):
    """Terminal findings of a contradiction test."""
    CONTRADICTION_FOUND = "CONTRADICTION_FOUND"  # Stable correct solver forced into the band
    NO_CONTRADICTION = "NO_CONTRADICTION"        # Oracle rejected every in-band output
    STABILITY_VIOLATED = "STABILITY_VIOLATED"    # Solver broke the drift bound


class Stage(Enum):
    """Simulator progression. Terminal at REPORT or an early exit."""
    SETUP = "SETUP"
    BOUNDARY_CHECK = "BOUNDARY_CHECK"
    STEP_CHECK = "STEP_CHECK"
    GAP_SCAN = "GAP_SCAN"
    ORACLE_CHECK = "ORACLE_CHECK"
    REPORT = "REPORT"
