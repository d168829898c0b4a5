"""
ogp - Overlap Gap Property Checker

Public API: the entropy gap calculator and the stability contradiction
simulator for random 3-SAT, plus the supporting value types. A numerical
checker, not a proof.
"""

# =============================================================================
# TYPES
# =============================================================================
from .types_config import (
    ModelParameters,
    Thresholds,
    LITERATURE_PARAMETERS,
    DEFAULT_THRESHOLDS,
    literature_prob_pair,
)
from .types_result import GapCertificate, ContradictionReport
from .configuration import (
    Configuration,
    distance,
    hamming,
    random_configuration,
    zeros,
)
from .path import StepwisePath, interpolate_path, path_step_bound, validate_path

# =============================================================================
# CONSTANTS
# =============================================================================
from .constants import Outcome, Stage, RECEIPT_SCHEMA

# =============================================================================
# ERRORS
# =============================================================================
from .errors import (
    ParameterDomainError,
    InvariantViolation,
    BoundaryConditionNotMet,
    AssertionFailed,
)

# =============================================================================
# ENTROPY GAP CALCULATOR
# =============================================================================
from .entropy_gap import (
    compute_gap,
    binary_entropy,
    annealing_coefficient,
    annealing_entropy,
    literature_bounds,
    validate_parameters,
)
from .band import BandInterval, BandScan, scan_forbidden_band
from .symbolic import annealing_entropy_expr, certify_for_all_n, evaluate_coefficient

# =============================================================================
# STABILITY CONTRADICTION SIMULATOR
# =============================================================================
from .simulator import (
    run_contradiction_test,
    find_band_entry,
    band_indices,
    first_unstable_step,
    validate_thresholds,
)
from .batch import BatchCase, BatchResult, batch_merkle_root, run_batch
from .scenario import Scenario, build_scenario, far_endpoint

# =============================================================================
# PUBLIC API
# =============================================================================
__all__ = [
    # Types
    "ModelParameters",
    "Thresholds",
    "LITERATURE_PARAMETERS",
    "DEFAULT_THRESHOLDS",
    "literature_prob_pair",
    "GapCertificate",
    "ContradictionReport",
    "Configuration",
    "distance",
    "hamming",
    "random_configuration",
    "zeros",
    "StepwisePath",
    "interpolate_path",
    "path_step_bound",
    "validate_path",
    # Constants
    "Outcome",
    "Stage",
    "RECEIPT_SCHEMA",
    # Errors
    "ParameterDomainError",
    "InvariantViolation",
    "BoundaryConditionNotMet",
    "AssertionFailed",
    # Calculator
    "compute_gap",
    "binary_entropy",
    "annealing_coefficient",
    "annealing_entropy",
    "literature_bounds",
    "validate_parameters",
    "BandInterval",
    "BandScan",
    "scan_forbidden_band",
    "annealing_entropy_expr",
    "certify_for_all_n",
    "evaluate_coefficient",
    # Simulator
    "run_contradiction_test",
    "find_band_entry",
    "band_indices",
    "first_unstable_step",
    "validate_thresholds",
    "BatchCase",
    "BatchResult",
    "run_batch",
    "batch_merkle_root",
    "Scenario",
    "build_scenario",
    "far_endpoint",
]
