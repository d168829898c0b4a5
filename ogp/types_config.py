"""
ogp/types_config.py - ModelParameters, Thresholds and Presets

Immutable inputs for the gap calculator and the contradiction simulator.
Frozen dataclasses; domain validation lives with the code that consumes them.
"""

from dataclasses import dataclass

from .constants import (
    LITERATURE_ALPHA, LITERATURE_BETA, CLAUSE_SAT_PROBABILITY, CLAUSE_OVERLAP_BIAS,
    LOW_BAND, HIGH_BAND, STEP_BOUND,
)


def literature_prob_pair(beta: float, clause_bias: float = CLAUSE_OVERLAP_BIAS) -> float:
    """Probability a random clause is satisfied by both of a pair at overlap beta."""
    return CLAUSE_SAT_PROBABILITY * (1.0 - clause_bias * beta)


@dataclass(frozen=True)
class ModelParameters:
    """Random 3-SAT model parameters (immutable)."""
    alpha: float      # Clause density, > 0
    beta: float       # Overlap fraction, in (0, 1)
    prob_pair: float  # Pair satisfaction probability, in (0, 1)

    @classmethod
    def from_density(cls, alpha: float, beta: float,
                     clause_bias: float = CLAUSE_OVERLAP_BIAS) -> "ModelParameters":
        """Derive prob_pair from the literature model (7/8) * (1 - bias * beta)."""
        return cls(alpha=alpha, beta=beta,
                   prob_pair=literature_prob_pair(beta, clause_bias))


@dataclass(frozen=True)
class Thresholds:
    """Gap band and drift bound for the contradiction simulator (immutable)."""
    low_band: float = LOW_BAND
    high_band: float = HIGH_BAND
    step_bound: float = STEP_BOUND


# =============================================================================
# PRESETS
# =============================================================================

LITERATURE_PARAMETERS = ModelParameters.from_density(LITERATURE_ALPHA, LITERATURE_BETA)

DEFAULT_THRESHOLDS = Thresholds()
