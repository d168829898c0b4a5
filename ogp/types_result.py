"""
ogp/types_result.py - GapCertificate and ContradictionReport

Immutable result containers, produced fresh per call.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import Outcome, Stage
from .types_config import ModelParameters


@dataclass(frozen=True)
class GapCertificate:
    """Outcome of the annealing-entropy sign check."""
    holds: bool
    coefficient: float     # H(beta) + alpha * log2(prob_pair)
    entropy_term: float    # H(beta)
    log_prob_term: float   # log2(prob_pair)
    params: ModelParameters


@dataclass(frozen=True)
class ContradictionReport:
    """Terminal finding of one contradiction test."""
    outcome: Outcome
    found: bool
    index: Optional[int]            # Path index of the finding, if any
    distance: Optional[float]       # f(index)
    trace: Tuple[float, ...]        # f(0..k)
    stage: Stage                    # Stage the run terminated in
    detail: str = ""
    oracle_rejections: Tuple[int, ...] = ()
