"""
ogp/entropy_gap.py - Entropy Gap Calculator

Decides whether the annealing entropy of pairs of solutions at overlap beta is
negative for every problem size n. A negative coefficient means the expected
number of such pairs vanishes, which certifies a forbidden Hamming-distance
band around beta.

    annealing_entropy(n) = n * H(beta) + alpha * n * log2(prob_pair)
                         = n * coefficient

Values are computed exactly in double precision. The literature bounds
(H < 0.89, log2 p < -0.2) are kept only as regression pins.
"""

import logging
import math
import numbers
from typing import Any, Dict, Optional

from receipts import emit_receipt

from .constants import ENTROPY_TERM_BOUND, LOG_PROB_TERM_BOUND
from .errors import stoprule_parameter_domain
from .types_config import ModelParameters
from .types_result import GapCertificate

logger = logging.getLogger(__name__)

_LN2 = math.log(2.0)

# Module exports for receipt types
RECEIPT_SCHEMA = ["gap_certificate"]


# =============================================================================
# RECEIPT TYPE 1: gap_certificate
# =============================================================================

# --- SCHEMA ---
GAP_CERTIFICATE_SCHEMA = {
    "receipt_type": "gap_certificate",
    "ts": "ISO8601",
    "tenant_id": "str",
    "alpha": "float",
    "beta": "float",
    "prob_pair": "float",
    "entropy_term": "float",
    "log_prob_term": "float",
    "coefficient": "float",
    "holds": "bool",
    "payload_hash": "str (SHA256:BLAKE3)"
}


# --- EMIT ---
def emit_gap_certificate_receipt(cert: GapCertificate, tenant_id: str = "ogp") -> dict:
    """Emit gap_certificate receipt."""
    return emit_receipt("gap_certificate", {
        "tenant_id": tenant_id,
        "alpha": cert.params.alpha,
        "beta": cert.params.beta,
        "prob_pair": cert.params.prob_pair,
        "entropy_term": cert.entropy_term,
        "log_prob_term": cert.log_prob_term,
        "coefficient": cert.coefficient,
        "holds": cert.holds,
    })


# =============================================================================
# DOMAIN CHECKS
# =============================================================================

def _require_real(field: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        stoprule_parameter_domain(field, value, "a real number")
    if not math.isfinite(value):
        stoprule_parameter_domain(field, value, "a finite value")
    return float(value)


def _require_open_unit(field: str, value) -> float:
    value = _require_real(field, value)
    if not 0.0 < value < 1.0:
        stoprule_parameter_domain(field, value, "0 < value < 1")
    return value


def validate_parameters(params: ModelParameters) -> ModelParameters:
    """
    Check the numeric domain of params.

    Returns:
        ModelParameters with every field as a plain float (numpy scalars accepted)

    Raises:
        ParameterDomainError: alpha <= 0, beta or prob_pair outside (0, 1),
            or any non-finite value.
    """
    alpha = _require_real("alpha", params.alpha)
    if alpha <= 0.0:
        stoprule_parameter_domain("alpha", alpha, "alpha > 0")
    beta = _require_open_unit("beta", params.beta)
    prob_pair = _require_open_unit("prob_pair", params.prob_pair)
    return ModelParameters(alpha=alpha, beta=beta, prob_pair=prob_pair)


# =============================================================================
# CORE FUNCTION 1: binary_entropy
# =============================================================================

def log2(x: float) -> float:
    """Base-2 logarithm as ln(x) / ln(2)."""
    return math.log(x) / _LN2


def binary_entropy(beta: float) -> float:
    """
    H(beta) = -beta*log2(beta) - (1-beta)*log2(1-beta), in bits.

    Edge cases:
        - beta outside (0, 1) -> ParameterDomainError
    """
    beta = _require_open_unit("beta", beta)
    return -beta * log2(beta) - (1.0 - beta) * log2(1.0 - beta)


# =============================================================================
# CORE FUNCTION 2: annealing coefficient
# =============================================================================

def annealing_coefficient(params: ModelParameters) -> float:
    """Per-variable annealing entropy H(beta) + alpha * log2(prob_pair)."""
    params = validate_parameters(params)
    return binary_entropy(params.beta) + params.alpha * log2(params.prob_pair)


def annealing_entropy(params: ModelParameters, n: int) -> float:
    """Annealing entropy at problem size n (n * coefficient)."""
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n <= 0:
        stoprule_parameter_domain("n", n, "a positive integer")
    return int(n) * annealing_coefficient(params)


# =============================================================================
# CORE FUNCTION 3: compute_gap
# =============================================================================

def compute_gap(params: ModelParameters) -> GapCertificate:
    """
    Certify the forbidden band at overlap beta.

    The annealing entropy is linear in n with zero intercept, so it is negative
    for all n > 0 iff its coefficient is strictly negative.

    Args:
        params: ModelParameters

    Returns:
        GapCertificate (fresh, no shared state)

    Raises:
        ParameterDomainError: params outside the model domain
    """
    params = validate_parameters(params)
    entropy_term = binary_entropy(params.beta)
    log_prob_term = log2(params.prob_pair)
    coefficient = entropy_term + params.alpha * log_prob_term

    cert = GapCertificate(
        holds=coefficient < 0.0,
        coefficient=coefficient,
        entropy_term=entropy_term,
        log_prob_term=log_prob_term,
        params=params,
    )
    logger.debug("gap alpha=%s beta=%s coefficient=%.6f holds=%s",
                 params.alpha, params.beta, coefficient, cert.holds)
    emit_gap_certificate_receipt(cert)
    return cert


# =============================================================================
# CORE FUNCTION 4: literature_bounds
# =============================================================================

def literature_bounds(params: ModelParameters,
                      cert: Optional[GapCertificate] = None) -> Dict[str, Any]:
    """
    Compare exact values to the bounds asserted by the cited model.

    Returns a dict of the exact terms, the pinned bounds, the coefficient bound
    they imply and whether each pin holds. A regression check, not a derivation.
    An existing certificate for the same params is reused instead of recomputed.
    """
    if cert is None:
        cert = compute_gap(params)
    elif cert.params != validate_parameters(params):
        stoprule_parameter_domain("cert", "certificate for other params",
                                  "a certificate computed from params")
    implied = ENTROPY_TERM_BOUND + cert.params.alpha * LOG_PROB_TERM_BOUND
    return {
        "entropy_term": cert.entropy_term,
        "entropy_term_bound": ENTROPY_TERM_BOUND,
        "entropy_term_within": cert.entropy_term < ENTROPY_TERM_BOUND,
        "log_prob_term": cert.log_prob_term,
        "log_prob_term_bound": LOG_PROB_TERM_BOUND,
        "log_prob_term_within": cert.log_prob_term < LOG_PROB_TERM_BOUND,
        "implied_coefficient_bound": implied,
        "implied_bound_negative": implied < 0.0,
        "coefficient": cert.coefficient,
    }
