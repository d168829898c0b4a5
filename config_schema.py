"""
Checker Configuration Schema - Self-Validating Run Configuration

This module defines CheckerConfig, the single input file for the OGP gap
checker CLI: model parameters for the entropy gap calculator, band thresholds
for the contradiction simulator, and the synthetic scenario settings.

Consumed by:
- checker.py (CLI)
- ogp.scenario (via scenario())

Design Principles:
- Self-validating: JSON Schema (Draft 2020-12) plus cross-field rules
- Self-healing: strict=False replaces invalid values with defaults + warnings
- Auditable: config_hash over canonical JSON
- Immutable: frozen after load
"""

from __future__ import annotations

import hashlib
import json
import logging
import warnings
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from receipts import emit_receipt
from ogp.constants import (
    LITERATURE_ALPHA, LITERATURE_BETA, CLAUSE_OVERLAP_BIAS,
    LOW_BAND, HIGH_BAND, STEP_BOUND,
    DEFAULT_N, DEFAULT_SEED, DEFAULT_START_DISTANCE,
)
from ogp.types_config import ModelParameters, Thresholds

logger = logging.getLogger(__name__)

__all__ = [
    'CheckerConfig',
    'load',
    'from_dict',
    'default',
    'validate_data',
]


# =============================================================================
# JSON Schema Definition (Draft 2020-12)
# =============================================================================

_JSON_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "CheckerConfig",
    "description": "OGP gap checker run configuration",
    "type": "object",
    "properties": {
        "version": {
            "type": "string",
            "pattern": r"^\d+\.\d+$",
            "default": "1.0"
        },
        "alpha": {
            "type": "number",
            "description": "Clause density",
            "exclusiveMinimum": 0,
            "default": LITERATURE_ALPHA
        },
        "beta": {
            "type": "number",
            "description": "Overlap fraction",
            "exclusiveMinimum": 0,
            "exclusiveMaximum": 1,
            "default": LITERATURE_BETA
        },
        "clause_bias": {
            "type": "number",
            "description": "Overlap bias in prob_pair = 7/8 * (1 - bias * beta)",
            "minimum": 0,
            "maximum": 1,
            "default": CLAUSE_OVERLAP_BIAS
        },
        "prob_pair": {
            "type": ["number", "null"],
            "description": "Explicit pair probability; derived from beta when null",
            "exclusiveMinimum": 0,
            "exclusiveMaximum": 1,
            "default": None
        },
        "low_band": {"type": "number", "minimum": 0, "maximum": 1, "default": LOW_BAND},
        "high_band": {"type": "number", "minimum": 0, "maximum": 1, "default": HIGH_BAND},
        "step_bound": {"type": "number", "exclusiveMinimum": 0, "maximum": 1, "default": STEP_BOUND},
        "n": {"type": "integer", "minimum": 1, "default": DEFAULT_N},
        "seed": {"type": ["integer", "null"], "minimum": 0, "default": DEFAULT_SEED},
        "start_distance": {
            "type": "number",
            "description": "Distance between the synthetic endpoints",
            "minimum": 0,
            "maximum": 1,
            "default": DEFAULT_START_DISTANCE
        }
    },
    "additionalProperties": False
}

_DEFAULTS: Dict[str, Any] = {
    key: prop["default"] for key, prop in _JSON_SCHEMA["properties"].items()
}

# Compiled once at import
Draft202012Validator.check_schema(_JSON_SCHEMA)
_COMPILED_VALIDATOR = Draft202012Validator(_JSON_SCHEMA)


def _compute_hash(data: Dict[str, Any]) -> str:
    """SHA3-256 of canonical JSON, first 16 hex chars."""
    canonical = json.dumps(data, sort_keys=True, separators=(',', ':'))
    return hashlib.sha3_256(canonical.encode()).hexdigest()[:16]


# =============================================================================
# CheckerConfig Dataclass
# =============================================================================

@dataclass(frozen=True)
class CheckerConfig:
    """
    OGP gap checker configuration.

    Attributes:
        version: Config schema version
        alpha: Clause density
        beta: Overlap fraction
        clause_bias: Overlap bias of the literature pair probability
        prob_pair: Explicit pair probability, or None to derive it
        low_band, high_band: Forbidden band for the simulator
        step_bound: Max solver drift per path step
        n: Problem size of the synthetic scenario
        seed: RNG seed of the synthetic scenario (None = fresh entropy)
        start_distance: Endpoint distance of the synthetic scenario
    """
    version: str = "1.0"
    alpha: float = LITERATURE_ALPHA
    beta: float = LITERATURE_BETA
    clause_bias: float = CLAUSE_OVERLAP_BIAS
    prob_pair: Optional[float] = None
    low_band: float = LOW_BAND
    high_band: float = HIGH_BAND
    step_bound: float = STEP_BOUND
    n: int = DEFAULT_N
    seed: Optional[int] = DEFAULT_SEED
    start_distance: float = DEFAULT_START_DISTANCE

    @property
    def config_hash(self) -> str:
        return _compute_hash(self.to_dict())

    @property
    def schema(self) -> Dict[str, Any]:
        """JSON Schema dict for external validation."""
        return json.loads(json.dumps(_JSON_SCHEMA))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    def model_parameters(self) -> ModelParameters:
        if self.prob_pair is not None:
            return ModelParameters(self.alpha, self.beta, self.prob_pair)
        return ModelParameters.from_density(self.alpha, self.beta, self.clause_bias)

    def thresholds(self) -> Thresholds:
        return Thresholds(self.low_band, self.high_band, self.step_bound)

    def scenario(self):
        """Synthetic (start, end, path) for the simulator."""
        from ogp.scenario import build_scenario
        return build_scenario(self.n, self.start_distance, self.seed)


# =============================================================================
# Validation
# =============================================================================

def validate_data(data: Dict[str, Any]) -> Tuple[bool, List[str], List[str]]:
    """
    Validate raw config data.

    Returns: (is_valid, errors, warnings)

    Rules:
    - JSON Schema types and ranges
    - low_band < high_band
    - step_bound < high_band - low_band
    - start_distance > high_band (warning: the simulator would refuse the scenario)
    """
    errors: List[str] = []
    warns: List[str] = []

    if not isinstance(data, dict):
        return False, [f"Config must be a mapping, got {type(data).__name__}"], warns

    for err in sorted(_COMPILED_VALIDATOR.iter_errors(data), key=lambda e: list(e.path)):
        where = ".".join(str(p) for p in err.path) or "<root>"
        errors.append(f"Schema: {where}: {err.message}")

    merged = {**_DEFAULTS, **data}
    lo, hi, step = merged.get("low_band"), merged.get("high_band"), merged.get("step_bound")
    if all(isinstance(v, (int, float)) for v in (lo, hi, step)):
        if lo >= hi:
            errors.append(f"low_band {lo} must be below high_band {hi}")
        elif step >= hi - lo:
            errors.append(f"step_bound {step} must be below band width {hi - lo}")

    dist = merged.get("start_distance")
    if isinstance(dist, (int, float)) and isinstance(hi, (int, float)) and dist <= hi:
        warns.append(f"start_distance {dist} <= high_band {hi}: simulate will reject the endpoints")

    return len(errors) == 0, errors, warns


def _self_heal(data: Dict[str, Any], warns: List[str]) -> Dict[str, Any]:
    """
    Apply self-healing to config data.

    - Unknown field -> dropped, warning
    - Field failing its schema -> default, warning
    - Inconsistent bands -> band defaults, warning
    """
    healed = {}
    for key, val in data.items():
        if key not in _DEFAULTS:
            warns.append(f"Ignoring unknown field: {key}")
            continue
        healed[key] = val

    for err in list(_COMPILED_VALIDATOR.iter_errors(healed)):
        if err.path:
            key = err.path[0]
            if key in healed:
                warns.append(f"Replacing invalid {key}={healed[key]!r} with default {_DEFAULTS[key]!r}")
                healed[key] = _DEFAULTS[key]

    ok, errors, _ = validate_data(healed)
    if not ok:
        for key in ("low_band", "high_band", "step_bound"):
            healed[key] = _DEFAULTS[key]
        warns.append("Reset low_band/high_band/step_bound to defaults: " + "; ".join(errors))

    return healed


def from_dict(data: Dict[str, Any], strict: bool = True) -> CheckerConfig:
    """
    Build a CheckerConfig from raw data.

    Raises:
        ValueError: strict=True and validation fails, or healing could not fix it
    """
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping, got {type(data).__name__}")
    is_valid, errors, warns = validate_data(data)
    if not is_valid:
        if strict:
            raise ValueError("Config validation failed:\n" + "\n".join(f"  - {e}" for e in errors))
        data = _self_heal(data, warns)
        is_valid, errors, _ = validate_data(data)
        if not is_valid:
            raise ValueError("Config validation failed after self-healing:\n" +
                             "\n".join(f"  - {e}" for e in errors))

    for w in warns:
        logger.warning("CheckerConfig: %s", w)
        warnings.warn(f"CheckerConfig: {w}", UserWarning, stacklevel=3)

    merged = {**_DEFAULTS, **data}
    config = CheckerConfig(
        version=str(merged["version"]),
        alpha=float(merged["alpha"]),
        beta=float(merged["beta"]),
        clause_bias=float(merged["clause_bias"]),
        prob_pair=None if merged["prob_pair"] is None else float(merged["prob_pair"]),
        low_band=float(merged["low_band"]),
        high_band=float(merged["high_band"]),
        step_bound=float(merged["step_bound"]),
        n=int(merged["n"]),
        seed=None if merged["seed"] is None else int(merged["seed"]),
        start_distance=float(merged["start_distance"]),
    )
    emit_receipt("config_load", {
        "tenant_id": "ogp",
        "config_hash": config.config_hash,
        "n_warnings": len(warns),
    })
    return config


def load(path: str, strict: bool = True) -> CheckerConfig:
    """
    Load config from a JSON or YAML file.

    Args:
        path: Path to config file (.json, .yaml, .yml)
        strict: If True, raise on invalid; if False, self-heal with warnings

    Returns:
        Validated, frozen CheckerConfig

    Raises:
        FileNotFoundError: If path doesn't exist
        ValueError: If validation fails
    """
    path_obj = Path(path)
    if not path_obj.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    content = path_obj.read_text()
    if path_obj.suffix in ('.yaml', '.yml'):
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    else:
        data = json.loads(content)
    if data is None:
        data = {}

    return from_dict(data, strict=strict)


def default() -> CheckerConfig:
    """Literature parameters with the default band and scenario."""
    return CheckerConfig()
