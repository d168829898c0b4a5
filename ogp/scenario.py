"""
ogp/scenario.py - Synthetic Scenarios

Builds a (start, end, path) triple with the endpoints a requested fraction of
the hypercube apart, for the CLI and the batch runner.
"""

import numbers
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .configuration import Configuration, random_configuration
from .constants import DEFAULT_N, DEFAULT_SEED, DEFAULT_START_DISTANCE
from .errors import stoprule_parameter_domain
from .path import StepwisePath, interpolate_path


@dataclass(frozen=True)
class Scenario:
    n: int
    start: Configuration
    end: Configuration
    path: StepwisePath
    seed: Optional[int]


def far_endpoint(start: Configuration, fraction: float,
                 rng: Optional[np.random.Generator] = None) -> Configuration:
    """Configuration at distance round(fraction * n) / n from start, positions drawn from rng."""
    n = len(start)
    if not 0.0 <= fraction <= 1.0:
        stoprule_parameter_domain("start_distance", fraction, "0 <= start_distance <= 1")
    flips = int(round(fraction * n))
    rng = rng if rng is not None else np.random.default_rng()
    return start.flip(rng.choice(n, size=flips, replace=False))


def build_scenario(n: int = DEFAULT_N, start_distance: float = DEFAULT_START_DISTANCE,
                   seed: Optional[int] = DEFAULT_SEED) -> Scenario:
    """Random start, far endpoint and a single-bit-flip path between them."""
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n <= 0:
        stoprule_parameter_domain("n", n, "a positive integer")
    n = int(n)
    rng = np.random.default_rng(seed)
    start = random_configuration(n, rng)
    end = far_endpoint(start, start_distance, rng)
    path = interpolate_path(start, end, rng)
    return Scenario(n=n, start=start, end=end, path=path, seed=seed)
