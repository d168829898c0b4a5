"""
ogp/solvers.py - Reference Candidate Solvers

Capabilities for exercising the simulator. The simulator never builds a
solver; callers pass one of these (or their own) in.
"""

from typing import Dict, Sequence

from .configuration import Configuration
from .errors import stoprule_invariant
from .path import StepwisePath


def identity_solver(instance: Configuration) -> Configuration:
    """Returns its input. Drift tracks the path itself: perfectly stable."""
    return instance


def constant_solver(target: Configuration):
    """Always returns target, whatever the instance."""
    def solve(instance: Configuration) -> Configuration:
        return target
    return solve


def at_distance(origin: Configuration, fraction: float) -> Configuration:
    """origin with its first round(fraction * n) bits flipped."""
    n = len(origin)
    flips = int(round(fraction * n))
    if not 0 <= flips <= n:
        stoprule_invariant("fraction_in_unit_interval",
                           f"cannot move {fraction} of {n} bits")
    return origin.flip(range(flips))


def jump_solver(start: Configuration, end: Configuration, path: StepwisePath,
                switch_index: int):
    """
    Returns start for path[0..switch_index-1] and end afterwards.

    The drift jumps from 0 to distance(start, end) in one step, breaking any
    stability bound below that gap.
    """
    positions = {cfg: i for i, cfg in enumerate(path)}

    def solve(instance: Configuration) -> Configuration:
        return start if positions.get(instance, 0) < switch_index else end
    return solve


def scripted_solver(path: StepwisePath, start: Configuration, drifts: Sequence[float]):
    """
    Solver whose drift f(i) follows `drifts` (rounded to multiples of 1/n).

    Path elements must be distinct; drifts has one entry per path element.
    """
    if len(drifts) != len(path):
        stoprule_invariant("drift_length",
                           f"{len(drifts)} drifts for a path of {len(path)} elements")
    table: Dict[Configuration, Configuration] = {}
    for cfg, f in zip(path, drifts):
        if cfg in table:
            stoprule_invariant("distinct_path_elements", "scripted solver needs a simple path")
        table[cfg] = at_distance(start, f)

    def solve(instance: Configuration) -> Configuration:
        return table[instance]
    return solve
