"""
ogp/path.py - Stepwise Paths Between Configurations

A StepwisePath is an immutable sequence of configurations whose consecutive
elements differ by a small perturbation (distance below 1.5/n). The simulator
only verifies this discipline; interpolate_path is a provider that builds one
by flipping a single differing bit per step.
"""

from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

from .configuration import Configuration, distance
from .constants import PATH_STEP_FACTOR
from .errors import stoprule_invariant


def path_step_bound(n: int) -> float:
    """Largest allowed distance between consecutive path elements."""
    return PATH_STEP_FACTOR / n


class StepwisePath:
    """Immutable ordered sequence Path[0..k] of equal-length configurations."""

    __slots__ = ("_steps",)

    def __init__(self, steps: Sequence[Configuration]):
        steps = tuple(steps)
        if not steps:
            raise ValueError("StepwisePath needs at least one configuration")
        for c in steps:
            if not isinstance(c, Configuration):
                raise TypeError(f"StepwisePath elements must be Configuration, got {type(c).__name__}")
        n = len(steps[0])
        if any(len(c) != n for c in steps):
            stoprule_invariant("equal_length", "path configurations differ in length")
        self._steps: Tuple[Configuration, ...] = steps

    def __len__(self) -> int:
        return len(self._steps)

    def __getitem__(self, index):
        return self._steps[index]

    def __iter__(self) -> Iterator[Configuration]:
        return iter(self._steps)

    def __eq__(self, other) -> bool:
        if not isinstance(other, StepwisePath):
            return NotImplemented
        return self._steps == other._steps

    def __hash__(self) -> int:
        return hash(self._steps)

    def __repr__(self) -> str:
        return f"StepwisePath(k={self.k}, n={self.dimension})"

    @property
    def k(self) -> int:
        """Index of the last element."""
        return len(self._steps) - 1

    @property
    def dimension(self) -> int:
        return len(self._steps[0])

    @property
    def start(self) -> Configuration:
        return self._steps[0]

    @property
    def end(self) -> Configuration:
        return self._steps[-1]

    def step_distances(self) -> Tuple[float, ...]:
        """distance(Path[i], Path[i+1]) for i < k."""
        return tuple(distance(a, b) for a, b in zip(self._steps, self._steps[1:]))


def validate_path(path: StepwisePath, n: int, start: Configuration,
                  end: Configuration) -> None:
    """
    Check endpoints, dimension and the per-step perturbation bound.

    Raises:
        InvariantViolation: naming the first failed invariant
    """
    if path.dimension != n or len(start) != n or len(end) != n:
        stoprule_invariant(
            "dimension_matches",
            f"expected n={n}, got path={path.dimension} start={len(start)} end={len(end)}")
    if path.start != start:
        stoprule_invariant("path_starts_at_start", "path[0] != start", 0)
    if path.end != end:
        stoprule_invariant("path_ends_at_end", f"path[{path.k}] != end", path.k)
    bound = path_step_bound(n)
    for i, d in enumerate(path.step_distances()):
        if d >= bound:
            stoprule_invariant(
                "path_step_bound",
                f"step {i}->{i + 1} has distance {d:.6f} >= {bound:.6f}", i)


def interpolate_path(start: Configuration, end: Configuration,
                     rng: Optional[np.random.Generator] = None) -> StepwisePath:
    """
    Path from start to end flipping one differing bit per step.

    Bits are flipped in index order, or in an order drawn from rng when given.
    Each step moves exactly 1/n, inside the 1.5/n bound.
    """
    if len(start) != len(end):
        stoprule_invariant("equal_length",
                           f"endpoints differ in length ({len(start)} vs {len(end)})")
    diff = np.flatnonzero(start.bits != end.bits)
    if rng is not None:
        diff = rng.permutation(diff)
    steps = [start]
    current = start
    for idx in diff:
        current = current.flip([int(idx)])
        steps.append(current)
    return StepwisePath(steps)
