"""
ogp/configuration.py - Hypercube Points and Hamming Distance

A Configuration is an immutable bit assignment of length n: one vertex of the
n-dimensional hypercube. Distance is normalized Hamming distance in [0, 1].
"""

from typing import Iterable, Optional, Sequence

import numpy as np

from .errors import stoprule_invariant


class Configuration:
    """Immutable fixed-length bit assignment. Equality is bitwise."""

    __slots__ = ("_bits", "_hash")

    def __init__(self, bits: Iterable):
        arr = np.asarray(list(bits) if not isinstance(bits, np.ndarray) else bits)
        if arr.ndim != 1:
            raise ValueError(f"Configuration must be one-dimensional, got shape {arr.shape}")
        if arr.size and not np.isin(arr, (0, 1)).all():
            raise ValueError("Configuration bits must be 0/1 or bool")
        frozen = arr.astype(np.uint8).copy()
        frozen.setflags(write=False)
        object.__setattr__(self, "_bits", frozen)
        object.__setattr__(self, "_hash", hash(frozen.tobytes()))

    def __setattr__(self, name, value):
        raise AttributeError("Configuration is immutable")

    def __reduce__(self):
        # rebuild from bits so the cached hash is recomputed in the new process
        return (Configuration, (self._bits.copy(),))

    @property
    def bits(self) -> np.ndarray:
        """Read-only uint8 view of the assignment."""
        return self._bits

    def __len__(self) -> int:
        return int(self._bits.size)

    def __getitem__(self, index: int) -> int:
        return int(self._bits[index])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Configuration):
            return NotImplemented
        return self._bits.size == other._bits.size and bool(
            np.array_equal(self._bits, other._bits))

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        n = len(self)
        preview = "".join(str(b) for b in self._bits[:32])
        suffix = "..." if n > 32 else ""
        return f"Configuration(n={n}, bits={preview}{suffix})"

    def to_list(self) -> list:
        return [int(b) for b in self._bits]

    def flip(self, indices: Sequence[int]) -> "Configuration":
        """New configuration with the given positions negated."""
        out = self._bits.copy()
        out[np.asarray(list(indices), dtype=np.intp)] ^= 1
        return Configuration(out)


# =============================================================================
# CONSTRUCTORS
# =============================================================================

def zeros(n: int) -> Configuration:
    return Configuration(np.zeros(n, dtype=np.uint8))


def random_configuration(n: int, rng: Optional[np.random.Generator] = None) -> Configuration:
    """Uniform random vertex of the n-cube."""
    rng = rng if rng is not None else np.random.default_rng()
    return Configuration(rng.integers(0, 2, size=n, dtype=np.uint8))


# =============================================================================
# DISTANCE
# =============================================================================

def hamming(a: Configuration, b: Configuration) -> int:
    """Number of differing positions."""
    if len(a) != len(b):
        stoprule_invariant("equal_length",
                           f"cannot compare configurations of length {len(a)} and {len(b)}")
    return int(np.count_nonzero(a.bits != b.bits))


def distance(a: Configuration, b: Configuration) -> float:
    """
    Normalized Hamming distance in [0, 1].

    distance(a, a) == 0 and distance(a, b) == distance(b, a). Two empty
    configurations are at distance 0.
    """
    n = len(a)
    d = hamming(a, b)
    return d / n if n else 0.0
