"""
tests/test_path.py - Tests for ogp/path.py

StepwisePath construction, validate_path invariants and interpolate_path.
"""

import numpy as np
import pytest

from ogp.configuration import Configuration, distance, random_configuration, zeros
from ogp.errors import InvariantViolation
from ogp.path import StepwisePath, interpolate_path, path_step_bound, validate_path


class TestStepwisePath:
    """Immutable sequence behaviour."""

    def test_basic(self):
        a, b = zeros(3), zeros(3).flip([0])
        p = StepwisePath([a, b])
        assert len(p) == 2
        assert p.k == 1
        assert p.dimension == 3
        assert p.start == a and p.end == b
        assert list(p) == [a, b]
        assert p[1] == b

    def test_empty(self):
        with pytest.raises(ValueError):
            StepwisePath([])

    def test_rejects_non_configuration(self):
        with pytest.raises(TypeError):
            StepwisePath([[0, 1]])

    def test_length_mismatch(self):
        with pytest.raises(InvariantViolation) as exc_info:
            StepwisePath([zeros(3), zeros(4)])
        assert exc_info.value.invariant == "equal_length"

    def test_equality_and_hash(self):
        a = StepwisePath([zeros(2), Configuration([1, 0])])
        b = StepwisePath([zeros(2), Configuration([1, 0])])
        assert a == b
        assert hash(a) == hash(b)

    def test_step_distances(self):
        p = StepwisePath([zeros(4), zeros(4).flip([0]), zeros(4).flip([0, 1, 2])])
        assert p.step_distances() == (0.25, 0.5)


class TestPathStepBound:

    def test_bound(self):
        assert path_step_bound(100) == pytest.approx(0.015)
        assert path_step_bound(2) == 0.75


class TestValidatePath:
    """First failed invariant is reported."""

    def _setup(self, n=10, flips=6):
        start = zeros(n)
        end = start.flip(range(flips))
        return start, end, interpolate_path(start, end)

    def test_valid(self):
        start, end, path = self._setup()
        validate_path(path, 10, start, end)

    def test_wrong_start(self):
        start, end, path = self._setup()
        with pytest.raises(InvariantViolation) as exc_info:
            validate_path(path, 10, start.flip([9]), end)
        assert exc_info.value.invariant == "path_starts_at_start"
        assert exc_info.value.index == 0

    def test_wrong_end(self):
        start, end, path = self._setup()
        with pytest.raises(InvariantViolation) as exc_info:
            validate_path(path, 10, start, end.flip([9]))
        assert exc_info.value.invariant == "path_ends_at_end"
        assert exc_info.value.index == path.k

    def test_dimension(self):
        start, end, path = self._setup()
        with pytest.raises(InvariantViolation) as exc_info:
            validate_path(path, 11, start, end)
        assert exc_info.value.invariant == "dimension_matches"

    def test_two_bit_step_too_large(self):
        """At n=100 one step may move at most 1 bit (2/100 >= 1.5/100)."""
        start = zeros(100)
        mid = start.flip([0])
        end = mid.flip([1, 2])
        path = StepwisePath([start, mid, end])
        with pytest.raises(InvariantViolation) as exc_info:
            validate_path(path, 100, start, end)
        assert exc_info.value.invariant == "path_step_bound"
        assert exc_info.value.index == 1

    def test_single_element_path(self):
        start = zeros(5)
        validate_path(StepwisePath([start]), 5, start, start)


class TestInterpolatePath:
    """One bit per step from start to end."""

    def test_endpoints_and_length(self):
        start, end = zeros(8), zeros(8).flip([1, 4, 6])
        path = interpolate_path(start, end)
        assert path.start == start
        assert path.end == end
        assert path.k == 3

    def test_each_step_one_bit(self):
        rng = np.random.default_rng(11)
        start, end = random_configuration(40, rng), random_configuration(40, rng)
        path = interpolate_path(start, end, rng)
        assert all(d == pytest.approx(1 / 40) for d in path.step_distances())
        validate_path(path, 40, start, end)

    def test_drift_is_monotone(self):
        start, end = zeros(20), zeros(20).flip(range(12))
        path = interpolate_path(start, end, np.random.default_rng(0))
        drifts = [distance(start, c) for c in path]
        assert drifts == sorted(drifts)
        assert drifts[-1] == 0.6

    def test_same_endpoints(self):
        start = zeros(5)
        path = interpolate_path(start, start)
        assert len(path) == 1

    def test_length_mismatch(self):
        with pytest.raises(InvariantViolation):
            interpolate_path(zeros(3), zeros(4))
