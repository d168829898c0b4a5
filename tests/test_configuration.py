"""
tests/test_configuration.py - Tests for ogp/configuration.py

Hypercube points and normalized Hamming distance.
"""

import copy
import pickle
from concurrent.futures import ProcessPoolExecutor

import numpy as np
import pytest

from ogp.configuration import Configuration, distance, hamming, random_configuration, zeros
from ogp.constants import Outcome
from ogp.errors import InvariantViolation
from ogp.scenario import build_scenario
from ogp.simulator import run_contradiction_test
from ogp.solvers import identity_solver


class TestConfiguration:
    """Construction, immutability and equality."""

    def test_from_list(self):
        c = Configuration([0, 1, 1, 0])
        assert len(c) == 4
        assert c.to_list() == [0, 1, 1, 0]
        assert c[1] == 1

    def test_from_bools(self):
        assert Configuration([True, False]) == Configuration([1, 0])

    def test_rejects_non_bits(self):
        with pytest.raises(ValueError):
            Configuration([0, 2, 1])

    def test_rejects_2d(self):
        with pytest.raises(ValueError):
            Configuration(np.zeros((2, 2)))

    def test_bits_are_read_only(self):
        c = Configuration([0, 1])
        with pytest.raises(ValueError):
            c.bits[0] = 1

    def test_attributes_are_immutable(self):
        c = Configuration([0, 1])
        with pytest.raises(AttributeError):
            c.foo = 1

    def test_source_array_is_copied(self):
        """Mutating the source array does not touch the configuration."""
        src = np.array([0, 0, 0], dtype=np.uint8)
        c = Configuration(src)
        src[0] = 1
        assert c.to_list() == [0, 0, 0]

    def test_equality_is_bitwise(self):
        assert Configuration([1, 0, 1]) == Configuration([1, 0, 1])
        assert Configuration([1, 0, 1]) != Configuration([1, 1, 1])
        assert Configuration([1, 0]) != Configuration([1, 0, 0])

    def test_hashable(self):
        seen = {Configuration([1, 0]), Configuration([1, 0]), Configuration([0, 1])}
        assert len(seen) == 2

    def test_flip_returns_new(self):
        c = zeros(5)
        d = c.flip([0, 3])
        assert c.to_list() == [0, 0, 0, 0, 0]
        assert d.to_list() == [1, 0, 0, 1, 0]

    def test_flip_nothing(self):
        c = Configuration([1, 0, 1])
        assert c.flip([]) == c


class TestDistance:
    """Normalized Hamming distance."""

    def test_self_distance_zero(self):
        c = random_configuration(64, np.random.default_rng(1))
        assert distance(c, c) == 0.0

    def test_symmetric(self):
        rng = np.random.default_rng(2)
        a, b = random_configuration(50, rng), random_configuration(50, rng)
        assert distance(a, b) == distance(b, a)

    def test_known_value(self):
        a = Configuration([0, 0, 0, 0])
        b = Configuration([1, 1, 0, 0])
        assert hamming(a, b) == 2
        assert distance(a, b) == 0.5

    def test_complement_is_one(self):
        a = zeros(10)
        assert distance(a, a.flip(range(10))) == 1.0

    def test_triangle_inequality_random(self):
        rng = np.random.default_rng(3)
        for _ in range(50):
            a, b, c = (random_configuration(30, rng) for _ in range(3))
            assert distance(a, c) <= distance(a, b) + distance(b, c) + 1e-12

    def test_length_mismatch(self):
        with pytest.raises(InvariantViolation) as exc_info:
            distance(zeros(3), zeros(4))
        assert exc_info.value.invariant == "equal_length"

    def test_empty(self):
        assert distance(zeros(0), zeros(0)) == 0.0


class TestPickling:
    """Configurations cross process boundaries intact."""

    def test_pickle_round_trip(self):
        c = Configuration([0, 1, 1])
        restored = pickle.loads(pickle.dumps(c))
        assert restored == c
        assert hash(restored) == hash(c)
        assert not restored.bits.flags.writeable

    def test_deepcopy(self):
        c = random_configuration(20, np.random.default_rng(4))
        clone = copy.deepcopy(c)
        assert clone == c
        assert clone.bits is not c.bits

    def test_restored_copy_finds_dict_entry(self):
        c = Configuration([1, 0, 1, 1])
        table = {c: "found"}
        assert table[pickle.loads(pickle.dumps(c))] == "found"

    def test_contradiction_test_in_process_pool(self):
        sc = build_scenario(100, 0.6, 42)
        with ProcessPoolExecutor(max_workers=1) as pool:
            report = pool.submit(run_contradiction_test, 100, sc.start, sc.end,
                                 sc.path, identity_solver).result()
        assert report.outcome is Outcome.CONTRADICTION_FOUND
        assert report.index == 10
