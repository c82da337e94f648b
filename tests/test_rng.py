"""Tests for the domain-separated deterministic RNG."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from labyrinth.core.enums import Domain
from labyrinth.systems.rng import DeterministicRNG, RngStream, normalize_seed, random_seed


def _draws(stream: RngStream, n: int = 20) -> list[float]:
    return [stream.next_float() for _ in range(n)]


class TestDeterministicRNG:
    def test_pure_function_of_inputs(self):
        a = DeterministicRNG(42)
        b = DeterministicRNG(42)
        assert a.next_float(Domain.MAP_GEN, 0, 7) == b.next_float(Domain.MAP_GEN, 0, 7)

    def test_float_range(self):
        rng = DeterministicRNG(1)
        for i in range(200):
            v = rng.next_float(Domain.SPAWN, 3, i)
            assert 0.0 <= v < 1.0

    def test_next_int_inclusive_bounds(self):
        rng = DeterministicRNG(9)
        values = {rng.next_int(Domain.MAP_GEN, 0, i, 2, 4) for i in range(300)}
        assert values == {2, 3, 4}

    def test_domains_are_separated(self):
        rng = DeterministicRNG(42)
        gen = [rng.next_float(Domain.MAP_GEN, 0, i) for i in range(10)]
        agent = [rng.next_float(Domain.AGENT_DECISION, 0, i) for i in range(10)]
        assert gen != agent


class TestRngStream:
    def test_same_seed_same_sequence(self):
        assert _draws(RngStream(42, Domain.MAP_GEN)) == _draws(RngStream(42, Domain.MAP_GEN))

    def test_different_seed_different_sequence(self):
        assert _draws(RngStream(42, Domain.MAP_GEN)) != _draws(RngStream(43, Domain.MAP_GEN))

    def test_stream_ids_are_independent(self):
        assert _draws(RngStream(42, Domain.AGENT_DECISION, 1)) != _draws(RngStream(42, Domain.AGENT_DECISION, 2))

    def test_matches_stateless_form(self):
        rng = DeterministicRNG(5)
        stream = rng.stream(Domain.SPAWN, 4)
        expected = [rng.next_float(Domain.SPAWN, 4, i) for i in range(5)]
        assert _draws(stream, 5) == expected

    def test_draw_counter(self):
        s = RngStream(1, Domain.MAP_GEN)
        s.next_float()
        s.randint(0, 3)
        s.chance()
        assert s.draws == 3

    def test_randint_bounds(self):
        s = RngStream(3, Domain.MAP_GEN)
        for _ in range(200):
            assert 5 <= s.randint(5, 8) <= 8

    def test_randint_single_value(self):
        s = RngStream(3, Domain.MAP_GEN)
        assert s.randint(7, 7) == 7

    def test_randint_empty_range_raises(self):
        s = RngStream(3, Domain.MAP_GEN)
        with pytest.raises(ValueError):
            s.randint(4, 3)

    def test_choice(self):
        s = RngStream(3, Domain.SPAWN)
        items = ["a", "b", "c"]
        picks = {s.choice(items) for _ in range(100)}
        assert picks == set(items)

    def test_choice_empty_raises(self):
        s = RngStream(3, Domain.SPAWN)
        with pytest.raises(IndexError):
            s.choice([])


class TestSeeds:
    def test_normalize_seed_identity_in_range(self):
        assert normalize_seed(42) == 42
        assert normalize_seed(-42) == -42

    def test_normalize_seed_wraps(self):
        assert normalize_seed(1 << 63) == -(1 << 63)
        assert normalize_seed((1 << 64) + 5) == 5

    def test_random_seed_in_signed_64_bit_range(self):
        for _ in range(20):
            s = random_seed()
            assert -(1 << 63) <= s < (1 << 63)
