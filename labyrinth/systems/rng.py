"""Domain-separated deterministic RNG using xxhash.

Every draw is a pure function of (seed, domain, stream_id, counter):

    RNG_Value = Hash(Seed, Domain, StreamID, Counter)

``DeterministicRNG`` is the stateless form. ``RngStream`` wraps it with a
private counter so callers get an ordinary sequence of draws; two streams
built from the same (seed, domain, stream_id) replay identical sequences,
and streams in different domains never share draws.
"""

from __future__ import annotations

import secrets
import struct
from typing import Sequence, TypeVar

import xxhash

from labyrinth.core.enums import Domain

T = TypeVar("T")


def random_seed() -> int:
    """Draw a signed 64-bit seed from the OS entropy pool."""
    return secrets.randbits(64) - (1 << 63)


def normalize_seed(seed: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit seed range."""
    return ((seed + (1 << 63)) % (1 << 64)) - (1 << 63)


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, stream_id, counter) —
    no internal mutable state, therefore fully thread-safe.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, stream_id: int, counter: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, stream_id, counter)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, stream_id: int, counter: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, stream_id, counter) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, stream_id: int, counter: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, stream_id, counter)
        return low + int(f * (high - low + 1))

    def stream(self, domain: Domain, stream_id: int = 0) -> RngStream:
        return RngStream(self._seed, domain, stream_id)


class RngStream:
    """Sequential view over ``DeterministicRNG`` for one responsibility.

    Not shared between threads: each agent, the builder and the spawner own
    their own stream.
    """

    __slots__ = ("_rng", "_domain", "_stream_id", "_counter")

    def __init__(self, seed: int, domain: Domain, stream_id: int = 0) -> None:
        self._rng = DeterministicRNG(seed)
        self._domain = domain
        self._stream_id = stream_id
        self._counter = 0

    @property
    def seed(self) -> int:
        return self._rng.seed

    @property
    def domain(self) -> Domain:
        return self._domain

    @property
    def draws(self) -> int:
        """Number of values drawn so far."""
        return self._counter

    def next_float(self) -> float:
        """Return the next float in [0.0, 1.0)."""
        value = self._rng.next_float(self._domain, self._stream_id, self._counter)
        self._counter += 1
        return value

    def randint(self, low: int, high: int) -> int:
        """Return the next integer in [low, high] inclusive."""
        if high < low:
            raise ValueError(f"empty range [{low}, {high}]")
        value = self._rng.next_int(self._domain, self._stream_id, self._counter, low, high)
        self._counter += 1
        return value

    def randrange(self, stop: int) -> int:
        """Return the next integer in [0, stop)."""
        return self.randint(0, stop - 1)

    def chance(self, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float() < probability

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self.randrange(len(items))]
