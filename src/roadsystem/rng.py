"""Deterministic random number helpers for reproducible road networks."""

from __future__ import annotations

import random
import secrets
from typing import Sequence, TypeVar

T = TypeVar("T")


def generate_seed() -> int:
    """Return a positive 63-bit seed for ad-hoc runs."""
    return secrets.randbits(63) or 1


class DeterministicRNG:
    """Seedable source of randomness shared by grammar rewriting."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random()
        self.__seed_value: int | None = None
        self._seed(seed)

    def _seed(self, value: int | None) -> None:
        if value is None:
            value = generate_seed()
        try:
            normalized = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid seed value: {value}") from exc
        self.__seed_value = normalized
        self._random.seed(normalized)

    @property
    def _seed_value(self) -> int | None:
        return self.__seed_value

    def random(self) -> float:
        """Return a float in the range [0.0, 1.0)."""
        return self._random.random()

    def randint(self, a: int, b: int) -> int:
        if a > b:
            raise ValueError("Lower bound must be <= upper bound for randint")
        return self._random.randint(a, b)

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """Pick one item with probability proportional to its weight."""
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        if len(items) != len(weights):
            raise ValueError("items and weights must have the same length")
        total = float(sum(weights))
        if total <= 0:
            raise ValueError("Total weight must be positive")
        if len(items) == 1:
            return items[0]
        target = self.random() * total
        cumulative = 0.0
        for item, weight in zip(items, weights):
            cumulative += weight
            if target < cumulative:
                return item
        return items[-1]


_GLOBAL_RNG = DeterministicRNG()


def get_rng() -> DeterministicRNG:
    return _GLOBAL_RNG


def seed_rng(seed: int | None) -> int:
    _GLOBAL_RNG._seed(seed)
    assert _GLOBAL_RNG._seed_value is not None
    return _GLOBAL_RNG._seed_value


__all__ = [
    "DeterministicRNG",
    "generate_seed",
    "get_rng",
    "seed_rng",
]
