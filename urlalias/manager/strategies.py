"""
Candidate generation strategies for urlalias.

Provided strategies:
- RandomStrategy: random Base62 string of the requested length

Notes:
- Strategies guarantee nothing about uniqueness. The AliasStore inserts each
  candidate and relies on the storage unique constraint, retrying on collision.
- RandomStrategy keeps no shared mutable state; every call draws from the OS
  entropy source, so concurrent callers cannot corrupt each other's output.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

_BASE62_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


class BaseStrategy(ABC):
    """Abstract base for alias candidate generators."""

    @abstractmethod
    def generate(self, length: int) -> str:
        """Return a candidate alias of exactly `length` characters."""
        raise NotImplementedError


@dataclass(frozen=True)
class RandomStrategy(BaseStrategy):
    """Uniform random Base62 candidates."""

    def generate(self, length: int) -> str:
        if length < 1:
            raise ValueError("length must be positive")
        rng = random.SystemRandom()
        return "".join(rng.choice(_BASE62_ALPHABET) for _ in range(length))


def new_random_string(size: int) -> str:
    """Facade for one-off random Base62 strings."""
    return RandomStrategy().generate(size)
