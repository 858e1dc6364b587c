"""
Outcome distributions and the determinism model for actions.

Every action reports one of three determinism classes:

- Deterministic: a single fixed effect, always safe to auto-apply
- Random(distribution): one of several integer outcomes, weighted
- Choice: needs an external decision, never auto-applied

Weights are relative magnitudes and need not sum to 1. Distributions are
built compositionally:

    # 25% chance of move 1, otherwise 30/75 of move 3 and the rest move 2
    Distribution.split(0.25, 1, Distribution.split(0.4, 3, 2))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union

import numpy as np

__all__ = [
    "Distribution",
    "Deterministic",
    "Random",
    "Choice",
    "Determinism",
]


@dataclass
class Distribution:
    """Mapping from integer outcome value to relative weight."""

    # (weight, value) pairs, values unique
    outcomes: List[Tuple[float, int]] = field(default_factory=list)

    @classmethod
    def certain(cls, value: int) -> Distribution:
        """A distribution with a single outcome."""
        return cls([(1.0, value)])

    @classmethod
    def coerce(cls, value: Union[int, Distribution]) -> Distribution:
        if isinstance(value, Distribution):
            return value
        return cls.certain(value)

    @classmethod
    def split(
        cls,
        probability: float,
        then_value: Union[int, Distribution],
        else_value: Union[int, Distribution],
    ) -> Distribution:
        """then_value with weight `probability`, else_value with the rest."""
        return (cls.coerce(then_value) * probability) + (
            cls.coerce(else_value) * (1.0 - probability)
        )

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __mul__(self, factor: float) -> Distribution:
        return Distribution([(weight * factor, value) for weight, value in self.outcomes])

    def __add__(self, other: Distribution) -> Distribution:
        result = Distribution(list(self.outcomes))
        result += other
        return result

    def __iadd__(self, other: Distribution) -> Distribution:
        for weight, value in other.outcomes:
            for i, (existing_weight, existing_value) in enumerate(self.outcomes):
                if existing_value == value:
                    self.outcomes[i] = (existing_weight + weight, value)
                    break
            else:
                self.outcomes.append((weight, value))
        return self

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.outcomes)

    def values(self) -> List[int]:
        return [value for _, value in self.outcomes]

    def weight_of(self, value: int) -> float:
        for weight, existing in self.outcomes:
            if existing == value:
                return weight
        return 0.0

    def total_weight(self) -> float:
        return sum(weight for weight, _ in self.outcomes)

    def sample(self) -> int:
        """Draw one value, treating weights as relative probabilities."""
        if not self.outcomes:
            raise ValueError("Cannot sample from an empty distribution")
        total = self.total_weight()
        if total <= 0:
            raise ValueError(f"Cannot sample from a distribution with total weight {total}")
        weights = np.array([weight for weight, _ in self.outcomes], dtype=float)
        probs = weights / total
        index = np.random.choice(len(self.outcomes), p=probs)
        return self.outcomes[int(index)][1]


@dataclass(frozen=True)
class Deterministic:
    """Single fixed effect."""


@dataclass(frozen=True)
class Random:
    """One of several weighted numeric outcomes."""

    distribution: Distribution


@dataclass(frozen=True)
class Choice:
    """Requires an external decision."""


Determinism = Union[Deterministic, Random, Choice]
