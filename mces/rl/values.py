"""Exact action-value bookkeeping for tabular Monte Carlo control."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from numbers import Integral, Rational, Real
from typing import Dict, Hashable, Iterator, List, Union

Reward = Union[Real, Decimal]
ExactValue = Union[int, Fraction]


def exact_reward(reward: Reward) -> ExactValue:
    """Return ``reward`` as an exact int or Fraction.

    Floats and decimals are converted exactly; NaN and infinities are
    rejected since they cannot take part in an exact mean.
    """
    if isinstance(reward, Decimal):
        if not reward.is_finite():
            raise ValueError(f"reward must be finite, got {reward!r}")
        return Fraction(reward)
    if isinstance(reward, bool) or not isinstance(reward, Real):
        raise TypeError(f"reward must be a real number, got {reward!r}")
    if isinstance(reward, Integral):
        return int(reward)
    if isinstance(reward, Rational):
        return Fraction(reward.numerator, reward.denominator)
    if not math.isfinite(reward):
        raise ValueError(f"reward must be finite, got {reward!r}")
    return Fraction(float(reward))


@dataclass(frozen=True)
class RunningMean:
    """Sum of observed returns and how many there were."""

    total: ExactValue = 0
    count: int = 0

    def add(self, ret: ExactValue) -> "RunningMean":
        return RunningMean(self.total + ret, self.count + 1)

    def merge(self, other: "RunningMean") -> "RunningMean":
        return RunningMean(self.total + other.total, self.count + other.count)

    @property
    def value(self) -> Fraction:
        if self.count == 0:
            raise ZeroDivisionError("mean of zero observed returns")
        return Fraction(self.total) / self.count


class ActionValueTable:
    """Map each visited state to the running mean return of every tried action.

    A state appears only once at least one of its actions has an estimate, and
    entries are never removed. Actions keep the order in which they were first
    tried for their state, which is also the tie-break order of
    :meth:`greedy_action`.
    """

    def __init__(self) -> None:
        self._table: Dict[Hashable, Dict[Hashable, RunningMean]] = {}

    def __contains__(self, state: Hashable) -> bool:
        return state in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._table)

    def states(self) -> List[Hashable]:
        return list(self._table)

    def actions(self, state: Hashable) -> List[Hashable]:
        return list(self._table[state])

    def estimate(self, state: Hashable, action: Hashable) -> RunningMean:
        return self._table[state][action]

    def mean(self, state: Hashable, action: Hashable) -> Fraction:
        return self._table[state][action].value

    def num_pairs(self) -> int:
        return sum(len(values) for values in self._table.values())

    def update(self, state: Hashable, action: Hashable, ret: Reward) -> Fraction:
        """Fold one observed return into ``Q[state][action]``."""
        ret = exact_reward(ret)
        values = self._table.setdefault(state, {})
        estimate = values.get(action, RunningMean()).add(ret)
        values[action] = estimate
        return estimate.value

    def greedy_action(self, state: Hashable) -> Hashable:
        # max() keeps the first of several equal maxima
        values = self._table[state]
        return max(values, key=lambda action: values[action].value)

    def greedy_policy(self) -> Dict[Hashable, Hashable]:
        return {state: self.greedy_action(state) for state in self._table}

    def merge(self, other: "ActionValueTable") -> None:
        """Fold another table's sums and counts into this one.

        Sums and counts commute, so replicas trained independently can be
        combined in any order with the same result.
        """
        for state, values in other._table.items():
            mine = self._table.setdefault(state, {})
            for action, estimate in values.items():
                mine[action] = mine.get(action, RunningMean()).merge(estimate)

    def as_dict(self) -> Dict[Hashable, Dict[Hashable, Fraction]]:
        return {
            state: {action: estimate.value for action, estimate in values.items()}
            for state, values in self._table.items()
        }


__all__ = ["ActionValueTable", "ExactValue", "Reward", "RunningMean", "exact_reward"]
