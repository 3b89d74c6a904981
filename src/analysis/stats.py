"""Streaming averages for Monte Carlo payouts.

Trial counts run into the millions per bet, so payouts are folded into a
running (count, sum, sum of squares) accumulator instead of being stored.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np
from scipy import stats


@dataclass
class RunningMean:
    """Running count, sum and sum of squares of a numeric stream.

    Attributes:
        count:    Number of values pushed.
        total:    Sum of pushed values.
        total_sq: Sum of squared pushed values (for the sample std).
    """

    count: int = 0
    total: float = 0.0
    total_sq: float = 0.0

    def push(self, value: float) -> None:
        self.count += 1
        self.total += value
        self.total_sq += value * value

    def push_many(self, values: np.ndarray) -> None:
        """Fold a whole chunk of values in one step."""
        arr = np.asarray(values, dtype=np.float64)
        self.count += int(arr.size)
        self.total += float(arr.sum())
        self.total_sq += float(np.dot(arr, arr))

    @property
    def mean(self) -> float:
        if self.count == 0:
            raise ValueError("Cannot average an empty sequence.")
        return self.total / self.count

    @property
    def std(self) -> float:
        """Sample standard deviation (ddof=1); 0.0 for fewer than two values."""
        if self.count < 2:
            return 0.0
        mean = self.mean
        var = (self.total_sq - self.count * mean * mean) / (self.count - 1)
        # Rounding can push a zero variance slightly negative.
        return math.sqrt(max(var, 0.0))

    def ci_halfwidth(self, confidence: float = 0.95) -> float:
        """Normal-approximation half-width of the confidence interval for the mean."""
        if self.count == 0:
            raise ValueError("Cannot build an interval for an empty sequence.")
        z = float(stats.norm.ppf(0.5 + confidence / 2.0))
        return z * self.std / math.sqrt(self.count)


def average(values: Iterable[float]) -> float:
    """Arithmetic mean of a finite iterable, consumed lazily.

    Raises:
        ValueError: If *values* is empty.

    Examples:
        >>> average(x for x in (2, 4, 9))
        5.0
    """
    acc = RunningMean()
    for value in values:
        acc.push(value)
    return acc.mean
