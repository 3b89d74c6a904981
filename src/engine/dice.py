"""
Dice value type, rolling, power modification and payout.

A roll is a pair of six-sided faces stored low-first, so Dice(5, 2) and
Dice(2, 5) are the same value. There are 21 distinct canonical rolls:
6 doubles (probability 1/36 each) and 15 mixed pairs (2/36 each).

Payout rule:
    bet <= sum  →  bet gold
    bet >  sum  →  LOSS_PAYOUT gold
"""

from __future__ import annotations

import functools
from dataclasses import dataclass

import numpy as np

from .power import Power

# ─── Constants ────────────────────────────────────────────────────────────────

FACES: int = 6
MIN_BET: int = 2
MAX_BET: int = 12
BETS: tuple[int, ...] = tuple(range(MIN_BET, MAX_BET + 1))

LOSS_PAYOUT: int = 2
"""Gold paid when the roll falls short of the bet."""

FLIP_FACE: int = 4
"""Face shown by the low die after FLIP_ONE."""


# ─── Dice ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Dice:
    """Immutable, order-normalised pair of die faces (d1 <= d2).

    Frozen (hashable) so canonical rolls can key probability and decision
    tables.

    Examples:
        >>> Dice(5, 2)
        Dice(d1=2, d2=5)
        >>> Dice(5, 2) == Dice(2, 5)
        True
    """
    d1: int
    d2: int

    def __post_init__(self) -> None:
        for face in (self.d1, self.d2):
            if isinstance(face, bool) or not isinstance(face, (int, np.integer)):
                raise ValueError(f"Die face must be an integer, got {face!r}.")
            if not 1 <= face <= FACES:
                raise ValueError(f"Die face must be in 1..{FACES}, got {face}.")
        low, high = sorted((int(self.d1), int(self.d2)))
        object.__setattr__(self, "d1", low)
        object.__setattr__(self, "d2", high)

    @classmethod
    def new(cls, d1: int, d2: int) -> Dice:
        return cls(d1, d2)

    @classmethod
    def roll(cls, rng: np.random.Generator | None = None) -> Dice:
        """Roll two independent fair dice.

        Args:
            rng: Generator to draw from. None draws from a freshly seeded
                 generator (no reproducibility).
        """
        if rng is None:
            rng = np.random.default_rng()
        d1, d2 = rng.integers(1, FACES + 1, size=2)
        return cls(int(d1), int(d2))

    def sum(self) -> int:
        return self.d1 + self.d2

    def modify(self, power: Power, rng: np.random.Generator | None = None) -> Dice:
        """Return the roll that results from spending *power* on this one.

        Examples:
            >>> Dice(1, 5).modify(Power.FLIP_ONE)
            Dice(d1=4, d2=5)
            >>> Dice(4, 6).modify(Power.FLIP_ONE)
            Dice(d1=4, d2=6)
        """
        if power is Power.NONE:
            return self
        if power is Power.REROLL:
            return Dice.roll(rng)
        if power is Power.FLIP_ONE:
            if self.d1 < FLIP_FACE:
                return Dice(FLIP_FACE, self.d2)
            return self
        raise ValueError(f"Unknown power: {power!r}")

    def gold(self, bet: int) -> int:
        """Payout for *bet* against this roll.

        Examples:
            >>> Dice(3, 4).gold(7)
            7
            >>> Dice(3, 4).gold(8)
            2
        """
        return bet if bet <= self.sum() else LOSS_PAYOUT

    def __str__(self) -> str:
        return f"{self.d1}-{self.d2}"


# ─── Canonical roll space ─────────────────────────────────────────────────────

@functools.lru_cache(maxsize=None)
def all_dice() -> tuple[Dice, ...]:
    """Return the 21 canonical rolls ordered by (d1, d2).

    Examples:
        >>> len(all_dice())
        21
        >>> all_dice()[0], all_dice()[-1]
        (Dice(d1=1, d2=1), Dice(d1=6, d2=6))
    """
    return tuple(
        Dice(d1, d2)
        for d1 in range(1, FACES + 1)
        for d2 in range(d1, FACES + 1)
    )


def roll_probability(dice: Dice) -> float:
    """Probability of rolling *dice* with two fair dice.

    Examples:
        >>> roll_probability(Dice(3, 3))  # 1/36
        0.027777777777777776
        >>> roll_probability(Dice(2, 5)) == 2 / 36
        True
    """
    ways = 1 if dice.d1 == dice.d2 else 2
    return ways / (FACES * FACES)


def dice_index(d1: int, d2: int) -> int:
    """Position of the canonical roll (min, max) within all_dice().

    Examples:
        >>> dice_index(1, 1)
        0
        >>> dice_index(6, 6)
        20
        >>> all_dice()[dice_index(5, 2)]
        Dice(d1=2, d2=5)
    """
    low, high = min(d1, d2), max(d1, d2)
    # Rows above `low` contribute FACES, FACES-1, ... entries.
    offset = (low - 1) * FACES - (low - 1) * (low - 2) // 2
    return offset + (high - low)
