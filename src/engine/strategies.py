"""
Decision policies: which power to spend on an observed roll.

A strategy is any pure callable (bet, dice) -> Power. The four built-in
policies are registered in STRATEGIES in their fixed report order:

    no_power                  — never use a power (baseline)
    reroll_if_losing          — reroll whenever the roll loses
    always_flip               — always flip the low die
    reroll_if_losing_or_flip  — on a loss, flip if that wins, else reroll
"""

from __future__ import annotations

from typing import Callable

from .dice import Dice
from .power import Power

# ─── Strategy type alias ──────────────────────────────────────────────────────

# strategy(bet, dice) -> Power
Strategy = Callable[[int, Dice], Power]


# ─── Built-in strategies ──────────────────────────────────────────────────────

def no_power(bet: int, dice: Dice) -> Power:
    return Power.NONE


def reroll_if_losing(bet: int, dice: Dice) -> Power:
    if dice.sum() < bet:
        return Power.REROLL
    return Power.NONE


def always_flip(bet: int, dice: Dice) -> Power:
    return Power.FLIP_ONE


def reroll_if_losing_or_flip(bet: int, dice: Dice) -> Power:
    """Keep a winning roll; otherwise flip if that alone wins, else reroll.

    Flip is checked before reroll, so it is chosen whenever it suffices.

    Examples:
        >>> reroll_if_losing_or_flip(7, Dice(2, 3))   # 4+3 = 7 wins
        <Power.FLIP_ONE: 3>
        >>> reroll_if_losing_or_flip(9, Dice(2, 3))   # 4+3 = 7 still loses
        <Power.REROLL: 2>
    """
    if bet <= dice.sum():
        return Power.NONE
    if bet <= dice.modify(Power.FLIP_ONE).sum():
        return Power.FLIP_ONE
    return Power.REROLL


# ─── Registry ─────────────────────────────────────────────────────────────────

STRATEGIES: dict[str, Strategy] = {
    "no_power": no_power,
    "reroll_if_losing": reroll_if_losing,
    "always_flip": always_flip,
    "reroll_if_losing_or_flip": reroll_if_losing_or_flip,
}

STRATEGY_LABELS: dict[str, str] = {
    "no_power": "No change",
    "reroll_if_losing": "Reroll if losing",
    "always_flip": "Flip if sum is < 5",
    "reroll_if_losing_or_flip": "If losing, flip (if applicable) or reroll",
}


def get_strategy(name: str) -> Strategy:
    """Look up a registered strategy by name.

    Raises:
        KeyError: If *name* is not registered.
    """
    try:
        return STRATEGIES[name]
    except KeyError:
        known = ", ".join(STRATEGIES)
        raise KeyError(f"Unknown strategy {name!r}. Known strategies: {known}") from None


def strategy_name(strategy: Strategy) -> str:
    """Registry name of *strategy*, or its __name__ for unregistered callables."""
    for name, fn in STRATEGIES.items():
        if fn is strategy:
            return name
    return getattr(strategy, "__name__", repr(strategy))
