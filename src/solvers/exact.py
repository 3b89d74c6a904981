"""
Exact expected payout by enumerating the roll space.

Two fair dice have 21 canonical rolls (6 doubles at 1/36, 15 mixed pairs
at 2/36). For a bet and strategy the expectation is

    E[gold] = Σ_d  P(d) · payoff(d)

    payoff(d) = baseline_expectation(bet)        if strategy rerolls d
              = d.modify(power).gold(bet)        otherwise

A reroll replaces the roll with an independent fresh one, and no power is
available afterwards, so its value is exactly the no-power expectation.

Used to cross-validate the Monte Carlo simulator: at 1M trials per bet the
simulated mean should sit within ~0.01 gold of these values.
"""

from __future__ import annotations

import functools

from src.engine.dice import BETS, all_dice, roll_probability
from src.engine.power import Power
from src.engine.strategies import STRATEGIES, Strategy


@functools.lru_cache(maxsize=None)
def baseline_expectation(bet: int) -> float:
    """Expected gold for *bet* with no power.

    Examples:
        >>> round(baseline_expectation(2), 9)
        2.0
    """
    return sum(roll_probability(d) * d.gold(bet) for d in all_dice())


def expected_payout(strategy: Strategy, bet: int) -> float:
    """Expected gold for *bet* when *strategy* chooses the power."""
    ev = 0.0
    for d in all_dice():
        power = strategy(bet, d)
        if power is Power.REROLL:
            payoff = baseline_expectation(bet)
        else:
            payoff = d.modify(power).gold(bet)
        ev += roll_probability(d) * payoff
    return ev


@functools.lru_cache(maxsize=None)
def solve(strategy: Strategy) -> tuple[float, ...]:
    """Exact expectations for bets 2..12 (ascending) under *strategy*."""
    return tuple(expected_payout(strategy, bet) for bet in BETS)


def optimal_bet(strategy: Strategy) -> tuple[int, float]:
    """(bet, expectation) maximizing the exact expectation; ties go low."""
    evs = solve(strategy)
    best = max(range(len(BETS)), key=lambda i: (evs[i], -BETS[i]))
    return BETS[best], evs[best]


def solve_all(strategies: dict[str, Strategy] | None = None) -> dict[str, tuple[float, ...]]:
    if strategies is None:
        strategies = STRATEGIES
    return {name: solve(fn) for name, fn in strategies.items()}


# ─── __main__ ─────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    from src.engine.strategies import STRATEGY_LABELS

    for name, fn in STRATEGIES.items():
        bet, ev = optimal_bet(fn)
        print(f"{STRATEGY_LABELS[name]:<42}  best bet {bet:>2}  E[gold] = {ev:.4f}")
