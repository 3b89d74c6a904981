"""
Monte Carlo simulator for the dice-bet game.

For every bet 2..12, plays many independent trials under a strategy and
averages the payouts into an Outcome (one expectation per bet).

One trial:
    roll → power = strategy(bet, roll) → roll.modify(power) → gold(bet)

Two equivalent execution paths:
    - scalar      calls outcome() once per trial (reference implementation).
    - vectorized  tabulates the strategy over the 21 canonical rolls once per
                  bet, then resolves trials in NumPy chunks of at most
                  batch_size rolls. Chunks stream into a RunningMean and are
                  never concatenated.

Both paths produce statistically equivalent means, not bit-identical ones.

Usage:
    PYTHONPATH=. python -m src.analysis.simulator
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from src.analysis.report import format_outcome_table
from src.analysis.stats import RunningMean
from src.engine.dice import BETS, FACES, Dice, all_dice, dice_index
from src.engine.power import Power
from src.engine.strategies import STRATEGIES, Strategy, strategy_name

logger = logging.getLogger(__name__)

DEFAULT_TRIALS: int = 1_000_000
DEFAULT_BATCH_SIZE: int = 100_000

# _INDEX_GRID[d1, d2] -> position of the canonical roll in all_dice().
_INDEX_GRID: np.ndarray = np.zeros((FACES + 1, FACES + 1), dtype=np.intp)
for _a in range(1, FACES + 1):
    for _b in range(1, FACES + 1):
        _INDEX_GRID[_a, _b] = dice_index(_a, _b)


# ─── Result type ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Outcome:
    """Per-bet expectations for one strategy.

    Attributes:
        strategy: Registry name of the strategy simulated.
        trials:   Trials run at each bet.
        means:    Mean payout per bet, 11 values for bets 2..12 ascending.
        stds:     Sample standard deviation of the payout per bet.
        ci_halfwidths: Half-width of the 95% normal-approximation interval
                  around each mean.
    """

    strategy: str
    trials: int
    means: tuple[float, ...]
    stds: tuple[float, ...]
    ci_halfwidths: tuple[float, ...]

    def expectation(self, bet: int) -> float:
        return self.means[BETS.index(bet)]

    def ci_95(self, bet: int) -> tuple[float, float]:
        """95% confidence interval for the expectation at *bet*."""
        i = BETS.index(bet)
        return self.means[i] - self.ci_halfwidths[i], self.means[i] + self.ci_halfwidths[i]

    def best_bet(self) -> tuple[int, float]:
        """(bet, expectation) with the highest mean; ties go to the lower bet."""
        best = max(range(len(BETS)), key=lambda i: (self.means[i], -BETS[i]))
        return BETS[best], self.means[best]

    def rows(self) -> list[tuple[int, float]]:
        return list(zip(BETS, self.means))

    def __str__(self) -> str:
        return format_outcome_table(self)


# ─── Validation ───────────────────────────────────────────────────────────────


def _validate_trials(trials: int) -> None:
    if isinstance(trials, bool) or not isinstance(trials, (int, np.integer)):
        raise ValueError(f"trials must be a positive integer, got {trials!r}.")
    if trials <= 0:
        raise ValueError(f"trials must be a positive integer, got {trials}.")


# ─── Single trial ─────────────────────────────────────────────────────────────


def outcome(
    strategy: Strategy,
    bet: int,
    rng: np.random.Generator | None = None,
) -> int:
    """Play one trial at *bet* and return the gold paid.

    Args:
        strategy: Callable(bet, dice) → Power.
        bet:      Bet in 2..12.
        rng:      Generator for the roll (and any reroll). None = fresh.
    """
    dice = Dice.roll(rng)
    return dice.modify(strategy(bet, dice), rng).gold(bet)


# ─── Vectorized trials ────────────────────────────────────────────────────────


def _tabulate(strategy: Strategy, bet: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Resolve *strategy* at *bet* over the 21 canonical rolls.

    Returns:
        plain_payout: gold(bet) of each canonical roll, unmodified.
        fixed_payout: gold(bet) after the chosen power (0 where it rerolls).
        rerolls:      bool mask of canonical rolls where the strategy rerolls.
    """
    dice = all_dice()
    plain = np.empty(len(dice), dtype=np.float64)
    fixed = np.zeros(len(dice), dtype=np.float64)
    rerolls = np.zeros(len(dice), dtype=bool)
    for i, d in enumerate(dice):
        plain[i] = d.gold(bet)
        power = strategy(bet, d)
        if power is Power.REROLL:
            rerolls[i] = True
        else:
            fixed[i] = d.modify(power).gold(bet)
    return plain, fixed, rerolls


def _roll_indices(rng: np.random.Generator, n: int) -> np.ndarray:
    faces = rng.integers(1, FACES + 1, size=(n, 2))
    return _INDEX_GRID[faces[:, 0], faces[:, 1]]


def _batch_payouts(
    table: tuple[np.ndarray, np.ndarray, np.ndarray],
    n: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Payouts of *n* independent trials as a float64 array."""
    plain, fixed, rerolls = table
    idx = _roll_indices(rng, n)
    payouts = fixed[idx]
    mask = rerolls[idx]
    n_reroll = int(mask.sum())
    if n_reroll:
        payouts[mask] = plain[_roll_indices(rng, n_reroll)]
    return payouts


# ─── Averaging driver ─────────────────────────────────────────────────────────


def avg_outcome(
    strategy: Strategy,
    trials: int = DEFAULT_TRIALS,
    seed: int | None = None,
    *,
    vectorized: bool = True,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> Outcome:
    """Average *trials* independent payouts at every bet 2..12.

    Args:
        strategy:   Callable(bet, dice) → Power.
        trials:     Trials per bet. Must be a positive integer.
        seed:       Seed for numpy.random.default_rng. None for a
                    non-deterministic run.
        vectorized: Resolve trials in NumPy chunks (fast) instead of one
                    outcome() call per trial.
        batch_size: Maximum rolls held in memory per chunk.

    Returns:
        Outcome with 11 means in ascending bet order.

    Raises:
        ValueError: If trials or batch_size is not a positive integer.
    """
    _validate_trials(trials)
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}.")

    rng = np.random.default_rng(seed)
    name = strategy_name(strategy)
    means: list[float] = []
    stds: list[float] = []
    halfwidths: list[float] = []

    for bet in BETS:
        acc = RunningMean()
        if vectorized:
            table = _tabulate(strategy, bet)
            remaining = trials
            while remaining > 0:
                n = min(batch_size, remaining)
                acc.push_many(_batch_payouts(table, n, rng))
                remaining -= n
        else:
            for _ in range(trials):
                acc.push(outcome(strategy, bet, rng))
        means.append(acc.mean)
        stds.append(acc.std)
        halfwidths.append(acc.ci_halfwidth())
        logger.debug("%s bet=%d mean=%.4f", name, bet, acc.mean)

    return Outcome(
        strategy=name,
        trials=trials,
        means=tuple(means),
        stds=tuple(stds),
        ci_halfwidths=tuple(halfwidths),
    )


def run_all(
    trials: int = DEFAULT_TRIALS,
    seed: int | None = None,
    strategies: dict[str, Strategy] | None = None,
    *,
    vectorized: bool = True,
) -> dict[str, Outcome]:
    """Simulate every strategy in *strategies* (default: the built-in four).

    Each strategy gets its own generator, seeded from *seed* by position.

    Raises:
        ValueError: If trials is not a positive integer or seed is negative.
    """
    _validate_trials(trials)
    if seed is not None and seed < 0:
        raise ValueError(f"seed must be non-negative, got {seed}.")
    if strategies is None:
        strategies = STRATEGIES

    seeds: list[int | None]
    if seed is None:
        seeds = [None] * len(strategies)
    else:
        seeds = [int(s) for s in np.random.SeedSequence(seed).generate_state(len(strategies))]

    results: dict[str, Outcome] = {}
    for (name, strategy), strategy_seed in zip(strategies.items(), seeds):
        logger.info("Simulating %s (%s trials per bet)", name, f"{trials:,}")
        start = time.perf_counter()
        results[name] = avg_outcome(strategy, trials, strategy_seed, vectorized=vectorized)
        logger.info("Finished %s in %.2fs", name, time.perf_counter() - start)
    return results


# ─── __main__ ─────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    from src.analysis.report import print_report

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print_report(run_all(DEFAULT_TRIALS), DEFAULT_TRIALS)
