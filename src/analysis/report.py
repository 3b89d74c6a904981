"""Text report for simulated strategy outcomes.

    format_outcome_table(outcome)     — markdown-style "Bet | Exp" table
    print_outcome(label, outcome)     — label line + table
    print_report(outcomes, trials)    — "n = ..." header + one section per strategy
    print_best_bets(outcomes, exact)  — best bet per strategy, optionally vs exact
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.engine.dice import MIN_BET
from src.engine.strategies import STRATEGY_LABELS

if TYPE_CHECKING:
    from src.analysis.simulator import Outcome


def format_outcome_table(outcome: Outcome) -> str:
    """Render an Outcome as a two-column table, one row per bet.

    Examples:
        Bet | Exp
        --- | ---
          2 |             2.00
          3 |             2.97
    """
    lines = ["Bet | Exp", "--- | ---"]
    for bet, mean in outcome.rows():
        lines.append(f" {bet:>2} | {mean:>16.2f}")
    return "\n".join(lines) + "\n"


def _label(name: str) -> str:
    return STRATEGY_LABELS.get(name, name)


def print_outcome(label: str, outcome: Outcome) -> None:
    print(f"{label}:")
    print(format_outcome_table(outcome))


def print_report(outcomes: dict[str, Outcome], trials: int) -> None:
    """Print the trial count followed by one labeled table per strategy."""
    print(f"n = {trials}")
    for name, outcome in outcomes.items():
        print_outcome(_label(name), outcome)


def print_best_bets(
    outcomes: dict[str, Outcome],
    exact: dict[str, tuple[float, ...]] | None = None,
) -> None:
    """Print the highest-expectation bet for each strategy.

    Args:
        outcomes: Simulated outcomes keyed by strategy name.
        exact:    Optional exact expectations (11 per strategy, bets 2..12)
                  to show alongside the simulated value.
    """
    print("=" * 64)
    print("Best bet per strategy")
    print("=" * 64)
    header = f"  {'Strategy':<42}  {'Bet':>3}  {'Sim':>6}"
    if exact is not None:
        header += f"  {'Exact':>6}"
    print(header)

    for name, outcome in outcomes.items():
        bet, mean = outcome.best_bet()
        row = f"  {_label(name):<42}  {bet:>3}  {mean:>6.3f}"
        if exact is not None and name in exact:
            row += f"  {exact[name][bet - MIN_BET]:>6.3f}"
        print(row)
    print()
