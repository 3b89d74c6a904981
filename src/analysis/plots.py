"""Matplotlib figures for the dice-bet simulator.

    build_decision_matrix(strategy)              — (11, 21) power-code matrix
    plot_expectation_curves(outcomes, exact, ...) — E[gold] vs bet, one line per strategy
    plot_decision_heatmap(strategy, ...)         — which power is used for each (bet, roll)

Matrix convention (decision matrix):
    Shape  : (11, 21) — rows = bets [2..12], cols = canonical rolls 1-1 … 6-6
    Values : 0.0 = NONE, 1.0 = REROLL, 2.0 = FLIP_ONE
"""

from __future__ import annotations

import matplotlib
import matplotlib.colors
import matplotlib.figure
import matplotlib.pyplot as plt
import numpy as np

from src.analysis.simulator import Outcome
from src.engine.dice import BETS, all_dice
from src.engine.power import Power
from src.engine.strategies import STRATEGY_LABELS, Strategy, strategy_name

# ─── Constants ────────────────────────────────────────────────────────────────

POWER_CODES: dict[Power, float] = {
    Power.NONE: 0.0,
    Power.REROLL: 1.0,
    Power.FLIP_ONE: 2.0,
}
_POWER_MARKS: dict[float, str] = {0.0: "·", 1.0: "R", 2.0: "F"}
_ROW_LABELS: list[str] = [str(b) for b in BETS]
_COL_LABELS: list[str] = [str(d) for d in all_dice()]

# Grey = keep, orange = reroll, blue = flip.
_POWER_CMAP = matplotlib.colors.ListedColormap(["#dddddd", "#ff7f0e", "#1f77b4"])


# ─── Data builders ────────────────────────────────────────────────────────────


def build_decision_matrix(strategy: Strategy) -> np.ndarray:
    """Return the power code chosen by *strategy* for every (bet, roll).

    Returns:
        float64 array of shape (11, 21).
    """
    dice = all_dice()
    matrix = np.empty((len(BETS), len(dice)), dtype=np.float64)
    for r, bet in enumerate(BETS):
        for c, d in enumerate(dice):
            matrix[r, c] = POWER_CODES[strategy(bet, d)]
    return matrix


# ─── Public plot functions ────────────────────────────────────────────────────


def plot_expectation_curves(
    outcomes: dict[str, Outcome],
    exact: dict[str, tuple[float, ...]] | None = None,
    *,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Plot simulated E[gold] against bet for each strategy.

    Args:
        outcomes:  Simulated outcomes keyed by strategy name.
        exact:     Optional exact expectations per strategy, drawn as dashed
                   lines in the same colour.
        show:      If True, call plt.show() after rendering.
        save_path: If not None, save the figure to this path before showing.

    Returns:
        matplotlib.figure.Figure.
    """
    fig, ax = plt.subplots(figsize=(8, 5))

    for name, outcome in outcomes.items():
        label = STRATEGY_LABELS.get(name, name)
        (line,) = ax.plot(BETS, outcome.means, marker="o", label=label)
        if exact is not None and name in exact:
            ax.plot(BETS, exact[name], linestyle="--", color=line.get_color(), alpha=0.6)

    ax.set_xticks(list(BETS))
    ax.set_xlabel("Bet", fontsize=10)
    ax.set_ylabel("Expected gold", fontsize=10)
    n = next(iter(outcomes.values())).trials if outcomes else 0
    ax.set_title(f"Expected payout by bet (n = {n:,})", fontsize=12, fontweight="bold")
    ax.grid(alpha=0.3)
    ax.legend(fontsize=8)

    plt.tight_layout()

    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight", dpi=120)
    if show:
        plt.show()

    return fig


def plot_decision_heatmap(
    strategy: Strategy,
    *,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Plot the power *strategy* spends on each canonical roll at each bet.

    Cells are annotated "·" (keep), "R" (reroll) or "F" (flip).
    """
    data = build_decision_matrix(strategy)
    name = strategy_name(strategy)

    fig, ax = plt.subplots(figsize=(12, 5))
    ax.imshow(data, cmap=_POWER_CMAP, vmin=0.0, vmax=2.0, aspect="auto")

    ax.set_xticks(range(len(_COL_LABELS)))
    ax.set_xticklabels(_COL_LABELS, fontsize=8, rotation=90)
    ax.set_yticks(range(len(_ROW_LABELS)))
    ax.set_yticklabels(_ROW_LABELS, fontsize=9)
    ax.set_xlabel("Roll", fontsize=9)
    ax.set_ylabel("Bet", fontsize=9)
    ax.set_title(STRATEGY_LABELS.get(name, name), fontsize=12, fontweight="bold")

    for r in range(data.shape[0]):
        for c in range(data.shape[1]):
            text_color = "black" if data[r, c] == 0.0 else "white"
            ax.text(
                c,
                r,
                _POWER_MARKS[data[r, c]],
                ha="center",
                va="center",
                fontsize=8,
                color=text_color,
                fontweight="bold",
            )

    plt.tight_layout()

    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight", dpi=120)
    if show:
        plt.show()

    return fig


# ─── Entry point ──────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import sys

    from src.analysis.simulator import run_all
    from src.engine.strategies import STRATEGIES
    from src.solvers.exact import solve_all

    trials = int(sys.argv[1]) if len(sys.argv) > 1 else 100_000
    print(f"Simulating {trials:,} trials per bet …")
    outcomes = run_all(trials, seed=42)

    plot_expectation_curves(outcomes, solve_all(), show=False, save_path="expectation_curves.png")
    for name, fn in STRATEGIES.items():
        plot_decision_heatmap(fn, show=False, save_path=f"decisions_{name}.png")
    print("Saved: expectation_curves.png, decisions_<strategy>.png")
