"""Interactive Plotly figures for the dice-bet simulator.

Three public functions:

    build_expectation_figure(outcomes, exact)
        — E[gold] vs bet, one line per strategy, hover shows 95% CI.
    build_decision_figure(strategy)
        — Heatmap of the power chosen for every (bet, roll); hover shows
          the roll sum and the action.
    save_lookup_html(fig, path)
        — Export any figure to a self-contained HTML file.
"""

from __future__ import annotations

import numpy as np
import plotly.graph_objects as go

from src.analysis.plots import build_decision_matrix
from src.analysis.simulator import Outcome
from src.engine.dice import BETS, all_dice
from src.engine.strategies import STRATEGY_LABELS, Strategy, strategy_name

# ─── Constants ────────────────────────────────────────────────────────────────

_COL_LABELS: list[str] = [str(d) for d in all_dice()]
_ROW_LABELS: list[str] = [str(b) for b in BETS]
_ACTION_NAMES: dict[float, str] = {0.0: "Keep", 1.0: "Reroll", 2.0: "Flip low die"}

# Stepped colorscale: 0 = keep (grey), 1 = reroll (orange), 2 = flip (blue).
_POWER_COLORSCALE: list[list] = [
    [0.0, "#dddddd"],
    [0.333, "#dddddd"],
    [0.334, "#ff7f0e"],
    [0.666, "#ff7f0e"],
    [0.667, "#1f77b4"],
    [1.0, "#1f77b4"],
]


# ─── Hover text builders ──────────────────────────────────────────────────────


def _build_decision_hover(data: np.ndarray) -> list[list[str]]:
    """Return an 11×21 list of hover strings for a decision heatmap."""
    dice = all_dice()
    rows: list[list[str]] = []
    for r, bet in enumerate(BETS):
        row: list[str] = []
        for c, d in enumerate(dice):
            row.append(
                f"Bet: {bet}<br>Roll: {d} (sum {d.sum()})<br>"
                f"Action: {_ACTION_NAMES[data[r, c]]}"
            )
        rows.append(row)
    return rows


# ─── Figure builders ──────────────────────────────────────────────────────────


def build_expectation_figure(
    outcomes: dict[str, Outcome],
    exact: dict[str, tuple[float, ...]] | None = None,
) -> go.Figure:
    """Line chart of simulated expectation per bet, with optional exact lines.

    Args:
        outcomes: Simulated outcomes keyed by strategy name.
        exact:    Optional exact expectations per strategy (dashed traces).

    Returns:
        go.Figure with one trace per strategy (plus one per exact series).
    """
    fig = go.Figure()
    for name, outcome in outcomes.items():
        label = STRATEGY_LABELS.get(name, name)
        hover = []
        for bet, mean in outcome.rows():
            low, high = outcome.ci_95(bet)
            hover.append(f"Bet: {bet}<br>E[gold]: {mean:.4f}<br>95% CI: [{low:.4f}, {high:.4f}]")
        fig.add_trace(
            go.Scatter(
                x=list(BETS),
                y=list(outcome.means),
                mode="lines+markers",
                name=label,
                text=hover,
                hoverinfo="text",
            )
        )
        if exact is not None and name in exact:
            fig.add_trace(
                go.Scatter(
                    x=list(BETS),
                    y=list(exact[name]),
                    mode="lines",
                    name=f"{label} (exact)",
                    line={"dash": "dash"},
                )
            )

    n = next(iter(outcomes.values())).trials if outcomes else 0
    fig.update_layout(
        title=f"Expected payout by bet (n = {n:,})",
        xaxis_title="Bet",
        yaxis_title="Expected gold",
        xaxis={"tickmode": "array", "tickvals": list(BETS)},
    )
    return fig


def build_decision_figure(strategy: Strategy) -> go.Figure:
    """Interactive heatmap of the power *strategy* uses at each (bet, roll)."""
    data = build_decision_matrix(strategy)
    name = strategy_name(strategy)
    fig = go.Figure(
        go.Heatmap(
            z=data,
            x=_COL_LABELS,
            y=_ROW_LABELS,
            text=_build_decision_hover(data),
            hoverinfo="text",
            colorscale=_POWER_COLORSCALE,
            zmin=0.0,
            zmax=2.0,
            showscale=False,
        )
    )
    fig.update_layout(
        title=STRATEGY_LABELS.get(name, name),
        xaxis_title="Roll",
        yaxis_title="Bet",
        xaxis={"type": "category"},
        yaxis={"type": "category"},
    )
    return fig


# ─── HTML export ───────────────────────────────────────────────────────────────


def save_lookup_html(fig: go.Figure, path: str) -> None:
    """Save a Plotly figure to an HTML file (Plotly JS loaded from the CDN)."""
    fig.write_html(path, include_plotlyjs="cdn")


# ─── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import sys

    from src.analysis.simulator import run_all
    from src.engine.strategies import STRATEGIES
    from src.solvers.exact import solve_all

    trials = int(sys.argv[1]) if len(sys.argv) > 1 else 100_000
    print(f"Simulating {trials:,} trials per bet …")
    outcomes = run_all(trials, seed=42)

    save_lookup_html(build_expectation_figure(outcomes, solve_all()), "expectation_lookup.html")
    for name, fn in STRATEGIES.items():
        save_lookup_html(build_decision_figure(fn), f"decisions_{name}.html")
    print("Saved: expectation_lookup.html, decisions_<strategy>.html")
