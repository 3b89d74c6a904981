"""Dice Bet Simulator — Streamlit Dashboard.

Three-tab interactive dashboard for exploring expected payouts:
  Tab 1 — Expectation Tables   (simulated vs exact, best bet per strategy)
  Tab 2 — Expectation Curves   (Plotly, hover for 95% CI)
  Tab 3 — Strategy Decisions   (which power each strategy uses per bet/roll)

Run:
    PYTHONPATH=. streamlit run app.py
"""

from __future__ import annotations

import contextlib
import io

import matplotlib

matplotlib.use("Agg")  # must be set before any other matplotlib imports

import pandas as pd
import streamlit as st

# ─── Page config ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Dice Bet Simulator",
    page_icon="🎲",
    layout="wide",
)


@st.cache_resource
def _load_modules():
    """Import analysis modules once (cached for the process lifetime)."""
    from src.analysis.plotly_lookup import build_decision_figure, build_expectation_figure
    from src.analysis.plots import plot_expectation_curves
    from src.analysis.report import print_best_bets
    from src.engine.dice import BETS
    from src.engine.strategies import STRATEGIES, STRATEGY_LABELS
    from src.solvers.exact import solve_all

    return {
        "BETS": BETS,
        "STRATEGIES": STRATEGIES,
        "STRATEGY_LABELS": STRATEGY_LABELS,
        "build_decision_figure": build_decision_figure,
        "build_expectation_figure": build_expectation_figure,
        "plot_expectation_curves": plot_expectation_curves,
        "print_best_bets": print_best_bets,
        "exact": solve_all(),
    }


@st.cache_data
def _simulate(trials: int, seed: int):
    """Run all strategies and cache the outcomes (keyed on trials and seed)."""
    from src.analysis.simulator import run_all

    return run_all(trials, seed=seed)


# ─── Sidebar controls ─────────────────────────────────────────────────────────

with st.sidebar:
    st.title("🎲 Dice Bet Simulator")
    st.markdown("---")

    n_trials = st.slider(
        "Trials per bet",
        min_value=10_000,
        max_value=1_000_000,
        value=200_000,
        step=10_000,
    )
    seed = st.number_input("Seed", min_value=0, value=42, step=1)

    st.markdown("---")
    st.caption("Bet 2–12 · win pays the bet · loss pays 2")

m = _load_modules()

with st.spinner(f"Simulating {n_trials:,} trials per bet …"):
    outcomes = _simulate(int(n_trials), int(seed))

tab1, tab2, tab3 = st.tabs(
    [
        "Expectation Tables",
        "Expectation Curves",
        "Strategy Decisions",
    ]
)

# ── Tab 1: Expectation Tables ─────────────────────────────────────────────────

with tab1:
    st.header("Expected gold by bet")

    table = {"Bet": list(m["BETS"])}
    for name, outcome in outcomes.items():
        label = m["STRATEGY_LABELS"][name]
        table[f"{label} (sim)"] = [round(v, 3) for v in outcome.means]
        table[f"{label} (exact)"] = [round(v, 3) for v in m["exact"][name]]
    st.dataframe(pd.DataFrame(table), use_container_width=True, hide_index=True)

    st.markdown("---")
    st.subheader("Best bet per strategy")
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        m["print_best_bets"](outcomes, m["exact"])
    st.code(buf.getvalue(), language=None)

# ── Tab 2: Expectation Curves ─────────────────────────────────────────────────

with tab2:
    st.header("Expectation Curves")
    st.caption("Solid = simulated, dashed = exact. Hover for the 95% confidence interval.")
    fig = m["build_expectation_figure"](outcomes, m["exact"])
    st.plotly_chart(fig, use_container_width=True)

    st.markdown("---")
    st.subheader("Static figure")
    st.pyplot(m["plot_expectation_curves"](outcomes, m["exact"], show=False))

# ── Tab 3: Strategy Decisions ─────────────────────────────────────────────────

with tab3:
    st.header("Strategy Decisions")
    st.caption("Rows = bet | Cols = roll (low-high) | Grey = keep, Orange = reroll, Blue = flip")

    choice = st.selectbox(
        "Strategy",
        options=list(m["STRATEGIES"].keys()),
        format_func=lambda name: m["STRATEGY_LABELS"][name],
    )
    st.plotly_chart(
        m["build_decision_figure"](m["STRATEGIES"][choice]),
        use_container_width=True,
    )
