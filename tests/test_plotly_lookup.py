"""Tests for the interactive Plotly figures (src/analysis/plotly_lookup.py).

Figures are in-memory objects; the save helper writes HTML without
rendering, so no display server is required.
"""

from __future__ import annotations

import os

import matplotlib

matplotlib.use("Agg")  # plotly_lookup imports the matplotlib module

import plotly.graph_objects as go
import pytest

from src.analysis.plotly_lookup import (
    build_decision_figure,
    build_expectation_figure,
    save_lookup_html,
)
from src.analysis.simulator import Outcome, run_all
from src.engine.strategies import always_flip, reroll_if_losing_or_flip
from src.solvers.exact import solve_all


@pytest.fixture(scope="module")
def outcomes() -> dict[str, Outcome]:
    return run_all(2_000, seed=4)


# ─── build_expectation_figure ─────────────────────────────────────────────────


class TestBuildExpectationFigure:
    def test_returns_figure(self, outcomes) -> None:
        assert isinstance(build_expectation_figure(outcomes), go.Figure)

    def test_one_trace_per_strategy(self, outcomes) -> None:
        assert len(build_expectation_figure(outcomes).data) == 4

    def test_exact_traces(self, outcomes) -> None:
        fig = build_expectation_figure(outcomes, solve_all())
        assert len(fig.data) == 8
        assert sum(1 for t in fig.data if t.name.endswith("(exact)")) == 4

    def test_x_is_bets(self, outcomes) -> None:
        fig = build_expectation_figure(outcomes)
        assert list(fig.data[0].x) == list(range(2, 13))

    def test_hover_contains_ci(self, outcomes) -> None:
        fig = build_expectation_figure(outcomes)
        assert all("95% CI" in text for text in fig.data[0].text)

    def test_title_contains_trials(self, outcomes) -> None:
        fig = build_expectation_figure(outcomes)
        assert "2,000" in fig.layout.title.text


# ─── build_decision_figure ────────────────────────────────────────────────────


class TestBuildDecisionFigure:
    def test_returns_figure(self) -> None:
        assert isinstance(build_decision_figure(always_flip), go.Figure)

    def test_single_heatmap(self) -> None:
        fig = build_decision_figure(always_flip)
        assert len(fig.data) == 1
        assert fig.data[0].type == "heatmap"

    def test_zmin_zmax(self) -> None:
        trace = build_decision_figure(reroll_if_losing_or_flip).data[0]
        assert trace.zmin == 0.0
        assert trace.zmax == 2.0

    def test_hover_contains_action(self) -> None:
        trace = build_decision_figure(reroll_if_losing_or_flip).data[0]
        flat = [cell for row in trace.text for cell in row]
        assert len(flat) == 11 * 21
        assert any("Action: Flip low die" in cell for cell in flat)
        assert any("Action: Reroll" in cell for cell in flat)
        assert any("Action: Keep" in cell for cell in flat)


# ─── save_lookup_html ─────────────────────────────────────────────────────────


class TestSaveLookupHtml:
    def test_writes_file(self, outcomes, tmp_path) -> None:
        path = tmp_path / "lookup.html"
        save_lookup_html(build_expectation_figure(outcomes), str(path))
        assert os.path.exists(path)
        assert "plotly" in path.read_text().lower()
