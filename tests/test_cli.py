"""End-to-end tests for the click entry point (src/cli.py)."""

from __future__ import annotations

import re

import pytest
from click.testing import CliRunner

from src.cli import main
from src.engine.dice import BETS
from src.engine.strategies import STRATEGIES, STRATEGY_LABELS

_ROW = re.compile(r"^ +(\d+) \| +(\d+\.\d{2})$")


def _rows(output: str) -> list[tuple[int, float]]:
    return [
        (int(m.group(1)), float(m.group(2)))
        for m in (_ROW.match(line) for line in output.splitlines())
        if m
    ]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCli:
    def test_small_run(self, runner) -> None:
        result = runner.invoke(main, ["-n", "5000", "--seed", "1"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines()[0] == "n = 5000"

    def test_four_labeled_tables(self, runner) -> None:
        result = runner.invoke(main, ["-n", "2000", "--seed", "1"])
        for name in STRATEGIES:
            assert f"{STRATEGY_LABELS[name]}:" in result.output
        rows = _rows(result.output)
        assert [bet for bet, _ in rows] == list(BETS) * 4

    def test_bet_two_row_is_two(self, runner) -> None:
        result = runner.invoke(main, ["-n", "2000", "--seed", "1"])
        rows = _rows(result.output)
        assert all(value == 2.0 for bet, value in rows if bet == 2)

    def test_strategy_filter(self, runner) -> None:
        result = runner.invoke(main, ["-n", "1000", "-s", "always_flip", "-s", "no_power"])
        assert result.exit_code == 0, result.output
        out = result.output
        # Registry order is kept even though options were given reversed.
        assert out.index("No change:") < out.index("Flip if sum is < 5:")
        assert "Reroll if losing:" not in out
        assert len(_rows(out)) == 22

    def test_unknown_strategy_rejected(self, runner) -> None:
        result = runner.invoke(main, ["-s", "martingale"])
        assert result.exit_code != 0

    @pytest.mark.parametrize("trials", ["0", "-3", "abc"])
    def test_invalid_trials_rejected(self, runner, trials) -> None:
        result = runner.invoke(main, ["-n", trials])
        assert result.exit_code != 0
        assert "trials" in result.output.lower()

    @pytest.mark.parametrize("seed", ["-1", "-42"])
    def test_negative_seed_rejected(self, runner, seed) -> None:
        result = runner.invoke(main, ["-n", "100", "--seed", seed])
        assert result.exit_code == 2
        assert "seed" in result.output.lower()

    def test_seed_zero_accepted(self, runner) -> None:
        result = runner.invoke(main, ["-n", "100", "--seed", "0", "-s", "no_power"])
        assert result.exit_code == 0, result.output

    def test_exact_flag(self, runner) -> None:
        result = runner.invoke(main, ["-n", "2000", "--seed", "2", "--exact"])
        assert result.exit_code == 0, result.output
        assert "Best bet per strategy" in result.output

    def test_scalar_flag(self, runner) -> None:
        result = runner.invoke(main, ["-n", "200", "--seed", "2", "--scalar", "-s", "no_power"])
        assert result.exit_code == 0, result.output
        assert len(_rows(result.output)) == 11

    def test_seed_reproducible(self, runner) -> None:
        a = runner.invoke(main, ["-n", "3000", "--seed", "9"])
        b = runner.invoke(main, ["-n", "3000", "--seed", "9"])
        assert a.output == b.output

    def test_default_run(self, runner) -> None:
        """No arguments: four tables at 1,000,000 trials per bet."""
        result = runner.invoke(main, [])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines()[0] == "n = 1000000"
        rows = _rows(result.output)
        assert len(rows) == 44
        for i in range(4):
            bets = [bet for bet, _ in rows[i * 11:(i + 1) * 11]]
            assert bets == sorted(bets) == list(BETS)
