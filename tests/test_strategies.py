"""Tests for src/engine/strategies.py — the four power policies and registry."""

from __future__ import annotations

import pytest

from src.engine.dice import BETS, Dice, all_dice
from src.engine.power import Power
from src.engine.strategies import (
    STRATEGIES,
    STRATEGY_LABELS,
    always_flip,
    get_strategy,
    no_power,
    reroll_if_losing,
    reroll_if_losing_or_flip,
    strategy_name,
)
from tests.conftest import roll


class TestNoPower:
    def test_always_none(self):
        for bet in BETS:
            for d in all_dice():
                assert no_power(bet, d) is Power.NONE


class TestRerollIfLosing:
    def test_rerolls_on_loss(self):
        assert reroll_if_losing(8, roll("3-4")) is Power.REROLL

    def test_keeps_on_exact_win(self):
        assert reroll_if_losing(7, roll("3-4")) is Power.NONE

    def test_keeps_on_win(self):
        assert reroll_if_losing(5, roll("6-6")) is Power.NONE

    def test_never_flips(self):
        for bet in BETS:
            for d in all_dice():
                assert reroll_if_losing(bet, d) is not Power.FLIP_ONE


class TestAlwaysFlip:
    def test_always_flip(self):
        for bet in BETS:
            for d in all_dice():
                assert always_flip(bet, d) is Power.FLIP_ONE


class TestRerollIfLosingOrFlip:
    def test_flip_preferred_when_it_wins(self):
        """2-3 at bet 7: flip gives 4-3 = 7, so flip beats reroll."""
        assert reroll_if_losing_or_flip(7, Dice(2, 3)) is Power.FLIP_ONE

    def test_reroll_when_flip_insufficient(self):
        assert reroll_if_losing_or_flip(9, Dice(2, 3)) is Power.REROLL

    def test_none_when_winning(self):
        assert reroll_if_losing_or_flip(5, Dice(2, 3)) is Power.NONE

    def test_reroll_when_low_die_cannot_flip(self):
        """4-4 at bet 9: the low die already shows 4, flip changes nothing."""
        assert reroll_if_losing_or_flip(9, roll("4-4")) is Power.REROLL

    def test_flip_reaching_twelve_impossible(self):
        """A flip tops out at 4+6 = 10, so bets 11/12 never flip."""
        for bet in (11, 12):
            for d in all_dice():
                assert reroll_if_losing_or_flip(bet, d) is not Power.FLIP_ONE

    def test_consistent_with_definition(self):
        for bet in BETS:
            for d in all_dice():
                power = reroll_if_losing_or_flip(bet, d)
                if bet <= d.sum():
                    assert power is Power.NONE
                elif bet <= d.modify(Power.FLIP_ONE).sum():
                    assert power is Power.FLIP_ONE
                else:
                    assert power is Power.REROLL


class TestRegistry:
    def test_order(self):
        assert list(STRATEGIES) == [
            "no_power",
            "reroll_if_losing",
            "always_flip",
            "reroll_if_losing_or_flip",
        ]

    def test_labels_cover_registry(self):
        assert set(STRATEGY_LABELS) == set(STRATEGIES)

    def test_section_labels_in_report_order(self):
        assert [STRATEGY_LABELS[name] for name in STRATEGIES] == [
            "No change",
            "Reroll if losing",
            "Flip if sum is < 5",
            "If losing, flip (if applicable) or reroll",
        ]

    def test_get_strategy(self):
        assert get_strategy("always_flip") is always_flip

    def test_get_unknown_strategy_raises(self):
        with pytest.raises(KeyError, match="Unknown strategy"):
            get_strategy("double_down")

    def test_strategy_name_registered(self):
        for name, fn in STRATEGIES.items():
            assert strategy_name(fn) == name

    def test_strategy_name_custom_callable(self):
        def flip_on_snake_eyes(bet: int, dice: Dice) -> Power:
            return Power.FLIP_ONE if dice.sum() == 2 else Power.NONE

        assert strategy_name(flip_on_snake_eyes) == "flip_on_snake_eyes"

    def test_strategies_are_pure(self):
        """Same inputs always give the same decision."""
        for fn in STRATEGIES.values():
            for bet in BETS:
                for d in all_dice():
                    assert fn(bet, d) is fn(bet, d)
