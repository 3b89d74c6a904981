"""
Shared pytest fixtures for dice-bet simulator tests.

Provides a seeded generator and a helper for building rolls from strings.
"""

from __future__ import annotations

import numpy as np
import pytest

from src.engine.dice import Dice


def roll(s: str) -> Dice:
    """Build a Dice from a 'low-high' string.

    Examples:
        >>> roll('2-5')
        Dice(d1=2, d2=5)
        >>> roll('6-1')
        Dice(d1=1, d2=6)
    """
    a, b = s.split("-")
    return Dice(int(a), int(b))


@pytest.fixture
def rng() -> np.random.Generator:
    """Deterministic generator for tests that draw random rolls."""
    return np.random.default_rng(12345)


@pytest.fixture
def r():
    """Expose the roll() helper as a fixture for convenience."""
    return roll
