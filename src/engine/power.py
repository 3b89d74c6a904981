"""
Powers a player may spend on a single roll before the payout is resolved.

    NONE      — keep the roll as-is
    REROLL    — discard both dice and roll again
    FLIP_ONE  — turn the low die to 4 (only if it shows 1, 2 or 3)
"""

from __future__ import annotations

from enum import Enum, auto


class Power(Enum):
    NONE = auto()
    REROLL = auto()
    FLIP_ONE = auto()
