"""Wager value types."""

from __future__ import annotations

from dataclasses import dataclass

# Strictly ascending, distinct, each within the 1..60 universe.
Ticket = tuple[int, ...]

UNIVERSE_MAX = 60
NUMBERS_PER_DRAW = 6
MIN_WAGER_SIZE = 6
MAX_WAGER_SIZE = 20


@dataclass(frozen=True)
class WagerDetails:
    """Cost and top-prize odds of a wager of `size` numbers."""

    size: int
    ticket_count: int
    total_cost: float
    top_prize_odds: float
