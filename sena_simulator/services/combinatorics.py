"""Exact combinatorics for wager cost and prize odds."""

from __future__ import annotations

from sena_simulator.models.simulation import PrizeTier
from sena_simulator.models.wager import NUMBERS_PER_DRAW, UNIVERSE_MAX, WagerDetails

DEFAULT_TICKET_PRICE = 6.0

# Official "1 in X" odds published for each wager size: (sena, quina, quadra).
OFFICIAL_ODDS: dict[int, tuple[int, int, int]] = {
    6: (50_063_860, 154_518, 2_332),
    7: (7_151_980, 44_981, 1_038),
    8: (1_787_995, 17_192, 539),
    9: (595_998, 7_791, 312),
    10: (238_399, 3_973, 195),
    11: (108_363, 2_211, 129),
    12: (54_182, 1_317, 90),
    13: (29_175, 828, 65),
    14: (16_671, 544, 48),
    15: (10_003, 370, 37),
    16: (6_252, 260, 29),
    17: (4_045, 188, 23),
    18: (2_697, 139, 19),
    19: (1_845, 105, 16),
    20: (1_292, 81, 13),
}


def combinations(n: int, k: int) -> int:
    """Number of k-subsets of an n-set.

    The running product is divided at every step; after step i it equals
    C(n, i), so the division is always exact and intermediates stay small.
    """

    if k < 0 or k > n:
        return 0
    if k == 0 or k == n:
        return 1

    k = min(k, n - k)
    result = 1
    for i in range(1, k + 1):
        result = result * (n - i + 1) // i
    return result


TOTAL_DRAW_COMBINATIONS = combinations(UNIVERSE_MAX, NUMBERS_PER_DRAW)


def compute_wager_details(size: int, unit_price: float = DEFAULT_TICKET_PRICE) -> WagerDetails:
    """Cost and sena odds of betting `size` numbers (caller keeps 6 <= size <= 20)."""

    ticket_count = combinations(size, NUMBERS_PER_DRAW)
    return WagerDetails(
        size=size,
        ticket_count=ticket_count,
        total_cost=ticket_count * unit_price,
        top_prize_odds=TOTAL_DRAW_COMBINATIONS / ticket_count,
    )


def prize_odds(size: int) -> dict[PrizeTier, float]:
    """Odds (1 in X) of hitting exactly each tier with one wager of `size` numbers.

    Hypergeometric: of the `size` numbers picked, `m` must be among the 6
    drawn and the rest among the 54 not drawn.
    """

    misses_pool = UNIVERSE_MAX - NUMBERS_PER_DRAW
    total = combinations(UNIVERSE_MAX, size)

    odds: dict[PrizeTier, float] = {}
    for tier in PrizeTier:
        hits = combinations(NUMBERS_PER_DRAW, tier.matches) * combinations(misses_pool, size - tier.matches)
        odds[tier] = total / hits
    return odds


def official_odds(size: int) -> dict[PrizeTier, int] | None:
    row = OFFICIAL_ODDS.get(size)
    if row is None:
        return None
    return {PrizeTier.SENA: row[0], PrizeTier.QUINA: row[1], PrizeTier.QUADRA: row[2]}
