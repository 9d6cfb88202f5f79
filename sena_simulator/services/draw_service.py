"""Random ticket and reference-draw generation."""

from __future__ import annotations

import random

from sena_simulator.errors import ValidationError
from sena_simulator.models.wager import (
    MAX_WAGER_SIZE,
    MIN_WAGER_SIZE,
    UNIVERSE_MAX,
    Ticket,
)


class DrawService:
    """Draw duplicate-free number sets from the 1..60 universe.

    Every random number in the system comes from `rng`; pass a seeded
    `random.Random` for reproducible output.
    """

    def __init__(self, rng: random.Random | None = None, max_games: int = 100) -> None:
        self._rng = rng or random.Random()
        self._max_games = max_games

    def spawn(self) -> DrawService:
        """Independent generator seeded from this one, for use on another thread."""

        return DrawService(random.Random(self._rng.getrandbits(64)), max_games=self._max_games)

    def draw_distinct_numbers(self, count: int, universe_max: int = UNIVERSE_MAX) -> Ticket:
        """Sample uniformly until `count` distinct numbers are collected.

        Duplicates are simply redrawn; count <= universe_max always holds for
        valid input so the loop terminates.
        """

        picked: set[int] = set()
        while len(picked) < count:
            picked.add(self._rng.randint(1, universe_max))
        return tuple(sorted(picked))

    def generate_games(self, game_count: int, dozens_per_game: int) -> list[Ticket]:
        """Generate `game_count` independent tickets of `dozens_per_game` numbers."""

        if game_count < 1 or game_count > self._max_games:
            raise ValidationError(
                message="Invalid count",
                details={"count": [f"Must be within 1..{self._max_games}"]},
            )
        if dozens_per_game < MIN_WAGER_SIZE or dozens_per_game > MAX_WAGER_SIZE:
            raise ValidationError(
                message="Invalid dozens",
                details={"dozens": [f"Must be within {MIN_WAGER_SIZE}..{MAX_WAGER_SIZE}"]},
            )

        universe = list(range(1, UNIVERSE_MAX + 1))
        games: list[Ticket] = []
        for _ in range(game_count):
            self._rng.shuffle(universe)
            games.append(tuple(sorted(universe[:dozens_per_game])))
        return games
