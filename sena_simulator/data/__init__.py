"""Bundled seed history restored by `HistoryStore.restore_default`."""

from __future__ import annotations

from sena_simulator.models.contest import HistoricalContest

# Newest first, same ordering an import produces.
SEED_HISTORY: tuple[HistoricalContest, ...] = (
    HistoricalContest(contest_number=3, date="1996-03-25", numbers=(10, 11, 29, 30, 36, 47)),
    HistoricalContest(contest_number=2, date="1996-03-18", numbers=(9, 37, 39, 41, 43, 49)),
    HistoricalContest(contest_number=1, date="1996-03-11", numbers=(4, 5, 30, 33, 41, 52)),
)
