"""Historical contest record."""

from __future__ import annotations

from dataclasses import dataclass

from sena_simulator.models.wager import Ticket


@dataclass(frozen=True)
class HistoricalContest:
    """One past official draw.

    `date` is kept as the text found in the source file; it is never parsed.
    """

    contest_number: int
    date: str
    numbers: Ticket
