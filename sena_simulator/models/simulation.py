"""Simulation value types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sena_simulator.models.wager import Ticket


class PrizeTier(str, Enum):
    SENA = "sena"
    QUINA = "quina"
    QUADRA = "quadra"

    @property
    def matches(self) -> int:
        return _TIER_MATCHES[self]

    @classmethod
    def from_matches(cls, matches: int) -> PrizeTier | None:
        """Tier earned by a ticket with `matches` hits, or None below a quadra."""

        if matches == 6:
            return cls.SENA
        if matches == 5:
            return cls.QUINA
        if matches == 4:
            return cls.QUADRA
        return None


_TIER_MATCHES = {
    PrizeTier.SENA: 6,
    PrizeTier.QUINA: 5,
    PrizeTier.QUADRA: 4,
}


class SimulationState(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of one completed run against a single reference draw."""

    reference_draw: Ticket
    wager_size: int
    iterations: int
    sena_tickets: tuple[Ticket, ...]
    quina_tickets: tuple[Ticket, ...]
    quadra_tickets: tuple[Ticket, ...]

    @property
    def senas(self) -> int:
        return len(self.sena_tickets)

    @property
    def quinas(self) -> int:
        return len(self.quina_tickets)

    @property
    def quadras(self) -> int:
        return len(self.quadra_tickets)

    def tickets_for(self, tier: PrizeTier) -> tuple[Ticket, ...]:
        if tier is PrizeTier.SENA:
            return self.sena_tickets
        if tier is PrizeTier.QUINA:
            return self.quina_tickets
        if tier is PrizeTier.QUADRA:
            return self.quadra_tickets
        raise ValueError(f"Unknown prize tier: {tier!r}")

    def count_for(self, tier: PrizeTier) -> int:
        return len(self.tickets_for(tier))

    def summary(self) -> SimulationSummary:
        return SimulationSummary(
            reference_draw=self.reference_draw,
            wager_size=self.wager_size,
            iterations=self.iterations,
            senas=self.senas,
            quinas=self.quinas,
            quadras=self.quadras,
        )


@dataclass(frozen=True)
class SimulationSummary:
    """Counts of a run without its ticket lists; outlives the full result."""

    reference_draw: Ticket
    wager_size: int
    iterations: int
    senas: int
    quinas: int
    quadras: int
