"""Domain value types."""

from sena_simulator.models.contest import HistoricalContest
from sena_simulator.models.simulation import PrizeTier, SimulationResult, SimulationState, SimulationSummary
from sena_simulator.models.wager import Ticket, WagerDetails

__all__ = [
    "HistoricalContest",
    "PrizeTier",
    "SimulationResult",
    "SimulationState",
    "SimulationSummary",
    "Ticket",
    "WagerDetails",
]
