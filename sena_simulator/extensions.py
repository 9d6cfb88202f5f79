"""Per-application service instances.

History and simulation jobs live in process memory only; both are created
once per app and reached through `current_app.extensions`.
"""

from __future__ import annotations

import random

from flask import Flask, current_app

from sena_simulator.services.draw_service import DrawService
from sena_simulator.services.history_service import HistoryStore
from sena_simulator.services.simulation_service import SimulationJobManager


def init_services(app: Flask) -> None:
    """Create the draw service, history store and simulation job manager."""

    seed = app.config.get("RANDOM_SEED")
    rng = random.Random(seed) if seed is not None else random.Random()
    draw_service = DrawService(rng, max_games=int(app.config["MAX_GAMES"]))

    app.extensions["draw_service"] = draw_service
    app.extensions["history_store"] = HistoryStore()
    app.extensions["simulation_jobs"] = SimulationJobManager(
        draw_service,
        batch_size=int(app.config["SIM_BATCH_SIZE"]),
        max_iterations=int(app.config["SIM_MAX_ITERATIONS"]),
        max_workers=int(app.config["SIM_WORKERS"]),
    )


def get_draw_service() -> DrawService:
    return current_app.extensions["draw_service"]


def get_history_store() -> HistoryStore:
    return current_app.extensions["history_store"]


def get_job_manager() -> SimulationJobManager:
    return current_app.extensions["simulation_jobs"]
