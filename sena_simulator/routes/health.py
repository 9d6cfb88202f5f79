"""Liveness route."""

from __future__ import annotations

from flask import Blueprint

from sena_simulator.extensions import get_history_store, get_job_manager
from sena_simulator.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Report liveness with the size of the loaded history and the simulations in flight."""

    return ok(
        {
            "status": "ok",
            "history_contests": len(get_history_store()),
            "active_simulations": get_job_manager().active_count(),
        }
    )
