"""Simulation routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from sena_simulator.errors import ConflictError
from sena_simulator.extensions import get_job_manager
from sena_simulator.models.simulation import PrizeTier, SimulationResult, SimulationState
from sena_simulator.schemas.simulation import (
    ExportQuerySchema,
    SimulationJobSchema,
    SimulationRequestSchema,
    TierQuerySchema,
)
from sena_simulator.services.export_service import rows_to_csv
from sena_simulator.utils.responses import csv_attachment, ok

simulations_bp = Blueprint("simulations", __name__)

_request_schema = SimulationRequestSchema()
_job_schema = SimulationJobSchema()
_tier_schema = TierQuerySchema()
_export_schema = ExportQuerySchema()


def _completed_result(job_id: str) -> SimulationResult:
    job = get_job_manager().get(job_id)
    if job.state is not SimulationState.COMPLETED:
        raise ConflictError(
            message=f"Simulation {job_id} has no result",
            details={"state": job.state.value},
        )
    if job.result is None:
        raise ConflictError(
            message=f"Simulation {job_id} was superseded by a newer run; only its counts are kept",
            details={"state": job.state.value, "superseded": True},
        )
    return job.result


@simulations_bp.post("/simulations")
def start_simulation():
    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    job = get_job_manager().submit(int(data["dozens"]), int(data["iterations"]))
    return ok(_job_schema.dump(job), status_code=202)


@simulations_bp.get("/simulations/latest")
def get_latest_simulation():
    """Newest completed run; its job id is the one whose tickets are still available."""

    return ok(_job_schema.dump(get_job_manager().latest()))


@simulations_bp.get("/simulations/<job_id>")
def get_simulation(job_id: str):
    return ok(_job_schema.dump(get_job_manager().get(job_id)))


@simulations_bp.post("/simulations/<job_id>/cancel")
def cancel_simulation(job_id: str):
    return ok(_job_schema.dump(get_job_manager().cancel(job_id)))


@simulations_bp.get("/simulations/<job_id>/tickets")
def list_winning_tickets(job_id: str):
    """Page through the winning tickets of one tier."""

    data = _tier_schema.load(request.args)
    result = _completed_result(job_id)

    tier = PrizeTier(data["tier"])
    offset = int(data["offset"])
    limit = int(data["limit"])
    tickets = result.tickets_for(tier)
    return ok(
        {
            "tier": tier.value,
            "total": len(tickets),
            "offset": offset,
            "tickets": [list(t) for t in tickets[offset : offset + limit]],
        }
    )


@simulations_bp.get("/simulations/<job_id>/export")
def export_winning_tickets(job_id: str):
    data = _export_schema.load(request.args)
    result = _completed_result(job_id)

    tier = PrizeTier(data["tier"])
    return csv_attachment(rows_to_csv(result.tickets_for(tier)), f"winners_{tier.value}.csv")
