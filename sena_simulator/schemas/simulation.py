"""Schemas for the Monte Carlo simulation API."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from sena_simulator.models.simulation import PrizeTier, SimulationState

TIER_NAMES = [tier.value for tier in PrizeTier]


class SimulationRequestSchema(Schema):
    dozens = fields.Integer(required=False, load_default=8, validate=validate.Range(min=6, max=20))

    # Upper bound is enforced by the engine from SIM_MAX_ITERATIONS.
    iterations = fields.Integer(required=False, load_default=200_000, validate=validate.Range(min=1))


class TierQuerySchema(Schema):
    tier = fields.String(required=True, validate=validate.OneOf(TIER_NAMES))
    offset = fields.Integer(required=False, load_default=0, validate=validate.Range(min=0))
    limit = fields.Integer(required=False, load_default=100, validate=validate.Range(min=1, max=1000))


class ExportQuerySchema(Schema):
    tier = fields.String(required=True, validate=validate.OneOf(TIER_NAMES))


class SimulationSummarySchema(Schema):
    reference_draw = fields.List(fields.Integer(), required=True)
    wager_size = fields.Integer(required=True)
    iterations = fields.Integer(required=True)
    senas = fields.Integer(required=True)
    quinas = fields.Integer(required=True)
    quadras = fields.Integer(required=True)


class SimulationJobSchema(Schema):
    job_id = fields.String(required=True)
    wager_size = fields.Integer(required=True)
    iterations = fields.Integer(required=True)
    state = fields.Enum(SimulationState, required=True)
    progress = fields.Integer(required=True)
    error = fields.String(required=False, allow_none=True)
    # Counts and reference draw only; ticket lists are served by /tickets and /export.
    result = fields.Nested(SimulationSummarySchema, attribute="summary", required=False, allow_none=True)
