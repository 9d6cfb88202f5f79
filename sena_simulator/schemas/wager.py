"""Schemas for wager cost/odds API."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class WagerQuerySchema(Schema):
    size = fields.Integer(required=False, load_default=8, validate=validate.Range(min=6, max=20))


class TierOddsSchema(Schema):
    sena = fields.Float(required=True)
    quina = fields.Float(required=True)
    quadra = fields.Float(required=True)


class WagerResponseSchema(Schema):
    size = fields.Integer(required=True)
    ticket_count = fields.Integer(required=True)
    total_cost = fields.Float(required=True)
    top_prize_odds = fields.Float(required=True)

    odds = fields.Nested(TierOddsSchema, required=True)

    # Published table row; absent for sizes outside 6..20.
    official_odds = fields.Nested(TierOddsSchema, required=False, allow_none=True)
