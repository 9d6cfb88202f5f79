"""Schemas for historical contests."""

from __future__ import annotations

from marshmallow import Schema, fields


class ContestSchema(Schema):
    contest_number = fields.Integer(required=True)
    date = fields.String(required=True)
    numbers = fields.List(fields.Integer(), required=True)


class HistoryQuerySchema(Schema):
    q = fields.String(required=False, load_default=None, allow_none=True)
