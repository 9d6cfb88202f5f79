"""Schemas for game generation and export."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema


class GamesRequestSchema(Schema):
    # Upper bound comes from MAX_GAMES and is enforced by DrawService.generate_games.
    count = fields.Integer(required=False, load_default=10, validate=validate.Range(min=1))
    dozens = fields.Integer(required=False, load_default=8, validate=validate.Range(min=6, max=20))


class GamesExportSchema(Schema):
    games = fields.List(
        fields.List(
            fields.Integer(validate=validate.Range(min=1, max=60)),
            validate=validate.Length(min=6, max=20),
        ),
        required=True,
        validate=validate.Length(min=1),
    )

    filename = fields.String(required=False, load_default="games.csv", validate=validate.Regexp(r"^[\w.-]+$"))

    @validates_schema
    def _validate_rectangular(self, data, **kwargs):  # type: ignore[no-untyped-def]
        games = data.get("games") or []
        widths = {len(g) for g in games}
        if len(widths) > 1:
            raise ValidationError({"games": ["All games must have the same number of dozens"]})


class GamesResponseSchema(Schema):
    dozens = fields.Integer(required=True)
    count = fields.Integer(required=True)
    games = fields.List(fields.List(fields.Integer()), required=True)
