"""Game generation routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from sena_simulator.extensions import get_draw_service
from sena_simulator.schemas.games import GamesExportSchema, GamesRequestSchema, GamesResponseSchema
from sena_simulator.services.export_service import rows_to_csv
from sena_simulator.utils.responses import csv_attachment, ok

games_bp = Blueprint("games", __name__)

_request_schema = GamesRequestSchema()
_export_schema = GamesExportSchema()
_response_schema = GamesResponseSchema()


@games_bp.post("/games")
def generate_games():
    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    count = int(data["count"])
    dozens = int(data["dozens"])
    games = get_draw_service().generate_games(count, dozens)
    return ok(_response_schema.dump({"dozens": dozens, "count": count, "games": games}))


@games_bp.post("/games/export")
def export_games():
    payload = request.get_json(silent=True) or {}
    data = _export_schema.load(payload)

    return csv_attachment(rows_to_csv(data["games"]), str(data["filename"]))
