"""Wager routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from sena_simulator.schemas.wager import WagerQuerySchema, WagerResponseSchema
from sena_simulator.services.combinatorics import compute_wager_details, official_odds, prize_odds
from sena_simulator.utils.responses import ok

wager_bp = Blueprint("wager", __name__)

_query_schema = WagerQuerySchema()
_response_schema = WagerResponseSchema()


def _by_tier_name(odds: dict | None) -> dict | None:
    if odds is None:
        return None
    return {tier.value: value for tier, value in odds.items()}


@wager_bp.get("/wager")
def get_wager():
    """Cost, ticket count and odds for betting `size` numbers."""

    data = _query_schema.load(request.args)
    size = int(data["size"])

    details = compute_wager_details(size, unit_price=float(current_app.config["TICKET_PRICE"]))
    return ok(
        _response_schema.dump(
            {
                "size": details.size,
                "ticket_count": details.ticket_count,
                "total_cost": details.total_cost,
                "top_prize_odds": details.top_prize_odds,
                "odds": _by_tier_name(prize_odds(size)),
                "official_odds": _by_tier_name(official_odds(size)),
            }
        )
    )
