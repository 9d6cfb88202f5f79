"""Response builders shared by every blueprint.

JSON endpoints answer `{"success", "data", "error"}`; ticket exports are
plain CSV downloads.
"""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify


def ok(data: Any, status_code: int = 200) -> tuple[Response, int]:
    """Wrap a dumped schema payload; simulations use 202 while the job is queued."""

    return jsonify({"success": True, "data": data, "error": None}), status_code


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> tuple[Response, int]:
    # details: field -> messages for validation, skipped_rows for imports, state for job conflicts
    return (
        jsonify(
            {
                "success": False,
                "data": None,
                "error": {"code": code, "message": message, "details": details},
            }
        ),
        status_code,
    )


def csv_attachment(text: str, filename: str) -> Response:
    """Serve `Column_n` ticket rows as a file download named `filename`."""

    return Response(
        text,
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
