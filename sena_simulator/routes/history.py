"""History routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from sena_simulator.errors import ValidationError
from sena_simulator.extensions import get_history_store
from sena_simulator.schemas.history import ContestSchema, HistoryQuerySchema
from sena_simulator.services.history_service import HistoryService
from sena_simulator.utils.responses import ok

history_bp = Blueprint("history", __name__)

_contests_schema = ContestSchema(many=True)
_query_schema = HistoryQuerySchema()
_service = HistoryService()


def _read_upload() -> str:
    """CSV text from a multipart `file` field or the raw request body."""

    upload = request.files.get("file")
    raw = upload.read() if upload is not None else request.get_data()
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ValidationError(message="Could not read file: expected UTF-8 text") from exc


@history_bp.get("/history")
def list_history():
    """List contests, optionally filtered by contest number (`q`)."""

    data = _query_schema.load(request.args)
    contests = _service.search(get_history_store(), data.get("q"))
    return ok({"count": len(contests), "contests": _contests_schema.dump(contests)})


@history_bp.post("/history/import")
def import_history():
    text = _read_upload()
    result = _service.import_text(get_history_store(), text)
    return ok(
        {
            "imported": len(result.contests),
            "skipped_rows": result.skipped_rows,
        }
    )


@history_bp.post("/history/restore")
def restore_history():
    restored = _service.restore_default(get_history_store())
    return ok({"restored": restored})
