"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class ConflictError(AppError):
    """Conflict (e.g., a simulation that already ran)."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class ImportFormatError(AppError):
    """History file is structurally unusable (too few lines, missing columns)."""

    def __init__(self, message: str = "Invalid history file", details: Any | None = None) -> None:
        super().__init__(code="invalid_format", message=message, status_code=400, details=details)


class NoValidRecordsError(AppError):
    """Every data row of a history file was rejected."""

    def __init__(self, message: str = "No valid contests found in file", details: Any | None = None) -> None:
        super().__init__(code="no_valid_records", message=message, status_code=422, details=details)


class SimulationCancelledError(AppError):
    """A simulation was stopped before all batches completed."""

    def __init__(self, message: str = "Simulation cancelled", details: Any | None = None) -> None:
        super().__init__(code="simulation_cancelled", message=message, status_code=409, details=details)
