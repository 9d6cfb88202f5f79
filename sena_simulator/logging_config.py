"""Logging configuration."""

from __future__ import annotations

import logging
from flask import Flask


def configure_logging(app: Flask) -> None:
    """Configure plain stdlib logging from the LOG_LEVEL setting."""

    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(threadName)s %(message)s",
    )

    # Werkzeug logs every progress poll at INFO.
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
