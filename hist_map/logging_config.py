from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
        level: int = logging.INFO,
        force_format: Optional[str] = None,
) -> None:
    """
    Configure the root logger for the map app.

    Modes:
    - JSON (default), structured fields from `extra=` end up as keys
    - plain text, for local runs

    Selection order:
        1) force_format argument ("json" or "plain") if provided
        2) env var HIST_MAP_LOG_FORMAT
        3) default = "json"
    """
    format_mode = (force_format or os.getenv("HIST_MAP_LOG_FORMAT", "json")).lower()

    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler()
    if format_mode == "plain":
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    else:
        handler.setFormatter(jsonlogger.JsonFormatter(PLAIN_FORMAT))

    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)
