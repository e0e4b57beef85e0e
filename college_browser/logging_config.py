from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "COLLEGE_BROWSER_LOG_FORMAT"
LOG_LEVEL_ENV = "COLLEGE_BROWSER_LOG_LEVEL"

LOG_FORMATS = ("json", "plain")
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_log_format(force_format: Optional[str] = None) -> str:
    """
    Pick "json" or "plain" for the college browser's log output.

    An explicit argument beats COLLEGE_BROWSER_LOG_FORMAT; with neither set the
    listing service logs json lines.
    """
    chosen = force_format if force_format is not None else os.getenv(LOG_FORMAT_ENV, "json")
    chosen = chosen.strip().lower()
    if chosen not in LOG_FORMATS:
        raise ValueError(f"Unknown log format '{chosen}', expected one of {LOG_FORMATS}")
    return chosen


def configure_logging(
        level: Union[int, str, None] = None,
        force_format: Optional[str] = None,
) -> None:
    """Install a single stream handler on the root logger.

    `level` falls back to COLLEGE_BROWSER_LOG_LEVEL, then INFO.
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = level.strip().upper()

    if resolve_log_format(force_format) == "plain":
        formatter = logging.Formatter(_FORMAT)
    else:
        formatter = jsonlogger.JsonFormatter(_FORMAT)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    # one handler only; repeated calls (tests, reloader) must not duplicate lines
    root.handlers.clear()
    root.addHandler(handler)
