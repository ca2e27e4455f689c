"""
Console logging for apcupsd-exporter.

Level and format default to the settings read from the environment:
- APCUPSD_EXPORTER_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
- APCUPSD_EXPORTER_LOG_FORMAT: text|json (default: text)
"""
from __future__ import annotations

import logging
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from ..config import settings

_handler: Optional[logging.Handler] = None


def _formatter(fmt: str) -> logging.Formatter:
    if fmt.lower() == "json":
        return JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
        )
    return logging.Formatter(
        fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Handler:
    """Send root logging to stderr.

    A handler installed by an earlier call is replaced, so the CLI can
    apply its -v/-q override after the defaults.
    """
    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    root.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO))

    _handler = logging.StreamHandler()
    _handler.setFormatter(_formatter(fmt or settings.LOG_FORMAT))
    root.addHandler(_handler)
    return _handler
