"""Logging setup for hateoas-client.

Modules log through ``logging.getLogger(__name__)``. Request related records
carry ``method``, ``url``, ``status``, ``cache_key`` and ``attempt`` through
``extra=``; both formatters below render those fields when present.

Example:
    >>> from hateoas_client.observability.logging import configure_logging
    >>> configure_logging(level="DEBUG", json_format=True)
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import IO, Any

ROOT_LOGGER = "hateoas_client"

REQUEST_FIELDS = ("method", "url", "status", "cache_key", "attempt")

LEVEL_COLORS = {
    logging.DEBUG: "\033[2;36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[1;31m",
    logging.CRITICAL: "\033[1;35m",
}
RESET = "\033[0m"


def request_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Request fields attached to ``record`` via ``extra=``, in a fixed order."""
    return {name: getattr(record, name) for name in REQUEST_FIELDS if hasattr(record, name)}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record.

    Attributes:
        include_location: Add the source file, line and function.
        static_fields: Fields added to every record, e.g. a service name.
    """

    def __init__(
        self,
        include_location: bool = False,
        static_fields: dict[str, Any] | None = None,
    ) -> None:
        super().__init__()
        self.include_location = include_location
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            **self.static_fields,
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(request_fields(record))

        if self.include_location:
            entry["src"] = f"{record.pathname}:{record.lineno} ({record.funcName})"
        if record.exc_info and record.exc_info[1] is not None:
            entry["error"] = {
                "type": type(record.exc_info[1]).__name__,
                "detail": str(record.exc_info[1]),
                "trace": self.formatException(record.exc_info),
            }
        return json.dumps(entry, default=str, ensure_ascii=False)


class HumanReadableFormatter(logging.Formatter):
    """Console formatter: ``time LEVEL logger: message key=value ...``."""

    def __init__(self, colors: bool | None = None) -> None:
        super().__init__()
        self.colors = _stderr_is_color_tty() if colors is None else colors

    def format(self, record: logging.LogRecord) -> str:
        when = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level = record.levelname.ljust(8)
        if self.colors:
            level = f"{LEVEL_COLORS.get(record.levelno, '')}{level}{RESET}"

        line = f"{when} {level} {record.name}: {record.getMessage()}"
        fields = request_fields(record)
        if fields:
            line += " " + " ".join(f"{name}={value}" for name, value in fields.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _stderr_is_color_tty() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stderr.isatty()


def configure_logging(
    level: int | str = logging.INFO,
    json_format: bool = False,
    include_location: bool = False,
    static_fields: dict[str, Any] | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Install a single handler on the ``hateoas_client`` logger.

    Calling it again replaces the handler it installed before. Records stop
    propagating to the root logger.

    Args:
        level: Level name or number.
        json_format: Emit JSON lines instead of console lines.
        include_location: Add source location to JSON lines.
        static_fields: Fields added to every JSON line.
        stream: Output stream, stderr by default.

    Returns:
        The ``hateoas_client`` logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_format:
        handler.setFormatter(StructuredFormatter(include_location, static_fields))
    else:
        handler.setFormatter(HumanReadableFormatter())

    logger = logging.getLogger(ROOT_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
