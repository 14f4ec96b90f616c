"""
praxis.core.logging — Optional JSON log output.

Usage::

    from praxis.core.logging import configure_logging

    configure_logging(structured=True, level="DEBUG")

With ``structured=False`` the JSON handler (if any) is taken off again and
records flow to whatever handlers the application configured.
"""

from __future__ import annotations

import json
import logging
from typing import Optional, TextIO, Union

# LogRecord attributes that are not caller-supplied ``extra`` fields.
_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record.

    Emits ``ts``, ``level``, ``logger``, ``msg`` and the source location,
    plus any ``extra={...}`` fields passed to the logging call and the
    formatted traceback under ``exception``.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S")
            + f".{int(record.msecs):03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def _to_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(
    structured: bool = False,
    level: Union[str, int] = "INFO",
    logger_name: str = "praxis",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Apply *level* to the praxis logger and toggle JSON output.

    Only handlers installed by a previous structured call are replaced.
    Plain mode restores propagation to the application's handlers.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(_to_level(level))

    for handler in list(logger.handlers):
        if isinstance(handler.formatter, StructuredFormatter):
            logger.removeHandler(handler)

    if structured:
        json_handler = logging.StreamHandler(stream)
        json_handler.setFormatter(StructuredFormatter())
        logger.addHandler(json_handler)
    logger.propagate = not structured
    return logger
