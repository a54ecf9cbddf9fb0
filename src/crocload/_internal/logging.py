"""Logging setup for crocload."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

# Attributes the scenario attaches via ``extra=`` that are worth keeping in
# structured output.
_CONTEXT_FIELDS = ("vu", "iteration", "step", "status")


class _JsonFormatter(logging.Formatter):
    """One JSON object per line.

    Keys: timestamp, level, logger, message, plus any of ``vu``,
    ``iteration``, ``step`` and ``status`` present on the record.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _CONTEXT_FIELDS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def _make_formatter(*, json_format: bool) -> logging.Formatter:
    if json_format:
        return _JsonFormatter()
    return logging.Formatter(
        "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(
    level: int = logging.INFO,
    *,
    json_format: bool = False,
) -> logging.Logger:
    """Configure and return the ``crocload`` logger.

    Installs a single stderr handler on the ``crocload`` namespace. Calling
    it again reuses that handler, updating its level and formatter.

    Args:
        level: Logging level (e.g., ``logging.DEBUG``). Defaults to INFO.
        json_format: If True, emit one JSON object per record. If False,
            emit human-readable lines.

    Returns:
        The configured ``crocload`` logger.
    """
    logger = logging.getLogger("crocload")
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
            handler.setFormatter(_make_formatter(json_format=json_format))
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_make_formatter(json_format=json_format))
    logger.addHandler(handler)

    # Keep step failures from being printed twice by the root logger
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the ``crocload`` namespace.

    Args:
        name: Logger name, appended to the ``crocload.`` prefix.
            Example: ``get_logger("scenario.crocodiles")`` returns
            ``logging.getLogger("crocload.scenario.crocodiles")``.

    Returns:
        The child logger.
    """
    return logging.getLogger(f"crocload.{name}")
