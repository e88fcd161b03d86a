"""Logging setup for dbmetrics.

``logger`` is a ``ContextualLogger``: a ``LoggerAdapter`` that carries a
dictionary of dimensions which ``with_context()`` extends.  Dimensions are
attached to every record as ``extra`` fields and rendered after the message.
"""

import logging
import sys
from typing import Any

from dbmetrics.core.config import settings

_LOGGER_NAME = "dbmetrics"


class ContextualFormatter(logging.Formatter):
    """Formatter that appends the record's context dimensions as ``key=value``."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        dimensions = getattr(record, "dimensions", None)
        if not dimensions:
            return message
        rendered = " ".join(f"{key}={value}" for key, value in sorted(dimensions.items()))
        return f"{message} [{rendered}]"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying contextual dimensions."""

    def __init__(self, logger: logging.Logger, dimensions: dict[str, Any] | None = None) -> None:
        super().__init__(logger, {})
        self.dimensions: dict[str, Any] = dict(dimensions or {})

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = dict(kwargs.get("extra") or {})
        extra["dimensions"] = {**self.dimensions, **extra.get("dimensions", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with *dimensions* merged into the current ones."""
        return ContextualLogger(self.logger, {**self.dimensions, **dimensions})


def _configure_logger(name: str, level: str) -> ContextualLogger:
    base = logging.getLogger(name)
    base.setLevel(level)
    if not base.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            ContextualFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        base.addHandler(handler)
    return ContextualLogger(base)


logger = _configure_logger(_LOGGER_NAME, settings.LOG_LEVEL)
