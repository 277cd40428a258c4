"""Package logger.

A thin ``LoggerAdapter`` over the stdlib ``logging`` module.  Context fields
bound with ``with_context()`` are attached to every record as ``extra`` and
rendered as a ``key=value`` suffix, so log lines from the exporter can be
correlated with the metric prefix or server address they concern.
"""

import logging
from typing import Any, MutableMapping

LOGGER_NAME = "mongodb_driver_metrics"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying a dict of structured context fields."""

    def __init__(self, logger: logging.Logger, dimensions: dict[str, Any] | None = None):
        super().__init__(logger, dimensions or {})
        self.dimensions: dict[str, Any] = dict(dimensions or {})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(self.dimensions)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        if self.dimensions:
            suffix = " ".join(f"{key}={value}" for key, value in self.dimensions.items())
            msg = f"{msg} [{suffix}]"
        return msg, kwargs

    def with_context(self, **kwargs: Any) -> "ContextualLogger":
        """Return a new logger with ``kwargs`` merged into the current context."""
        return ContextualLogger(self.logger, {**self.dimensions, **kwargs})


logger = ContextualLogger(logging.getLogger(LOGGER_NAME))
