"""InfoLogger protocol for the caller-supplied log sink.

Only ``info`` is required, so a ``logging.Logger``, a structlog logger or
any object with a compatible method can be passed in the exporter options.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class InfoLogger(Protocol):
    """Protocol for a sink that accepts informational messages."""

    def info(self, msg: str, *args: Any, **kwargs: Any) -> Any:
        """Emit an informational message."""
        ...
