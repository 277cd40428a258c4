"""DriverEventStream protocol for the source of driver lifecycle events.

The exporter subscribes through this protocol rather than to a concrete
driver, so production wires PyMongo listeners while tests emit events
from an in-memory fake.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mongodb_driver_metrics.core.dispatcher import EventHandler
    from mongodb_driver_metrics.core.events import EventKind


@runtime_checkable
class DriverEventStream(Protocol):
    """Protocol for subscribing to a database client's event stream."""

    @property
    def monitor_commands(self) -> bool:
        """Whether the client publishes command succeeded/failed events."""
        ...

    def on(self, kind: EventKind, handler: EventHandler) -> None:
        """Invoke ``handler`` for every event of ``kind``, for the client's lifetime."""
        ...
