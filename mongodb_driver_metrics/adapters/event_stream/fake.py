"""Fake DriverEventStream for testing.

Delivers events through a real ``EventDispatcher`` so tests exercise the
same ordering guarantees as production, and records every subscription so
tests can assert on what the exporter bound.
"""

from mongodb_driver_metrics.core.dispatcher import EventDispatcher, EventHandler
from mongodb_driver_metrics.core.events import DriverEvent, EventKind
from mongodb_driver_metrics.core.protocols.event_stream import DriverEventStream


class FakeEventStream(DriverEventStream):
    """In-memory event stream implementing the DriverEventStream protocol.

    Usage:
        stream = FakeEventStream(monitor_commands=True)
        exporter = MongoDBDriverExporter(stream, registry)
        exporter.enable_metrics()
        stream.emit(ConnectionCreated(address="a:27017"))
    """

    def __init__(self, monitor_commands: bool = False) -> None:
        self._monitor_commands = monitor_commands
        self._dispatcher = EventDispatcher()
        self.subscriptions: list[EventKind] = []
        self.emitted: list[DriverEvent] = []

    @property
    def monitor_commands(self) -> bool:
        return self._monitor_commands

    def on(self, kind: EventKind, handler: EventHandler) -> None:
        self.subscriptions.append(kind)
        self._dispatcher.subscribe(kind, handler)

    # -- test helpers --

    def emit(self, event: DriverEvent) -> None:
        self.emitted.append(event)
        self._dispatcher.emit(event)

    def emit_all(self, *events: DriverEvent) -> None:
        for event in events:
            self.emit(event)

    def clear(self) -> None:
        """Forget recorded events; subscriptions stay bound."""
        self.emitted.clear()
