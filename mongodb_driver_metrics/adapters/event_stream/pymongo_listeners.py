"""PyMongo implementation of the DriverEventStream protocol.

PyMongo publishes pool and command events to listeners registered when the
``MongoClient`` is constructed.  ``PymongoEventStream`` provides those
listeners, converts each PyMongo event into a typed driver event and hands
it to an ``EventDispatcher``.

Usage:
    stream = PymongoEventStream(monitor_commands=True)
    client = MongoClient(uri, event_listeners=stream.listeners)
    monitor_mongodb_driver(stream, registry)
"""

from __future__ import annotations

import math
from typing import Any

from pymongo import monitoring
from pymongo.common import MAX_POOL_SIZE, MIN_POOL_SIZE

from mongodb_driver_metrics.core.dispatcher import EventDispatcher, EventHandler
from mongodb_driver_metrics.core.events import (
    CheckedIn,
    CheckedOut,
    CheckOutFailed,
    CheckOutStarted,
    CommandFailed,
    CommandSucceeded,
    ConnectionClosed,
    ConnectionCreated,
    DriverEvent,
    EventKind,
    PoolClosed,
    PoolCreated,
)
from mongodb_driver_metrics.core.protocols.event_stream import DriverEventStream


def format_address(address: Any) -> str:
    """Render a PyMongo ``(host, port)`` address as ``host:port``."""
    host, port = address
    if port is None:
        return str(host)
    return f"{host}:{port}"


def _checkout_duration_ms(event: Any) -> float | None:
    # ``duration`` (seconds) is only published by PyMongo 4.7+.
    duration = getattr(event, "duration", None)
    if duration is None:
        return None
    return duration * 1000


def _pool_bound(options: dict[str, Any], key: str, default: int) -> float:
    value = options.get(key, default)
    if value is None:
        return math.inf
    return value


class _PoolListener(monitoring.ConnectionPoolListener):
    """Forwards PyMongo CMAP events to the owning stream."""

    def __init__(self, stream: PymongoEventStream) -> None:
        self._stream = stream

    def pool_created(self, event: monitoring.PoolCreatedEvent) -> None:
        options = dict(event.options or {})
        self._stream.emit(
            PoolCreated(
                address=format_address(event.address),
                min_size=_pool_bound(options, "minPoolSize", MIN_POOL_SIZE),
                max_size=_pool_bound(options, "maxPoolSize", MAX_POOL_SIZE),
            )
        )

    def pool_ready(self, event: Any) -> None:
        pass

    def pool_cleared(self, event: Any) -> None:
        pass

    def pool_closed(self, event: monitoring.PoolClosedEvent) -> None:
        self._stream.emit(PoolClosed(address=format_address(event.address)))

    def connection_created(self, event: monitoring.ConnectionCreatedEvent) -> None:
        self._stream.emit(ConnectionCreated(address=format_address(event.address)))

    def connection_ready(self, event: Any) -> None:
        pass

    def connection_closed(self, event: monitoring.ConnectionClosedEvent) -> None:
        self._stream.emit(ConnectionClosed(address=format_address(event.address)))

    def connection_check_out_started(
        self, event: monitoring.ConnectionCheckOutStartedEvent
    ) -> None:
        self._stream.emit(CheckOutStarted(address=format_address(event.address)))

    def connection_check_out_failed(
        self, event: monitoring.ConnectionCheckOutFailedEvent
    ) -> None:
        self._stream.emit(
            CheckOutFailed(
                address=format_address(event.address),
                duration_ms=_checkout_duration_ms(event),
            )
        )

    def connection_checked_out(self, event: monitoring.ConnectionCheckedOutEvent) -> None:
        self._stream.emit(
            CheckedOut(
                address=format_address(event.address),
                duration_ms=_checkout_duration_ms(event),
            )
        )

    def connection_checked_in(self, event: monitoring.ConnectionCheckedInEvent) -> None:
        self._stream.emit(CheckedIn(address=format_address(event.address)))


class _CommandListener(monitoring.CommandListener):
    """Forwards PyMongo command succeeded/failed events to the owning stream."""

    def __init__(self, stream: PymongoEventStream) -> None:
        self._stream = stream

    def started(self, event: Any) -> None:
        pass

    def succeeded(self, event: monitoring.CommandSucceededEvent) -> None:
        self._stream.emit(
            CommandSucceeded(
                command_name=event.command_name,
                address=format_address(event.connection_id),
                duration_ms=event.duration_micros / 1000,
            )
        )

    def failed(self, event: monitoring.CommandFailedEvent) -> None:
        self._stream.emit(
            CommandFailed(
                command_name=event.command_name,
                address=format_address(event.connection_id),
                duration_ms=event.duration_micros / 1000,
            )
        )


class PymongoEventStream(DriverEventStream):
    """Driver event stream fed by PyMongo monitoring listeners."""

    def __init__(
        self,
        monitor_commands: bool = False,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        self._monitor_commands = monitor_commands
        self._dispatcher = dispatcher or EventDispatcher()
        self._pool_listener = _PoolListener(self)
        self._command_listener = _CommandListener(self) if monitor_commands else None

    @property
    def monitor_commands(self) -> bool:
        return self._monitor_commands

    @property
    def listeners(self) -> list[Any]:
        """Listeners to pass as ``MongoClient(event_listeners=...)``."""
        listeners: list[Any] = [self._pool_listener]
        if self._command_listener is not None:
            listeners.append(self._command_listener)
        return listeners

    def on(self, kind: EventKind, handler: EventHandler) -> None:
        self._dispatcher.subscribe(kind, handler)

    def emit(self, event: DriverEvent) -> None:
        self._dispatcher.emit(event)
