"""Unit tests for the PyMongo event stream adapter."""

import math
from types import SimpleNamespace

import pytest
from pymongo import monitoring

from mongodb_driver_metrics.adapters.event_stream import PymongoEventStream
from mongodb_driver_metrics.adapters.event_stream.pymongo_listeners import format_address
from mongodb_driver_metrics.core.dispatcher import EventDispatcher
from mongodb_driver_metrics.core.events import (
    CheckedIn,
    CheckedOut,
    CheckOutFailed,
    CheckOutStarted,
    CommandFailed,
    CommandSucceeded,
    ConnectionClosed,
    ConnectionCreated,
    EventKind,
    PoolClosed,
    PoolCreated,
)
from mongodb_driver_metrics.core.exporter import MongoDBDriverExporter
from mongodb_driver_metrics.core.protocols import DriverEventStream

ADDRESS = ("db.example.com", 27017)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class RecordingDispatcher(EventDispatcher):
    """Dispatcher that records every emitted event."""

    def __init__(self) -> None:
        super().__init__()
        self.events = []

    def emit(self, event) -> None:
        self.events.append(event)
        super().emit(event)


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def pymongo_stream(dispatcher):
    return PymongoEventStream(monitor_commands=True, dispatcher=dispatcher)


def _pool_listener(stream):
    return stream.listeners[0]


def _command_listener(stream):
    return stream.listeners[1]


# ---------------------------------------------------------------------------
# Listener wiring
# ---------------------------------------------------------------------------


class TestListeners:
    def test_satisfies_protocol(self, pymongo_stream):
        assert isinstance(pymongo_stream, DriverEventStream)

    def test_pool_listener_only_without_command_monitoring(self):
        stream = PymongoEventStream()

        assert stream.monitor_commands is False
        assert len(stream.listeners) == 1
        assert isinstance(stream.listeners[0], monitoring.ConnectionPoolListener)

    def test_command_listener_added_with_monitoring(self, pymongo_stream):
        assert pymongo_stream.monitor_commands is True
        assert isinstance(pymongo_stream.listeners[0], monitoring.ConnectionPoolListener)
        assert isinstance(pymongo_stream.listeners[1], monitoring.CommandListener)

    def test_format_address(self):
        assert format_address(("localhost", 27017)) == "localhost:27017"
        assert format_address(("/tmp/mongodb-27017.sock", None)) == "/tmp/mongodb-27017.sock"


# ---------------------------------------------------------------------------
# Pool event translation
# ---------------------------------------------------------------------------


class TestPoolEventTranslation:
    def test_pool_created_uses_configured_bounds(self, pymongo_stream, dispatcher):
        event = SimpleNamespace(address=ADDRESS, options={"minPoolSize": 2, "maxPoolSize": 20})

        _pool_listener(pymongo_stream).pool_created(event)

        assert dispatcher.events == [
            PoolCreated(address="db.example.com:27017", min_size=2, max_size=20)
        ]

    def test_pool_created_falls_back_to_driver_defaults(self, pymongo_stream, dispatcher):
        _pool_listener(pymongo_stream).pool_created(SimpleNamespace(address=ADDRESS, options={}))

        assert dispatcher.events == [
            PoolCreated(address="db.example.com:27017", min_size=0, max_size=100)
        ]

    def test_unbounded_pool_maps_to_infinity(self, pymongo_stream, dispatcher):
        event = SimpleNamespace(address=ADDRESS, options={"maxPoolSize": None})

        _pool_listener(pymongo_stream).pool_created(event)

        assert math.isinf(dispatcher.events[0].max_size)

    def test_address_only_events(self, pymongo_stream, dispatcher):
        listener = _pool_listener(pymongo_stream)
        event = SimpleNamespace(address=ADDRESS, connection_id=1)

        listener.pool_closed(event)
        listener.connection_created(event)
        listener.connection_closed(event)
        listener.connection_check_out_started(event)
        listener.connection_checked_in(event)

        address = "db.example.com:27017"
        assert dispatcher.events == [
            PoolClosed(address=address),
            ConnectionCreated(address=address),
            ConnectionClosed(address=address),
            CheckOutStarted(address=address),
            CheckedIn(address=address),
        ]

    def test_checkout_duration_converted_to_milliseconds(self, pymongo_stream, dispatcher):
        listener = _pool_listener(pymongo_stream)

        listener.connection_checked_out(SimpleNamespace(address=ADDRESS, duration=0.25))
        listener.connection_check_out_failed(SimpleNamespace(address=ADDRESS, duration=1.5))

        assert dispatcher.events == [
            CheckedOut(address="db.example.com:27017", duration_ms=250.0),
            CheckOutFailed(address="db.example.com:27017", duration_ms=1500.0),
        ]

    def test_checkout_without_duration_stays_unset(self, pymongo_stream, dispatcher):
        listener = _pool_listener(pymongo_stream)

        listener.connection_checked_out(SimpleNamespace(address=ADDRESS))
        listener.connection_check_out_failed(SimpleNamespace(address=ADDRESS, reason="timeout"))

        assert [event.duration_ms for event in dispatcher.events] == [None, None]

    def test_unmapped_events_are_ignored(self, pymongo_stream, dispatcher):
        listener = _pool_listener(pymongo_stream)
        event = SimpleNamespace(address=ADDRESS, connection_id=1)

        listener.pool_ready(event)
        listener.pool_cleared(event)
        listener.connection_ready(event)
        _command_listener(pymongo_stream).started(event)

        assert dispatcher.events == []


# ---------------------------------------------------------------------------
# Command event translation
# ---------------------------------------------------------------------------


class TestCommandEventTranslation:
    def test_succeeded(self, pymongo_stream, dispatcher):
        event = SimpleNamespace(command_name="find", connection_id=ADDRESS, duration_micros=1500)

        _command_listener(pymongo_stream).succeeded(event)

        assert dispatcher.events == [
            CommandSucceeded(command_name="find", address="db.example.com:27017", duration_ms=1.5)
        ]

    def test_failed(self, pymongo_stream, dispatcher):
        event = SimpleNamespace(command_name="insert", connection_id=ADDRESS, duration_micros=42)

        _command_listener(pymongo_stream).failed(event)

        assert dispatcher.events == [
            CommandFailed(command_name="insert", address="db.example.com:27017", duration_ms=0.042)
        ]


# ---------------------------------------------------------------------------
# End to end through the exporter
# ---------------------------------------------------------------------------


class TestPymongoStreamWithExporter:
    def test_listener_callbacks_update_metrics(self, pymongo_stream, registry, sample):
        MongoDBDriverExporter(pymongo_stream, registry).enable_metrics()
        pool = _pool_listener(pymongo_stream)
        commands = _command_listener(pymongo_stream)

        pool.pool_created(SimpleNamespace(address=ADDRESS, options={"maxPoolSize": 10}))
        pool.connection_created(SimpleNamespace(address=ADDRESS, connection_id=1))
        pool.connection_check_out_started(SimpleNamespace(address=ADDRESS))
        pool.connection_checked_out(SimpleNamespace(address=ADDRESS, duration=0.005))
        commands.succeeded(
            SimpleNamespace(command_name="find", connection_id=ADDRESS, duration_micros=2000)
        )

        server = "db.example.com:27017"
        assert sample("mongodb_driver_pool_size", server_address=server) == 1.0
        assert sample("mongodb_driver_pool_max", server_address=server) == 10.0
        assert sample("mongodb_driver_pool_checkedout", server_address=server) == 1.0
        assert sample(
            "mongodb_driver_pool_waitqueue_seconds_count", server_address=server, status="SUCCESS"
        ) == 1.0
        assert sample(
            "mongodb_driver_commands_seconds_sum",
            command="find",
            server_address=server,
            status="SUCCESS",
        ) == 0.002

    def test_subscriptions_reach_dispatcher(self, pymongo_stream, registry, dispatcher):
        MongoDBDriverExporter(pymongo_stream, registry).enable_metrics()

        assert EventKind.COMMAND_SUCCEEDED in dispatcher.subscribed_kinds()
        assert EventKind.POOL_CREATED in dispatcher.subscribed_kinds()
