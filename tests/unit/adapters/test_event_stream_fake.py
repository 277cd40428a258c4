"""Unit tests for the in-memory event stream used by the exporter tests."""

from mongodb_driver_metrics.adapters.event_stream import FakeEventStream
from mongodb_driver_metrics.core.events import CheckedIn, ConnectionCreated, EventKind
from mongodb_driver_metrics.core.protocols import DriverEventStream


class TestFakeEventStream:
    def test_satisfies_protocol(self):
        assert isinstance(FakeEventStream(), DriverEventStream)

    def test_monitor_commands_flag(self):
        assert FakeEventStream().monitor_commands is False
        assert FakeEventStream(monitor_commands=True).monitor_commands is True

    def test_records_subscriptions_in_order(self):
        stream = FakeEventStream()

        stream.on(EventKind.CHECKED_IN, lambda e: None)
        stream.on(EventKind.CONNECTION_CREATED, lambda e: None)

        assert stream.subscriptions == [EventKind.CHECKED_IN, EventKind.CONNECTION_CREATED]

    def test_emit_all_records_and_delivers_in_order(self):
        stream = FakeEventStream()
        received = []
        stream.on(EventKind.CONNECTION_CREATED, received.append)
        stream.on(EventKind.CHECKED_IN, received.append)
        events = (ConnectionCreated(address="a:27017"), CheckedIn(address="a:27017"))

        stream.emit_all(*events)

        assert stream.emitted == list(events)
        assert received == list(events)

    def test_unsubscribed_events_are_still_recorded(self):
        stream = FakeEventStream()

        stream.emit(CheckedIn(address="a:27017"))

        assert stream.emitted == [CheckedIn(address="a:27017")]

    def test_clear_forgets_events_but_keeps_subscriptions(self):
        stream = FakeEventStream()
        received = []
        stream.on(EventKind.CHECKED_IN, received.append)
        stream.emit(CheckedIn(address="a:27017"))

        stream.clear()

        assert stream.emitted == []
        assert stream.subscriptions == [EventKind.CHECKED_IN]

        stream.emit(CheckedIn(address="b:27017"))
        assert stream.emitted == [CheckedIn(address="b:27017")]
        assert received == [CheckedIn(address="a:27017"), CheckedIn(address="b:27017")]
