"""Connection pool gauges driven by pool lifecycle events.

Five gauges track, per server address, the pool size, its configured
bounds, the connections currently checked out and the wait-queue length.
A histogram records how long callers waited for a connection.

On ``PoolClosed`` only the closing address's pool size is zeroed, while the
min, max, checked-out and wait-queue gauges are cleared for every address.
"""

from __future__ import annotations

from collections.abc import Sequence

from mongodb_driver_metrics.core.dispatcher import EventHandler
from mongodb_driver_metrics.core.events import (
    CheckedIn,
    CheckedOut,
    CheckOutFailed,
    CheckOutStarted,
    ConnectionClosed,
    ConnectionCreated,
    EventKind,
    PoolClosed,
    PoolCreated,
)
from mongodb_driver_metrics.core.labels import LabelComposer
from mongodb_driver_metrics.core.metric_definitions import (
    MILLISECONDS_IN_A_SECOND,
    POOL_CHECKED_OUT,
    POOL_MAX,
    POOL_MIN,
    POOL_SIZE,
    POOL_WAIT_QUEUE_SECONDS,
    POOL_WAIT_QUEUE_SIZE,
    SERVER_ADDRESS,
    STATUS,
    STATUS_FAILED,
    STATUS_SUCCESS,
    obtain,
)
from mongodb_driver_metrics.core.protocols.metric_registrar import MetricRegistrar

METRIC_INITIAL_ZERO = 0


class PoolLifecycleHandler:
    """Applies pool events to the pool gauges and wait-queue histogram."""

    def __init__(
        self,
        registrar: MetricRegistrar,
        labels: LabelComposer,
        *,
        prefix: str = "",
        wait_queue_buckets: Sequence[float],
    ) -> None:
        self._labels = labels

        self.pool_size = obtain(registrar, POOL_SIZE, prefix=prefix, labels=labels)
        self.min_size = obtain(registrar, POOL_MIN, prefix=prefix, labels=labels)
        self.max_size = obtain(registrar, POOL_MAX, prefix=prefix, labels=labels)
        self.checked_out = obtain(registrar, POOL_CHECKED_OUT, prefix=prefix, labels=labels)
        self.wait_queue_size = obtain(
            registrar, POOL_WAIT_QUEUE_SIZE, prefix=prefix, labels=labels
        )
        self.wait_queue_seconds = obtain(
            registrar,
            POOL_WAIT_QUEUE_SECONDS,
            prefix=prefix,
            labels=labels,
            buckets=wait_queue_buckets,
        )

    def handlers(self) -> dict[EventKind, EventHandler]:
        """Dispatch table for the pool events."""
        return {
            EventKind.POOL_CREATED: self.on_pool_created,
            EventKind.POOL_CLOSED: self.on_pool_closed,
            EventKind.CONNECTION_CREATED: self.on_connection_created,
            EventKind.CONNECTION_CLOSED: self.on_connection_closed,
            EventKind.CHECK_OUT_STARTED: self.on_check_out_started,
            EventKind.CHECKED_OUT: self.on_checked_out,
            EventKind.CHECK_OUT_FAILED: self.on_check_out_failed,
            EventKind.CHECKED_IN: self.on_checked_in,
        }

    def _server(self, address: str) -> dict[str, str]:
        return self._labels.compose({SERVER_ADDRESS: address})

    def _observe_wait(self, address: str, status: str, duration_ms: float | None) -> None:
        # Drivers that predate checkout durations send no value; skip rather than record 0.
        if duration_ms is None:
            return
        labels = self._labels.compose({SERVER_ADDRESS: address, STATUS: status})
        self.wait_queue_seconds.labels(**labels).observe(duration_ms / MILLISECONDS_IN_A_SECOND)

    # -- event handlers --

    def on_pool_created(self, event: PoolCreated) -> None:
        labels = self._server(event.address)
        self.pool_size.labels(**labels).set(METRIC_INITIAL_ZERO)
        self.min_size.labels(**labels).set(event.min_size)
        self.max_size.labels(**labels).set(event.max_size)
        self.checked_out.labels(**labels).set(METRIC_INITIAL_ZERO)
        self.wait_queue_size.labels(**labels).set(METRIC_INITIAL_ZERO)

    def on_connection_created(self, event: ConnectionCreated) -> None:
        self.pool_size.labels(**self._server(event.address)).inc()

    def on_connection_closed(self, event: ConnectionClosed) -> None:
        self.pool_size.labels(**self._server(event.address)).dec()

    def on_check_out_started(self, event: CheckOutStarted) -> None:
        self.wait_queue_size.labels(**self._server(event.address)).inc()

    def on_checked_out(self, event: CheckedOut) -> None:
        labels = self._server(event.address)
        self.checked_out.labels(**labels).inc()
        self.wait_queue_size.labels(**labels).dec()
        self._observe_wait(event.address, STATUS_SUCCESS, event.duration_ms)

    def on_check_out_failed(self, event: CheckOutFailed) -> None:
        self.wait_queue_size.labels(**self._server(event.address)).dec()
        self._observe_wait(event.address, STATUS_FAILED, event.duration_ms)

    def on_checked_in(self, event: CheckedIn) -> None:
        self.checked_out.labels(**self._server(event.address)).dec()

    def on_pool_closed(self, event: PoolClosed) -> None:
        self.pool_size.labels(**self._server(event.address)).set(METRIC_INITIAL_ZERO)
        # TODO: confirm with dashboard owners whether these should be scoped
        # to event.address; today one closing pool clears every address.
        self.min_size.clear()
        self.max_size.clear()
        self.checked_out.clear()
        self.wait_queue_size.clear()
