"""MongoDB driver exporter.

Composes the pool and command handlers behind a single object: metrics are
obtained from the shared registry at construction, and ``enable_metrics()``
binds the handlers to the driver's event stream.
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry

from mongodb_driver_metrics.adapters.metric_registrar import PrometheusMetricRegistrar
from mongodb_driver_metrics.core.command_metrics import CommandTimer
from mongodb_driver_metrics.core.config import ExporterOptions
from mongodb_driver_metrics.core.dispatcher import EventHandler
from mongodb_driver_metrics.core.events import EventKind
from mongodb_driver_metrics.core.labels import LabelComposer
from mongodb_driver_metrics.core.logging import logger
from mongodb_driver_metrics.core.pool_metrics import PoolLifecycleHandler
from mongodb_driver_metrics.core.protocols.event_stream import DriverEventStream
from mongodb_driver_metrics.core.protocols.metric_registrar import MetricRegistrar

POOL_METRICS_ENABLED = "Successfully enabled connection pool metrics for the MongoDB Python driver."
COMMAND_METRICS_ENABLED = "Successfully enabled command metrics for the MongoDB Python driver."


class MongoDBDriverExporter:
    """Exports MongoDB driver pool and command metrics to a Prometheus registry.

    The caller owns ``registry``; the exporter only registers and mutates
    collectors on it.  The command histogram is created only when the event
    stream reports command monitoring as enabled.

    Raises:
        MetricTypeConflictError: at construction, if one of the metric names
            is already registered with another collector type.
        MetricLabelConflictError: at construction, if one of the metric names
            is already registered with other label names.
    """

    def __init__(
        self,
        stream: DriverEventStream,
        registry: CollectorRegistry,
        options: ExporterOptions | None = None,
        *,
        registrar: MetricRegistrar | None = None,
    ) -> None:
        self._stream = stream
        self._registry = registry
        self._options = options or ExporterOptions()
        self._enabled = False
        self._logger = logger.with_context(prefix=self._options.prefix)

        registrar = registrar or PrometheusMetricRegistrar(self._registry)
        labels = LabelComposer(self._options.default_labels)

        self.pool = PoolLifecycleHandler(
            registrar,
            labels,
            prefix=self._options.prefix,
            wait_queue_buckets=self._options.wait_queue_seconds_histogram_buckets,
        )
        self.commands: CommandTimer | None = None
        if self.monitor_commands:
            self.commands = CommandTimer(
                registrar,
                labels,
                prefix=self._options.prefix,
                buckets=self._options.mongodb_driver_commands_seconds_histogram_buckets,
            )

    @property
    def monitor_commands(self) -> bool:
        return bool(self._stream.monitor_commands)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable_metrics(self) -> None:
        """Subscribe all handlers to the event stream.

        Handlers are bound once; later calls do nothing.
        """
        if self._enabled:
            self._logger.debug("MongoDB driver metrics already enabled")
            return
        self._enabled = True

        self._subscribe(self.pool.handlers())
        self._announce(POOL_METRICS_ENABLED)

        if self.commands is not None:
            self._subscribe(self.commands.handlers())
            self._announce(COMMAND_METRICS_ENABLED)

    def _subscribe(self, handlers: dict[EventKind, EventHandler]) -> None:
        for kind, handler in handlers.items():
            self._stream.on(kind, handler)

    def _announce(self, message: str) -> None:
        self._logger.debug(message)
        if self._options.logger is not None:
            self._options.logger.info(message)
