"""Single-call entry point for instrumenting a MongoDB driver."""

from __future__ import annotations

from prometheus_client import CollectorRegistry

from mongodb_driver_metrics.core.config import ExporterOptions
from mongodb_driver_metrics.core.exporter import MongoDBDriverExporter
from mongodb_driver_metrics.core.protocols.event_stream import DriverEventStream


def monitor_mongodb_driver(
    stream: DriverEventStream,
    registry: CollectorRegistry,
    options: ExporterOptions | None = None,
) -> MongoDBDriverExporter:
    """Create an exporter for ``stream`` and enable its metrics.

    Args:
        stream: Event stream of the client to instrument.
        registry: Registry the metrics are registered on; owned by the caller.
        options: Exporter options; defaults apply when omitted.

    Returns:
        The enabled exporter.
    """
    exporter = MongoDBDriverExporter(stream, registry, options)
    exporter.enable_metrics()
    return exporter
