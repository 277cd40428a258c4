"""Prometheus metrics for the MongoDB Python driver's connection pools and commands."""

from mongodb_driver_metrics.adapters.event_stream import FakeEventStream, PymongoEventStream
from mongodb_driver_metrics.core.config import ExporterOptions, ExporterSettings, get_settings
from mongodb_driver_metrics.core.exceptions import (
    MetricLabelConflictError,
    MetricTypeConflictError,
    MongoDBDriverMetricsError,
)
from mongodb_driver_metrics.core.exporter import MongoDBDriverExporter
from mongodb_driver_metrics.monitor import monitor_mongodb_driver

__all__ = [
    "ExporterOptions",
    "ExporterSettings",
    "FakeEventStream",
    "MetricLabelConflictError",
    "MetricTypeConflictError",
    "MongoDBDriverExporter",
    "MongoDBDriverMetricsError",
    "PymongoEventStream",
    "get_settings",
    "monitor_mongodb_driver",
]
