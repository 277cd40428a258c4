"""Core protocols for dependency injection."""

from mongodb_driver_metrics.core.protocols.event_stream import DriverEventStream
from mongodb_driver_metrics.core.protocols.info_logger import InfoLogger
from mongodb_driver_metrics.core.protocols.metric_registrar import (
    Created,
    Found,
    LabelConflict,
    LookupResult,
    MetricKind,
    MetricRegistrar,
    TypeConflict,
)

__all__ = [
    "Created",
    "DriverEventStream",
    "Found",
    "InfoLogger",
    "LabelConflict",
    "LookupResult",
    "MetricKind",
    "MetricRegistrar",
    "TypeConflict",
]
