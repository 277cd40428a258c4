"""Exceptions raised by the MongoDB driver metrics exporter."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mongodb_driver_metrics.core.protocols.metric_registrar import MetricKind


class MongoDBDriverMetricsError(Exception):
    """Base class for all exporter errors."""


class MetricTypeConflictError(MongoDBDriverMetricsError):
    """A metric name is already registered with a different collector type.

    Raised while the exporter obtains its metrics, never while handling
    driver events.
    """

    def __init__(self, name: str, existing_kind: MetricKind | None, requested_kind: MetricKind):
        self.name = name
        self.existing_kind = existing_kind
        self.requested_kind = requested_kind
        existing = existing_kind.value if existing_kind is not None else "unknown collector"
        super().__init__(
            f"Metric '{name}' is already registered as {existing}, "
            f"cannot use it as {requested_kind.value}."
        )


class MetricLabelConflictError(MongoDBDriverMetricsError):
    """A metric name is already registered with different label names.

    Happens when two exporters share a registry but are configured with
    different default labels.
    """

    def __init__(
        self,
        name: str,
        existing_label_names: tuple[str, ...],
        requested_label_names: tuple[str, ...],
    ):
        self.name = name
        self.existing_label_names = existing_label_names
        self.requested_label_names = requested_label_names
        super().__init__(
            f"Metric '{name}' is already registered with labels {list(existing_label_names)}, "
            f"cannot use it with labels {list(requested_label_names)}."
        )
