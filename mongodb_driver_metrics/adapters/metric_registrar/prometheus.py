"""Prometheus implementation of the MetricRegistrar protocol.

Looks collectors up by name on a caller-supplied CollectorRegistry and only
registers a new Gauge or Histogram when the name is free.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

from prometheus_client import CollectorRegistry, Gauge, Histogram

from mongodb_driver_metrics.core.logging import logger
from mongodb_driver_metrics.core.protocols.metric_registrar import (
    Created,
    Found,
    LabelConflict,
    LookupResult,
    MetricKind,
    MetricRegistrar,
    TypeConflict,
)

# Serializes lookup + registration across exporter instances sharing a registry.
_registry_lock = threading.Lock()

_COLLECTOR_TYPES: dict[MetricKind, type] = {
    MetricKind.GAUGE: Gauge,
    MetricKind.HISTOGRAM: Histogram,
}


def _kind_of(collector: object) -> MetricKind | None:
    for kind, collector_type in _COLLECTOR_TYPES.items():
        if isinstance(collector, collector_type):
            return kind
    return None


class PrometheusMetricRegistrar(MetricRegistrar):
    """Get-or-create collectors on a shared prometheus CollectorRegistry."""

    def __init__(self, registry: CollectorRegistry) -> None:
        self._registry = registry
        self._logger = logger.with_context(component="metric_registrar")

    def _lookup(self, name: str) -> object | None:
        # CollectorRegistry._names_to_collectors is internal but stable; it
        # maps every exposed sample name, histograms included, to its collector.
        return self._registry._names_to_collectors.get(name)

    def get_or_create(
        self,
        name: str,
        kind: MetricKind,
        documentation: str,
        label_names: Sequence[str],
        buckets: Sequence[float] | None = None,
    ) -> LookupResult:
        with _registry_lock:
            existing = self._lookup(name)
            if existing is not None:
                existing_kind = _kind_of(existing)
                if existing_kind is kind:
                    existing_labels = tuple(getattr(existing, "_labelnames", ()))
                    if existing_labels != tuple(label_names):
                        self._logger.error(
                            f"Metric '{name}' already registered with labels {existing_labels}"
                        )
                        return LabelConflict(name, existing_labels, tuple(label_names))
                    self._logger.debug(f"Reusing registered {kind.value} '{name}'")
                    return Found(existing)
                self._logger.error(
                    f"Metric '{name}' already registered with an incompatible type"
                )
                return TypeConflict(name, existing_kind, kind)

            if kind is MetricKind.HISTOGRAM:
                metric = Histogram(
                    name,
                    documentation,
                    list(label_names),
                    buckets=tuple(buckets) if buckets is not None else Histogram.DEFAULT_BUCKETS,
                    registry=self._registry,
                )
            else:
                metric = Gauge(
                    name,
                    documentation,
                    list(label_names),
                    registry=self._registry,
                )
            self._logger.debug(f"Registered {kind.value} '{name}'")
            return Created(metric)
