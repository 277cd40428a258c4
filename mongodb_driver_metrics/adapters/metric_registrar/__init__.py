"""Metric registrar adapters."""

from mongodb_driver_metrics.adapters.metric_registrar.prometheus import PrometheusMetricRegistrar

__all__ = ["PrometheusMetricRegistrar"]
