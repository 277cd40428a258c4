"""MetricRegistrar protocol for obtaining collectors from a shared registry.

The registry is owned by the caller and may already hold collectors from
another exporter instance or another library.  Lookups therefore return a
typed outcome instead of a bare collector, and the caller decides what a
conflict means.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable


class MetricKind(str, enum.Enum):
    """Collector types the exporter registers."""

    GAUGE = "gauge"
    HISTOGRAM = "histogram"


@dataclass(frozen=True)
class Found:
    """A collector of the requested kind was already registered."""

    metric: Any


@dataclass(frozen=True)
class Created:
    """No collector existed under the name; a new one was registered."""

    metric: Any


@dataclass(frozen=True)
class TypeConflict:
    """A collector exists under the name but is not of the requested kind.

    ``existing_kind`` is ``None`` when the existing collector is neither a
    gauge nor a histogram.
    """

    name: str
    existing_kind: MetricKind | None
    requested_kind: MetricKind


@dataclass(frozen=True)
class LabelConflict:
    """A collector of the requested kind exists but declares other label names."""

    name: str
    existing_label_names: tuple[str, ...]
    requested_label_names: tuple[str, ...]


LookupResult = Union[Found, Created, TypeConflict, LabelConflict]


@runtime_checkable
class MetricRegistrar(Protocol):
    """Protocol for idempotent metric registration."""

    def get_or_create(
        self,
        name: str,
        kind: MetricKind,
        documentation: str,
        label_names: Sequence[str],
        buckets: Sequence[float] | None = None,
    ) -> LookupResult:
        """Return the collector registered under ``name``, creating it if absent.

        Args:
            name: Full metric name, prefix included.
            kind: Collector type wanted by the caller.
            documentation: Help text used when the collector is created.
            label_names: Declared label names used when the collector is created.
            buckets: Histogram bucket bounds; ignored for gauges.
        """
        ...
