"""Metric names, help texts and label declarations exported for the driver.

``obtain()`` applies the exporter's policy on top of the registrar lookup:
reuse a collector of the right kind, and refuse to start when the name is
taken by a collector of another kind or with other label names.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from mongodb_driver_metrics.core.exceptions import (
    MetricLabelConflictError,
    MetricTypeConflictError,
)
from mongodb_driver_metrics.core.labels import LabelComposer
from mongodb_driver_metrics.core.protocols.metric_registrar import (
    Created,
    Found,
    LabelConflict,
    MetricKind,
    MetricRegistrar,
    TypeConflict,
)

SERVER_ADDRESS = "server_address"
STATUS = "status"
COMMAND = "command"

STATUS_SUCCESS = "SUCCESS"
STATUS_FAILED = "FAILED"

MILLISECONDS_IN_A_SECOND = 1000


@dataclass(frozen=True)
class MetricDefinition:
    """Static description of one exported metric."""

    name: str
    kind: MetricKind
    documentation: str
    label_names: tuple[str, ...]


POOL_SIZE = MetricDefinition(
    "mongodb_driver_pool_size",
    MetricKind.GAUGE,
    "the current size of the connection pool, including idle and in-use members",
    (SERVER_ADDRESS,),
)
POOL_MIN = MetricDefinition(
    "mongodb_driver_pool_min",
    MetricKind.GAUGE,
    "the minimum size of the connection pool",
    (SERVER_ADDRESS,),
)
POOL_MAX = MetricDefinition(
    "mongodb_driver_pool_max",
    MetricKind.GAUGE,
    "the maximum size of the connection pool",
    (SERVER_ADDRESS,),
)
POOL_CHECKED_OUT = MetricDefinition(
    "mongodb_driver_pool_checkedout",
    MetricKind.GAUGE,
    "the count of connections that are currently in use",
    (SERVER_ADDRESS,),
)
POOL_WAIT_QUEUE_SIZE = MetricDefinition(
    "mongodb_driver_pool_waitqueuesize",
    MetricKind.GAUGE,
    "the current size of the wait queue for a connection from the pool",
    (SERVER_ADDRESS,),
)
POOL_WAIT_QUEUE_SECONDS = MetricDefinition(
    "mongodb_driver_pool_waitqueue_seconds",
    MetricKind.HISTOGRAM,
    "Duration of waiting for a connection from the pool",
    (SERVER_ADDRESS, STATUS),
)
COMMANDS_SECONDS = MetricDefinition(
    "mongodb_driver_commands_seconds",
    MetricKind.HISTOGRAM,
    "Timer of mongodb commands",
    (COMMAND, SERVER_ADDRESS, STATUS),
)


def obtain(
    registrar: MetricRegistrar,
    definition: MetricDefinition,
    *,
    prefix: str,
    labels: LabelComposer,
    buckets: Sequence[float] | None = None,
) -> Any:
    """Get or create the collector for ``definition``.

    Raises:
        MetricTypeConflictError: if the prefixed name is registered with
            another collector type.
        MetricLabelConflictError: if the prefixed name is registered with
            other label names.
    """
    result = registrar.get_or_create(
        f"{prefix}{definition.name}",
        definition.kind,
        definition.documentation,
        labels.label_names(definition.label_names),
        buckets,
    )
    if isinstance(result, (Found, Created)):
        return result.metric
    if isinstance(result, TypeConflict):
        raise MetricTypeConflictError(result.name, result.existing_kind, result.requested_kind)
    if isinstance(result, LabelConflict):
        raise MetricLabelConflictError(
            result.name, result.existing_label_names, result.requested_label_names
        )
    raise TypeError(f"Unexpected registrar result: {result!r}")
