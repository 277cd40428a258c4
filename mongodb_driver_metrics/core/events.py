"""Driver lifecycle events consumed by the exporter.

Each event is an immutable record tagged with a class-level ``kind`` used as
the dispatch key.  Addresses are ``"host:port"`` strings and durations are
milliseconds.  ``duration_ms`` on checkout events is ``None`` when the
driver does not report wait times.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Union


class EventKind(str, enum.Enum):
    """Names of the driver events the exporter subscribes to."""

    POOL_CREATED = "connectionPoolCreated"
    POOL_CLOSED = "connectionPoolClosed"
    CONNECTION_CREATED = "connectionCreated"
    CONNECTION_CLOSED = "connectionClosed"
    CHECK_OUT_STARTED = "connectionCheckOutStarted"
    CHECKED_OUT = "connectionCheckedOut"
    CHECK_OUT_FAILED = "connectionCheckOutFailed"
    CHECKED_IN = "connectionCheckedIn"
    COMMAND_SUCCEEDED = "commandSucceeded"
    COMMAND_FAILED = "commandFailed"


@dataclass(frozen=True)
class PoolCreated:
    kind: ClassVar[EventKind] = EventKind.POOL_CREATED

    address: str
    min_size: float
    max_size: float


@dataclass(frozen=True)
class PoolClosed:
    kind: ClassVar[EventKind] = EventKind.POOL_CLOSED

    address: str


@dataclass(frozen=True)
class ConnectionCreated:
    kind: ClassVar[EventKind] = EventKind.CONNECTION_CREATED

    address: str


@dataclass(frozen=True)
class ConnectionClosed:
    kind: ClassVar[EventKind] = EventKind.CONNECTION_CLOSED

    address: str


@dataclass(frozen=True)
class CheckOutStarted:
    kind: ClassVar[EventKind] = EventKind.CHECK_OUT_STARTED

    address: str


@dataclass(frozen=True)
class CheckedOut:
    kind: ClassVar[EventKind] = EventKind.CHECKED_OUT

    address: str
    duration_ms: float | None = None


@dataclass(frozen=True)
class CheckOutFailed:
    kind: ClassVar[EventKind] = EventKind.CHECK_OUT_FAILED

    address: str
    duration_ms: float | None = None


@dataclass(frozen=True)
class CheckedIn:
    kind: ClassVar[EventKind] = EventKind.CHECKED_IN

    address: str


@dataclass(frozen=True)
class CommandSucceeded:
    kind: ClassVar[EventKind] = EventKind.COMMAND_SUCCEEDED

    command_name: str
    address: str
    duration_ms: float


@dataclass(frozen=True)
class CommandFailed:
    kind: ClassVar[EventKind] = EventKind.COMMAND_FAILED

    command_name: str
    address: str
    duration_ms: float


DriverEvent = Union[
    PoolCreated,
    PoolClosed,
    ConnectionCreated,
    ConnectionClosed,
    CheckOutStarted,
    CheckedOut,
    CheckOutFailed,
    CheckedIn,
    CommandSucceeded,
    CommandFailed,
]

POOL_EVENT_KINDS: tuple[EventKind, ...] = (
    EventKind.POOL_CREATED,
    EventKind.POOL_CLOSED,
    EventKind.CONNECTION_CREATED,
    EventKind.CONNECTION_CLOSED,
    EventKind.CHECK_OUT_STARTED,
    EventKind.CHECKED_OUT,
    EventKind.CHECK_OUT_FAILED,
    EventKind.CHECKED_IN,
)

COMMAND_EVENT_KINDS: tuple[EventKind, ...] = (
    EventKind.COMMAND_SUCCEEDED,
    EventKind.COMMAND_FAILED,
)
