"""Command duration histogram driven by command monitoring events."""

from __future__ import annotations

from collections.abc import Sequence

from mongodb_driver_metrics.core.dispatcher import EventHandler
from mongodb_driver_metrics.core.events import CommandFailed, CommandSucceeded, EventKind
from mongodb_driver_metrics.core.labels import LabelComposer
from mongodb_driver_metrics.core.metric_definitions import (
    COMMAND,
    COMMANDS_SECONDS,
    MILLISECONDS_IN_A_SECOND,
    SERVER_ADDRESS,
    STATUS,
    STATUS_FAILED,
    STATUS_SUCCESS,
    obtain,
)
from mongodb_driver_metrics.core.protocols.metric_registrar import MetricRegistrar


class CommandTimer:
    """Observes command durations, labelled by command, server and outcome."""

    def __init__(
        self,
        registrar: MetricRegistrar,
        labels: LabelComposer,
        *,
        prefix: str = "",
        buckets: Sequence[float],
    ) -> None:
        self._labels = labels
        self.commands = obtain(
            registrar, COMMANDS_SECONDS, prefix=prefix, labels=labels, buckets=buckets
        )

    def handlers(self) -> dict[EventKind, EventHandler]:
        return {
            EventKind.COMMAND_SUCCEEDED: self.on_command_succeeded,
            EventKind.COMMAND_FAILED: self.on_command_failed,
        }

    def _observe(self, command_name: str, address: str, status: str, duration_ms: float) -> None:
        labels = self._labels.compose(
            {COMMAND: command_name, SERVER_ADDRESS: address, STATUS: status}
        )
        self.commands.labels(**labels).observe(duration_ms / MILLISECONDS_IN_A_SECOND)

    def on_command_succeeded(self, event: CommandSucceeded) -> None:
        self._observe(event.command_name, event.address, STATUS_SUCCESS, event.duration_ms)

    def on_command_failed(self, event: CommandFailed) -> None:
        self._observe(event.command_name, event.address, STATUS_FAILED, event.duration_ms)
