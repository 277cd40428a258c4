"""Ordered, single-loop delivery of driver events to subscribed handlers."""

from __future__ import annotations

import threading
from collections import defaultdict, deque
from collections.abc import Callable

from mongodb_driver_metrics.core.events import DriverEvent, EventKind

EventHandler = Callable[[DriverEvent], None]


class EventDispatcher:
    """Dispatch table from ``EventKind`` to handlers, fed by an ordered queue.

    ``emit()`` enqueues the event and, unless a drain loop is already
    running, drains the queue on the calling thread.  Events emitted while
    the loop runs (re-entrantly from a handler, or from another thread) are
    delivered by that loop in arrival order, so two handler invocations
    never interleave.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventKind, list[EventHandler]] = defaultdict(list)
        self._queue: deque[DriverEvent] = deque()
        self._lock = threading.Lock()
        self._draining = False

    def subscribe(self, kind: EventKind, handler: EventHandler) -> None:
        """Append ``handler`` to the handlers invoked for ``kind``."""
        with self._lock:
            self._handlers[kind].append(handler)

    def subscribed_kinds(self) -> set[EventKind]:
        with self._lock:
            return {kind for kind, handlers in self._handlers.items() if handlers}

    def emit(self, event: DriverEvent) -> None:
        """Queue ``event`` and deliver everything pending, in order.

        A failing handler does not stop delivery: the loop keeps draining
        the queue, then re-raises the first handler exception to the caller
        that owns the loop.
        """
        with self._lock:
            self._queue.append(event)
            if self._draining:
                return
            self._draining = True

        self._drain()

    def _drain(self) -> None:
        first_error: Exception | None = None
        released = False
        try:
            while True:
                with self._lock:
                    # _draining is released under the same lock as the empty check.
                    if not self._queue:
                        self._draining = False
                        released = True
                        break
                    event = self._queue.popleft()
                    handlers = tuple(self._handlers.get(event.kind, ()))
                for handler in handlers:
                    try:
                        handler(event)
                    except Exception as exc:
                        if first_error is None:
                            first_error = exc
        finally:
            if not released:
                with self._lock:
                    self._draining = False

        if first_error is not None:
            raise first_error
