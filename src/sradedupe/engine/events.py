"""Observer surface for scan notifications.

Scans report through four named events:

* ``progress(index, total)``: once per compared pair
* ``dupe(ref_a, ref_b, result)``: once per duplicate pair
* ``error(exc)``: terminal, a fault halted the scan
* ``end()``: terminal, every pair was compared
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from enum import StrEnum
from typing import Any

__all__ = ["EventEmitter", "Listener", "ScanEvent"]

Listener = Callable[..., Any]


class ScanEvent(StrEnum):
    """Names of the events emitted during a scan."""

    PROGRESS = "progress"
    DUPE = "dupe"
    ERROR = "error"
    END = "end"


class EventEmitter:
    """Minimal synchronous publish/subscribe registry.

    Listeners are called in subscription order, on the emitting thread,
    before ``emit`` returns.
    """

    def __init__(self) -> None:
        self._listeners: dict[ScanEvent, list[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> EventEmitter:
        """Subscribe *listener* to *event*.

        Returns
        -------
        EventEmitter
            Self, so subscriptions can be chained.

        Raises
        ------
        ValueError
            If *event* is not a known scan event.
        """
        self._listeners[_event(event)].append(listener)
        return self

    def off(self, event: str, listener: Listener) -> EventEmitter:
        """Unsubscribe *listener*; unknown listeners are ignored."""
        listeners = self._listeners[_event(event)]
        if listener in listeners:
            listeners.remove(listener)
        return self

    def listener_count(self, event: str) -> int:
        return len(self._listeners[_event(event)])

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of *event* with *args*.

        Returns
        -------
        bool
            True if at least one listener was called.
        """
        listeners = list(self._listeners[_event(event)])
        for listener in listeners:
            listener(*args)
        return bool(listeners)


def _event(name: str) -> ScanEvent:
    try:
        return ScanEvent(name)
    except ValueError:
        raise ValueError(
            f"Unknown event {name!r}; expected one of {[e.value for e in ScanEvent]}"
        ) from None
