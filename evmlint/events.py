"""
Structured events emitted by the normalization core.

The core never prints or logs; it hands ``Event`` objects to an optional
callback.  ``logging_sink`` adapts that callback to the standard logging
module for the CLI and for library users who want log records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional


class EventKind(Enum):
    """What happened."""
    ISSUE_SUPPRESSED = "issue-suppressed"
    UNSUPPORTED_SOURCE_FORMAT = "unsupported-source-format"
    RESOLUTION_FAILED = "resolution-failed"
    EMPTY_FIELD_DROPPED = "empty-field-dropped"


# Log level used by ``logging_sink`` for each kind
_LEVELS = {
    EventKind.ISSUE_SUPPRESSED: logging.DEBUG,
    EventKind.UNSUPPORTED_SOURCE_FORMAT: logging.WARNING,
    EventKind.RESOLUTION_FAILED: logging.WARNING,
    EventKind.EMPTY_FIELD_DROPPED: logging.DEBUG,
}


@dataclass(frozen=True)
class Event:
    kind: EventKind
    message: str
    details: dict[str, Any] = field(default_factory=dict)


EventCallback = Callable[[Event], None]


def emit(callback: Optional[EventCallback], kind: EventKind, message: str, **details: Any) -> None:
    """Send an event to *callback* if one is installed."""
    if callback is not None:
        callback(Event(kind, message, details))


def logging_sink(logger: Optional[logging.Logger] = None) -> EventCallback:
    """Return a callback that turns events into log records on *logger*."""
    target = logger or logging.getLogger("evmlint")

    def _sink(event: Event) -> None:
        target.log(_LEVELS.get(event.kind, logging.INFO), "%s", event.message)

    return _sink
