"""Observer implementations.

This module provides observers that forward lifecycle notifications to the
standard logging system or keep them in memory.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from webauthn_app.interfaces.events import Event, IObserver


class LoggingObserver(IObserver):
    """Observer that writes every notification to a logger.

    Debug notifications are logged at DEBUG, errors at WARNING and
    everything else at INFO.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger("webauthn_app.events")

    def notify(self, event: str, data: Any = None) -> None:
        if event == Event.DEBUG:
            self.logger.debug("%s [%s] %r", event, data["subtype"], data["data"])
        elif event in (Event.REGISTER_ERROR, Event.LOGIN_ERROR):
            self.logger.warning("%s: %s", event, data)
        else:
            self.logger.info("%s", event)


class RecordingObserver(IObserver):
    """Observer that keeps every notification, in order.

    Attributes:
        events: ``(event, data)`` pairs in the order they were received.
    """

    def __init__(self) -> None:
        self.events: List[Tuple[str, Any]] = []

    def notify(self, event: str, data: Any = None) -> None:
        self.events.append((event, data))

    def names(self) -> List[str]:
        """Event names, excluding debug notifications."""
        return [event for event, _ in self.events if event != Event.DEBUG]

    def debug_subtypes(self) -> List[str]:
        return [data["subtype"] for event, data in self.events if event == Event.DEBUG]
