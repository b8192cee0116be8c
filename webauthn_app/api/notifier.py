"""Observer dispatch for webauthn-app."""

from __future__ import annotations

import logging
from typing import Any, Optional

from webauthn_app.interfaces import Event, IObserver

LOGGER = logging.getLogger(__name__)


class Notifier:
    """Publishes lifecycle notifications to an optional observer.

    A failing observer is logged and otherwise ignored, so notifications can
    never change the outcome of a flow.
    """

    def __init__(self, observer: Optional[IObserver] = None) -> None:
        self._observer = observer

    def notify(self, event: str, data: Any = None) -> None:
        LOGGER.debug("notify %s", event)

        if self._observer is None:
            return

        try:
            self._observer.notify(event, data)
        except Exception:
            LOGGER.exception("observer raised while handling %s", event)

    def debug(self, subtype: str, data: Any = None) -> None:
        self.notify(Event.DEBUG, {"subtype": subtype, "data": data})
