"""Lifecycle notification interfaces for webauthn-app.

This module defines the observer protocol and the names of every
notification the client and transport publish.
"""

from __future__ import annotations

from typing import Any, Protocol


class Event:
    """Names of lifecycle notifications."""

    REGISTER_START = "webauthn-register-start"
    REGISTER_DONE = "webauthn-register-done"
    REGISTER_SUCCESS = "webauthn-register-success"
    REGISTER_ERROR = "webauthn-register-error"

    LOGIN_START = "webauthn-login-start"
    LOGIN_DONE = "webauthn-login-done"
    LOGIN_SUCCESS = "webauthn-login-success"
    LOGIN_ERROR = "webauthn-login-error"

    USER_PRESENCE_START = "webauthn-user-presence-start"
    USER_PRESENCE_DONE = "webauthn-user-presence-done"

    DEBUG = "webauthn-debug"


class DebugSubtype:
    """Subtypes carried by ``webauthn-debug`` notifications."""

    CREATE_OPTIONS = "create-options"
    CREATE_RESULT = "create-result"
    CREATE_FAILED = "create-failed"
    GET_OPTIONS = "get-options"
    GET_RESULT = "get-result"
    GET_FAILED = "get-failed"
    SEND = "send"
    SEND_RAW = "send-raw"
    SEND_ERROR = "send-error"
    RESPONSE_RAW = "response-raw"
    RESPONSE = "response"


class IObserver(Protocol):
    """Interface for receiving lifecycle notifications.

    Notifications are fire-and-forget: return values are ignored and
    exceptions raised here never alter the flow.
    """

    def notify(self, event: str, data: Any = None) -> None:
        """Receive a notification.

        Args:
            event: The notification name, one of the ``Event`` constants.
            data: Event details. For ``webauthn-debug`` this is a dictionary
                with ``subtype`` and ``data`` keys.
        """
        ...
