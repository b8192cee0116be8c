"""Preference overlay message for webauthn-app."""

from __future__ import annotations

from webauthn_app.messages.message import Message
from webauthn_app.messages.schema import Field


class WebAuthnOptions(Message):
    """Caller preferences that can be layered over server-provided options.

    Currently carries a single preference, ``timeout`` (milliseconds).
    """

    fields = (Field("timeout", "positive-integer", required=False),)

    def merge(self, other: WebAuthnOptions, prefer_other: bool = False) -> None:
        """Merge another set of preferences into this one, in place.

        Members unset here are filled from ``other``. With ``prefer_other``
        every member set on ``other`` overwrites the value here.

        Args:
            other: The preferences to merge from.
            prefer_other: Whether ``other`` wins when both are set.
        """
        for name in self.field_names():
            if name not in other.payload:
                continue

            if name not in self.payload or prefer_other:
                self.payload[name] = other.payload[name]
