"""Server response message class for webauthn-app.

This module defines ``ServerResponse``, the envelope every server reply is
built on. Used by itself for simple acknowledgements and extended by the
options messages.
"""

from __future__ import annotations

from typing import Optional

from webauthn_app.exceptions import ValidationError
from webauthn_app.messages.message import Message
from webauthn_app.messages.schema import Field

STATUS_OK = "ok"
STATUS_FAILED = "failed"


class ServerResponse(Message):
    """Generic reply from the server indicating success or failure.

    The wire structure is:
    {
        "status": "ok" | "failed",
        "errorMessage": "<message>"
    }

    When ``status`` is ``"ok"`` the error message must be empty (an absent
    ``errorMessage`` counts as empty). When ``status`` is ``"failed"`` it
    must be a non-empty string.
    """

    fields = (
        Field("status", "string", choices=(STATUS_OK, STATUS_FAILED)),
        Field("errorMessage", "string", required=False),
    )

    @property
    def status(self) -> Optional[str]:
        return self.payload.get("status")

    @property
    def error_message(self) -> Optional[str]:
        return self.payload.get("errorMessage")

    @property
    def failed(self) -> bool:
        return self.status == STATUS_FAILED

    def validate(self) -> None:
        """Validate the envelope, then every member declared by subclasses.

        Raises:
            ValidationError: If the status and error message disagree, or
                any declared member is malformed.
        """
        super().validate()

        if self.status == STATUS_OK:
            if self.payload.get("errorMessage", "") != "":
                raise ValidationError(
                    "errorMessage", "empty string when status is 'ok'", repr(self.error_message)
                )

        elif self.status == STATUS_FAILED:
            if not self.error_message:
                raise ValidationError(
                    "errorMessage", "non-empty string when status is 'failed'"
                )
