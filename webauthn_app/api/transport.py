"""Message transport for webauthn-app.

This module turns a validated message into wire text, hands it to the
network, and rebuilds and validates the typed reply.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional, Type, TypeVar

from webauthn_app.api.notifier import Notifier
from webauthn_app.exceptions import (
    ProtocolError,
    StructuralError,
    TransportError,
    ValidationError,
)
from webauthn_app.interfaces import POST, DebugSubtype, INetwork
from webauthn_app.messages import Message, ServerResponse

LOGGER = logging.getLogger(__name__)

R = TypeVar("R", bound=ServerResponse)


class Transport:
    """Sends messages over an ``INetwork`` and parses the replies.

    Attributes:
        network: The network used for every request.
    """

    def __init__(self, network: INetwork, notifier: Optional[Notifier] = None) -> None:
        self.network = network
        self._notifier = notifier if notifier is not None else Notifier()

    async def send(
        self,
        method: str,
        path: str,
        message: Message,
        response_type: Type[R],
    ) -> R:
        """Send a message and return the validated reply.

        Binary members of ``message`` are encoded and the message is
        validated before anything is transmitted. The reply body is a JSON
        array whose first element is the reply message (a bare JSON object
        is accepted too).

        Args:
            method: The HTTP method. Only ``POST`` is supported.
            path: The endpoint path.
            message: The message to send.
            response_type: The ``ServerResponse`` subclass expected back.

        Returns:
            The reply, validated but with binary members still encoded.

        Raises:
            ValueError: If ``method`` is not ``POST``.
            TypeError: If ``message`` or ``response_type`` has the wrong type.
            ValidationError: If the outgoing message or the reply is malformed.
            CoercionError: If a binary member of the outgoing message cannot
                be encoded.
            TransportError: If the network fails, the server answers with a
                non-200 status, or the body is not a message envelope.
            ProtocolError: If the server replies with ``status == "failed"``.
        """
        if method != POST:
            raise ValueError(f"unsupported method '{method}', only {POST} is supported")

        if not isinstance(message, Message):
            raise TypeError("expected 'message' to be instance of Message")

        if not (isinstance(response_type, type) and issubclass(response_type, ServerResponse)):
            raise TypeError("expected 'response_type' to be a ServerResponse subclass")

        message.encode_binary_properties()
        message.validate()

        self._notifier.debug(DebugSubtype.SEND, message)
        body = message.serialize()
        self._notifier.debug(DebugSubtype.SEND_RAW, body)

        if LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug("%s %s\n%s", method, path, message.to_human_string())

        try:
            reply = await self.network.send_request(method, path, body)
        except Exception as e:
            raise self._failure(f"{method} to {path} failed: {e}") from e

        self._notifier.debug(
            DebugSubtype.RESPONSE_RAW, {"status": reply.status, "body": reply.body}
        )
        LOGGER.debug("%s %s returned %d", method, path, reply.status)

        if reply.status != 200:
            raise self._failure(f"server returned status: {reply.status}", reply.status)

        response = self._parse_reply(reply.body, reply.status, response_type)

        if response.failed:
            error_message = response.error_message
            if error_message is not None and not isinstance(error_message, str):
                error_message = str(error_message)

            error = ProtocolError(error_message or "server reported failure")
            LOGGER.warning("%s %s rejected by server: %s", method, path, error)
            self._notifier.debug(DebugSubtype.SEND_ERROR, error)
            raise error

        try:
            response.validate()
        except ValidationError as e:
            LOGGER.warning(
                "%s %s returned an invalid %s: %s", method, path, response_type.__name__, e
            )
            self._notifier.debug(DebugSubtype.SEND_ERROR, e)
            raise

        self._notifier.debug(DebugSubtype.RESPONSE, {"status": reply.status, "body": response})
        return response

    def _parse_reply(self, body: str, status: int, response_type: Type[R]) -> R:
        try:
            parsed: Any = json.loads(body)
        except (ValueError, RecursionError) as e:
            raise self._failure(f"error parsing JSON response: '{body}'", status) from e

        if isinstance(parsed, list):
            if len(parsed) == 0:
                raise self._failure("server returned an empty response", status)
            parsed = parsed[0]

        if not isinstance(parsed, Mapping):
            raise self._failure(f"malformed response envelope: '{body}'", status)

        try:
            return response_type.parse(parsed)
        except StructuralError as e:
            raise self._failure(f"malformed response envelope: '{body}'", status) from e

    def _failure(self, message: str, status: Optional[int] = None) -> TransportError:
        error = TransportError(message, status)
        LOGGER.warning("transport failure: %s", message)
        self._notifier.debug(DebugSubtype.SEND_ERROR, error)
        return error
