"""Network I/O interfaces for webauthn-app.

This module defines protocols for network communication.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass
class NetworkResponse:
    """A raw reply from the network.

    Attributes:
        status: The HTTP status code.
        body: The response body as text.
    """

    status: int
    body: str


class INetwork(Protocol):
    """Interface for network operations."""

    async def send_request(self, method: str, path: str, message: str) -> NetworkResponse:
        """Send a network request and return the response.

        Args:
            method: The HTTP method to use.
            path: The path to send the request to.
            message: The JSON message to send.

        Returns:
            The status code and body of the reply.

        Raises:
            Exception: When the request cannot be delivered at all.
        """
        ...
