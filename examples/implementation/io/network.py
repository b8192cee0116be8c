"""HTTP network implementation.

This module provides an ``INetwork`` backed by an ``httpx.AsyncClient``.
"""

from __future__ import annotations

from typing import Optional

import httpx

from webauthn_app.interfaces.io import INetwork, NetworkResponse


class HttpNetwork(INetwork):
    """HTTP network that sends JSON bodies to a relying party server.

    Transport failures raised by httpx propagate to the caller; HTTP error
    statuses are returned as-is for the client to judge.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the network.

        Args:
            base_url: Server origin prepended to every path.
            client: Pre-configured client to use instead of creating one. Its
                own base URL applies.
            timeout: Request timeout in seconds for a newly created client.
        """
        self.base_url = base_url
        self.client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def send_request(self, method: str, path: str, message: str) -> NetworkResponse:
        response = await self.client.request(
            method,
            path,
            headers={"Content-Type": "application/json; charset=utf-8"},
            content=message,
        )

        return NetworkResponse(status=response.status_code, body=response.text)

    async def close(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> HttpNetwork:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
