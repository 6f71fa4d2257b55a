"""
HTTP transport — the Transport protocol over httpx.

Bodies go out as JSON; successful responses come back decoded from JSON
(None for an empty body). Any non-2xx status raises TransportError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from effect_chain.errors import TransportError

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    Outbound transport backed by httpx.AsyncClient.

    Example:
        transport = HttpTransport(base_url="https://api.example.com")
        user = await transport.get("/users/1")
        await transport.post("/users", {"name": "Ada"})
        await transport.aclose()
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
        **client_options: Any,
    ) -> None:
        self._client = client if client is not None else httpx.AsyncClient(
            base_url=base_url, timeout=timeout, **client_options,
        )

    async def request(
        self, method: str, url: str, body: Any = None, **options: Any,
    ) -> Any:
        if body is not None:
            options["json"] = body
        response = await self._client.request(method, url, **options)
        logger.debug(
            f"{method} {response.request.url}",
            extra={"url": str(response.request.url), "status": response.status_code},
        )
        if not response.is_success:
            raise TransportError(
                response.status_code, response.reason_phrase, str(response.request.url),
            )
        if not response.content:
            return None
        return response.json()

    async def get(self, url: str, **options: Any) -> Any:
        return await self.request("GET", url, **options)

    async def post(self, url: str, body: Any = None, **options: Any) -> Any:
        return await self.request("POST", url, body, **options)

    async def put(self, url: str, body: Any = None, **options: Any) -> Any:
        return await self.request("PUT", url, body, **options)

    async def delete(self, url: str, **options: Any) -> Any:
        return await self.request("DELETE", url, **options)

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ("HttpTransport",)
