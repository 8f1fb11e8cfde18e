"""Client for the server status API used by the CLI."""

from __future__ import annotations

import asyncio

import httpx
from pydantic import ValidationError

from stowage.plugins.errors import StatusUnavailableError
from stowage.plugins.schemas import ServerStatus

SERVER_STATUS_PATH = "/api/server-status"


class ServerStatusClient:
    """Fetches the classified plugin list from a running server.

    Every request is bounded by ``timeout`` seconds overall; a timeout is
    reported the same way as a refused connection.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying connection pool."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def get_server_status(self) -> ServerStatus:
        """Fetch and parse the server status.

        Raises:
            StatusUnavailableError: On transport errors, timeouts, HTTP errors
                or malformed payloads
        """
        client = await self._get_client()
        try:
            response = await asyncio.wait_for(client.get(SERVER_STATUS_PATH), timeout=self.timeout)
            response.raise_for_status()
            return ServerStatus.model_validate(response.json())
        except asyncio.TimeoutError as exc:
            raise StatusUnavailableError(
                f"timed out after {self.timeout}s waiting for server status from {self.base_url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise StatusUnavailableError(f"failed to get server status from {self.base_url}: {exc}") from exc
        except (ValueError, ValidationError) as exc:
            raise StatusUnavailableError(f"invalid server status from {self.base_url}: {exc}") from exc
