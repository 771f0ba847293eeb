"""Async client for the PulseMCP Sub-Registry API.

The client returns decoded JSON payloads untouched; shaping for tool
output happens in :mod:`pulse_subregistry_mcp.shaping`. HTTP failures
are mapped to the exceptions in :mod:`pulse_subregistry_mcp.exceptions`.

Examples
--------
.. code-block:: python

    async with SubregistryClient(api_key="...") as client:
        page = await client.list_servers(limit=10, search="github")
        detail = await client.get_server("io.github.owner/server")
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ...config.settings import DEFAULT_API_BASE_URL
from ...exceptions import (
    AccessDeniedError,
    APIError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    TimeoutError,
)
from .retry import async_retry

logger = logging.getLogger(__name__)

API_VERSION = "v0.1"
DEFAULT_TIMEOUT_SECONDS = 30.0


def _error_message(response: httpx.Response) -> str:
    """Pull a readable error message out of an error response."""
    text = response.text
    try:
        payload = response.json()
    except ValueError:
        return text
    if isinstance(payload, dict):
        return payload.get("error") or payload.get("message") or text
    return text


class SubregistryClient:
    """Client for the PulseMCP Sub-Registry REST API.

    :param api_key: API key sent as ``X-API-Key``
    :type api_key: str
    :param tenant_id: Optional tenant sent as ``X-Tenant-ID``
    :type tenant_id: Optional[str]
    :param base_url: API base URL
    :type base_url: str
    :param timeout: Request timeout in seconds
    :type timeout: float
    :param max_attempts: Attempts per request for transient failures
    :type max_attempts: int
    :param retry_delay: Initial backoff delay in seconds
    :type retry_delay: float
    :param transport: Optional httpx transport (used by tests)
    :type transport: Optional[httpx.AsyncBaseTransport]
    """

    def __init__(
        self,
        api_key: str,
        tenant_id: Optional[str] = None,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        headers = {"X-API-Key": api_key, "Content-Type": "application/json"}
        if tenant_id:
            headers["X-Tenant-ID"] = tenant_id
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/{API_VERSION}",
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )
        self._send = async_retry(max_attempts=max_attempts, delay=retry_delay)(
            self._send_once
        )

    async def __aenter__(self) -> "SubregistryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send_once(
        self, path: str, params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        response = await self._client.get(path, params=params)
        response.raise_for_status()
        return response

    async def _get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        not_found: Optional[str] = None,
    ) -> Any:
        """GET ``path`` and decode the JSON body, mapping failures.

        :param path: Path below the versioned base URL
        :param params: Query parameters, ``None`` values are dropped
        :param not_found: Message for a 404, if 404 has a domain meaning
        :raises PulseSubregistryMCPError: On any request failure
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("GET %s params=%s", path, query)
        try:
            response = await self._send(path, query or None)
        except httpx.HTTPStatusError as e:
            raise self._map_status_error(e.response, not_found) from e
        except httpx.TimeoutException as e:
            raise TimeoutError(
                f"Request timed out after {self.timeout:g}s", operation=path
            ) from e
        except httpx.HTTPError as e:
            raise APIError(f"API request failed: {e}") from e
        return response.json()

    @staticmethod
    def _map_status_error(
        response: httpx.Response, not_found: Optional[str] = None
    ) -> APIError:
        status = response.status_code
        message = _error_message(response)
        if status == 401:
            return AuthenticationError(f"Authentication failed: {message}", message)
        if status == 403:
            return AccessDeniedError(f"Access denied: {message}", message)
        if status == 404 and not_found:
            return NotFoundError(not_found)
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            return RateLimitError(
                f"Rate limit exceeded: {message}",
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        return APIError(
            f"API request failed ({status}): {message}",
            status_code=status,
            response_body=response.text,
        )

    async def list_servers(
        self,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
        search: Optional[str] = None,
        updated_since: Optional[str] = None,
        version: Optional[str] = None,
    ) -> Dict[str, Any]:
        """List servers, one page at a time.

        :return: Payload with ``servers`` entries and ``metadata``
                 (``count``, ``nextCursor``)
        """
        return await self._get(
            "/servers",
            {
                "limit": limit,
                "cursor": cursor,
                "search": search,
                "updated_since": updated_since,
                "version": version,
            },
        )

    async def get_server(
        self, server_name: str, version: str = "latest"
    ) -> Dict[str, Any]:
        """Fetch one server version.

        :param server_name: Fully qualified server name
        :param version: Version string or ``latest``
        :raises NotFoundError: If the server or version does not exist
        """
        path = f"/servers/{quote(server_name, safe='')}/versions/{quote(version, safe='')}"
        return await self._get(
            path,
            not_found=f"Server not found: {server_name} (version: {version})",
        )
