"""HTTP Client for shared connection management.

This module provides a managed httpx.AsyncClient for reusing
HTTP connections across trend sources and news fetchers.
"""

from typing import Any

import httpx

from trendpress.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7",
}


class HTTPClient:
    """Managed HTTP client with connection reuse.

    Designed for DI injection. Create once at application startup,
    inject where needed, close at shutdown. Every request accepts a
    per-call ``timeout`` so each caller owns its own deadline.

    Example:
        http_client = HTTPClient()
        html = await http_client.get_text("https://zum.com/", timeout=15.0)
        await http_client.close()
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_connections: int = 20,
        max_keepalive_connections: int = 10,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Default request timeout in seconds
            max_connections: Maximum number of connections
            max_keepalive_connections: Maximum keepalive connections
            headers: Default headers (Korean-locale browser headers if omitted)
        """
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max_keepalive_connections,
            ),
            headers=headers or DEFAULT_HEADERS,
            follow_redirects=True,
        )
        logger.info(
            "HTTP client initialized",
            timeout=timeout,
            max_connections=max_connections,
            max_keepalive=max_keepalive_connections,
        )

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Send GET request."""
        return await self._client.get(url, **kwargs)

    async def get_text(
        self,
        url: str,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> str:
        """GET a URL and return the decoded body.

        Raises:
            httpx.HTTPStatusError: On non-2xx responses
            httpx.TimeoutException: When the request times out
        """
        kwargs: dict[str, Any] = {"headers": headers, "params": params}
        if timeout is not None:
            kwargs["timeout"] = timeout
        response = await self._client.get(url, **kwargs)
        response.raise_for_status()
        return response.text

    async def get_json(
        self,
        url: str,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """GET a URL and decode the JSON body.

        Raises:
            httpx.HTTPStatusError: On non-2xx responses
        """
        kwargs: dict[str, Any] = {"headers": headers, "params": params}
        if timeout is not None:
            kwargs["timeout"] = timeout
        response = await self._client.get(url, **kwargs)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()
        logger.info("HTTP client closed")


__all__ = ["DEFAULT_HEADERS", "DEFAULT_USER_AGENT", "HTTPClient"]
