"""
UpstreamClient - single-attempt, deadline-bounded HTTP calls to the AI upstreams.

Both pipeline stages go through the same primitive. Each call gets its own
deadline; when it elapses the in-flight request is cancelled. The response body
comes back as text whatever the HTTP status, so status interpretation stays
with the caller.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import httpx

from ..core.exceptions import UpstreamNetworkError, UpstreamTimeoutError

logger = logging.getLogger(__name__)


class UpstreamClient:
    """
    HTTP call wrapper used for both the analysis and the generation upstream.

    No retries, no backoff. A fresh httpx.AsyncClient is opened per call and
    closed before the call returns.

    Example:
        >>> client = UpstreamClient()
        >>> text = await client.call(
        ...     "https://api.openai.com/v1/chat/completions",
        ...     headers={"Authorization": "Bearer sk-..."},
        ...     body={"model": "gpt-4.1", "messages": [...]},
        ...     timeout=60.0
        ... )
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self._transport = transport

    async def call(
        self,
        url: str,
        method: str = "POST",
        headers: Optional[Dict[str, str]] = None,
        body: Any = None,
        timeout: float = 45.0
    ) -> str:
        """
        Issue one request and return the raw response text.

        Args:
            url: Full endpoint URL
            method: HTTP method
            headers: Request headers (Content-Type is set for JSON bodies)
            body: JSON-serializable request body
            timeout: Overall deadline in seconds

        Returns:
            Response body text (any HTTP status)

        Raises:
            UpstreamTimeoutError: No response within the deadline
            UpstreamNetworkError: Transport-level failure
        """
        start_time = time.time()
        log_url = _redact(url)

        try:
            text = await asyncio.wait_for(
                self._send(url, method, headers, body, timeout),
                timeout=timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.error(f"{method} {log_url} timed out after {timeout:g}s")
            raise UpstreamTimeoutError(log_url, timeout)
        except httpx.RequestError as e:
            logger.error(f"{method} {log_url} failed: {type(e).__name__}: {e}")
            raise UpstreamNetworkError(log_url, f"Upstream request failed: {type(e).__name__}: {e}") from e

        logger.info(f"{method} {log_url} completed in {time.time() - start_time:.2f}s ({len(text)} chars)")
        return text

    async def _send(
        self,
        url: str,
        method: str,
        headers: Optional[Dict[str, str]],
        body: Any,
        timeout: float
    ) -> str:
        async with httpx.AsyncClient(transport=self._transport, timeout=timeout) as client:
            response = await client.request(
                method,
                url,
                headers=headers,
                json=body
            )

        if response.status_code >= 400:
            logger.warning(f"{method} {_redact(url)} returned HTTP {response.status_code}")
        return response.text


def _redact(url: str) -> str:
    """Strip the query string so API keys passed as ?key= never reach the logs."""
    return url.split("?", 1)[0]
