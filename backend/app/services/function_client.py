"""
Registry API — External Function Client
=========================================

What:  Calls the configured external HTTP function for GET /say and returns
       its JSON body untouched.
How:   One shared httpx.AsyncClient, created in the lifespan and closed at
       shutdown. The keyword travels as the single query parameter `param`.
Who:   Injected into the proxy route via app.dependencies.

Failure policy:
    No retries and no circuit breaker. Transport errors, timeouts, non-2xx
    statuses and non-JSON bodies are logged and raised as
    UpstreamServiceError, which the global handler answers with 502.
"""

import logging
import time
from typing import Any, Optional

import httpx

from app.config import Settings
from app.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class FunctionClient:
    def __init__(
        self,
        function_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.function_url = function_url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings) -> "FunctionClient":
        return cls(settings.function_url, timeout=settings.function_timeout)

    async def call(self, keyword: str) -> Any:
        """
        Invoke the function with ?param=<keyword>.

        Returns:
            The decoded upstream JSON body.

        Raises:
            UpstreamServiceError: the call failed in any way.
        """
        start_time = time.perf_counter()
        try:
            resp = await self._client.get(self.function_url, params={"param": keyword})
        except httpx.HTTPError as exc:
            logger.error("Error calling function: %s", exc)
            raise UpstreamServiceError(
                context={"error_type": type(exc).__name__}
            ) from exc

        duration_ms = (time.perf_counter() - start_time) * 1000

        if resp.status_code < 200 or resp.status_code >= 300:
            # Avoid dumping huge bodies; include a small snippet.
            logger.error(
                "Function returned %d after %.0fms: %s",
                resp.status_code,
                duration_ms,
                resp.text[:300],
            )
            raise UpstreamServiceError(status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            logger.error("Function returned a non-JSON body after %.0fms", duration_ms)
            raise UpstreamServiceError(
                message="The upstream function returned an invalid response.",
                status_code=resp.status_code,
            ) from exc

        logger.info("Function call completed in %.0fms", duration_ms)
        return data

    async def aclose(self) -> None:
        await self._client.aclose()
