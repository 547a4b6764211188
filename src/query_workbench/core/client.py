"""HTTP client for the remote query-execution service.

POSTs ``{"query": text}`` to the service's query endpoint and returns the
raw ``result`` payload. Transport failures map to TransportError /
TimeoutError, undecodable bodies to MalformedResponse.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import httpx
import sentry_sdk

from query_workbench.core.exceptions import (
    MalformedResponse,
    TimeoutError,
    TransportError,
)
from query_workbench.core.logging import get_logger

if TYPE_CHECKING:
    from query_workbench.core.config import ResolvedConfig


class QueryServiceClient:
    """Async client for the query service using httpx."""

    def __init__(
        self,
        config: ResolvedConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> QueryServiceClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    def _http(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.request_timeout),
                transport=self._transport,
            )
        return self._client

    async def fetch_rows(self, query: str) -> Any:
        """Send ``query`` and return the ``result`` field of the response."""
        log = get_logger("client")
        url = self.config.query_url
        query_normalized = " ".join(query.split())
        log.debug("dispatching query", url=url, query=query_normalized)

        with sentry_sdk.start_span(
            op="http.client", description=query_normalized[:100]
        ) as span:
            start_time = time.monotonic()
            try:
                response = await self._http().post(url, json={"query": query})
            except httpx.TimeoutException as e:
                span.set_status("deadline_exceeded")
                log.error("query service timeout", url=url, error=str(e))
                msg = f"Query service timed out after {self.config.request_timeout}s: {e}"
                raise TimeoutError(msg) from e
            except httpx.HTTPError as e:
                span.set_status("unavailable")
                log.error("query service unreachable", url=url, error=str(e))
                raise TransportError(f"Request to {url} failed: {e}") from e

            duration_ms = (time.monotonic() - start_time) * 1000
            span.set_data("status_code", response.status_code)
            span.set_data("duration_ms", duration_ms)

            if not response.is_success:
                span.set_status("internal_error")
                log.error(
                    "query service error status",
                    url=url,
                    status_code=response.status_code,
                )
                msg = f"Server responded with status {response.status_code}"
                raise TransportError(msg)

            try:
                body = response.json()
            except ValueError as e:
                span.set_status("data_loss")
                log.error("query service returned invalid JSON", error=str(e))
                raise MalformedResponse(f"Response is not valid JSON: {e}") from e

            if not isinstance(body, dict) or "result" not in body:
                span.set_status("data_loss")
                raise MalformedResponse("Response has no 'result' field.")

            log.debug("query service responded", duration_ms=f"{duration_ms:.1f}")
            return body["result"]

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
