"""HTTP client for a SPARQL 1.1 endpoint."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from personmerge.adapters.http_resilience import ResilientClient, build_limiter

from .schema import SparqlSelectResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from aiolimiter import AsyncLimiter

    from personmerge.config.sparql import SparqlConfig

log = getLogger(__name__)


class SparqlError(RuntimeError):
    """Raised when a query or update against the store fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SparqlClient:
    """Low-level client executing queries and updates.

    Calls are synchronous; each one opens its own HTTP client, so the instance can
    be shared with a background thread. The rate limit is held by the instance and
    spans all of its calls.
    """

    def __init__(
        self,
        *,
        config: SparqlConfig,
        client_factory: Callable[..., ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._limiter: AsyncLimiter | None = build_limiter(self._resilience.ratelimit)

    def query(self, text: str) -> list[dict[str, str]]:
        """Run a SELECT query and return its rows in result order."""

        return asyncio.run(self._query_async(text))

    def update(self, text: str) -> None:
        """Run an update; raises :class:`SparqlError` when the store rejects it."""

        asyncio.run(self._update_async(text))

    async def _query_async(self, text: str) -> list[dict[str, str]]:
        response = await self._post(self._config.query_endpoint, {"query": text})
        try:
            payload = response.json()
        except ValueError as exc:
            raise SparqlError("SPARQL endpoint returned a non-JSON response") from exc
        if not isinstance(payload, dict) or "results" not in payload:
            raise SparqlError("Unexpected SPARQL response payload")
        try:
            return SparqlSelectResponse.model_validate(payload).rows()
        except ValidationError as exc:
            raise SparqlError(f"Invalid SPARQL results: {exc}") from exc

    async def _update_async(self, text: str) -> None:
        await self._post(self._config.update_endpoint, {"update": text})

    async def _post(self, endpoint: str, data: dict[str, str]) -> httpx.Response:
        log.debug("SPARQL %s to %s", next(iter(data)), endpoint)
        try:
            async with self._client_factory(self._resilience, limiter=self._limiter) as client:
                response = await client.post(endpoint, data=data)
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            log.error(f"SPARQL request failed with status {status}: {exc.response.text}")
            raise SparqlError(f"SPARQL request failed: {status}", status_code=status) from exc
        except httpx.HTTPError as exc:
            log.error(f"SPARQL request to {endpoint} failed: {exc}")
            raise SparqlError(f"SPARQL request failed: {exc}") from exc
