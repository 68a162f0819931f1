"""SPARQL endpoint client for HM Land Registry linked data."""

import logging
import time

import httpx

from property_prices.config import settings
from property_prices.errors import RemoteQueryError, TransportError

logger = logging.getLogger(__name__)

SPARQL_RESULTS_JSON = "application/sparql-results+json"

# One result row: variable name -> {"type": ..., "value": ...}
SparqlBinding = dict[str, dict[str, str]]


class SparqlClient:
    def __init__(
        self,
        endpoint: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = endpoint or settings.land_registry_endpoint
        self.timeout = timeout if timeout is not None else settings.sparql_timeout
        self.transport = transport
        self.headers = {"Accept": SPARQL_RESULTS_JSON}

    async def query(self, query: str) -> list[SparqlBinding]:
        """POST a query as a form field and return the result bindings.

        Raises RemoteQueryError on a non-success status or a body that is not
        JSON, and TransportError
        when the endpoint cannot be reached. Nothing is retried.
        """
        logger.debug("SPARQL request to %s: %s", self.endpoint, query)
        started = time.monotonic()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                resp = await client.post(
                    self.endpoint, data={"query": query}, headers=self.headers
                )
        except httpx.TransportError as e:
            logger.error("SPARQL request to %s failed: %s", self.endpoint, e)
            raise TransportError(f"Could not reach {self.endpoint}: {e}") from e

        elapsed_ms = (time.monotonic() - started) * 1000
        if resp.is_error:
            logger.warning(
                "SPARQL request failed with HTTP %s after %.0fms", resp.status_code, elapsed_ms
            )
            raise RemoteQueryError(resp.status_code, resp.text)

        try:
            payload = resp.json()
        except ValueError as e:
            logger.warning(
                "SPARQL response with HTTP %s was not JSON after %.0fms",
                resp.status_code,
                elapsed_ms,
            )
            raise RemoteQueryError(resp.status_code, resp.text) from e

        bindings = payload.get("results", {}).get("bindings", [])
        logger.info(
            "SPARQL response: %d rows in %.0fms", len(bindings), elapsed_ms
        )
        if bindings:
            logger.debug("SPARQL sample row: %s", bindings[0])
        return bindings
