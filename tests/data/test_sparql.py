"""Tests for the SPARQL endpoint client."""

from urllib.parse import parse_qs

import httpx
import pytest

from property_prices.data.sparql import SparqlClient
from property_prices.errors import RemoteQueryError, TransportError
from tests.helpers import ENDPOINT, RecordingTransport, binding, json_transport

QUERY = "SELECT * WHERE { ?s ?p ?o }"


class TestSparqlClient:
    async def test_posts_form_encoded_query(self):
        transport = json_transport([binding()])
        client = SparqlClient(ENDPOINT, transport=transport)

        await client.query(QUERY)

        (request,) = transport.requests
        assert request.method == "POST"
        assert str(request.url) == ENDPOINT
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert request.headers["accept"] == "application/sparql-results+json"
        assert parse_qs(request.content.decode()) == {"query": [QUERY]}

    async def test_returns_bindings(self):
        row = binding(paon="10", saon="Apt 2")
        client = SparqlClient(ENDPOINT, transport=json_transport([row]))

        result = await client.query(QUERY)

        assert result == [row]

    async def test_empty_result(self):
        client = SparqlClient(ENDPOINT, transport=json_transport([]))
        assert await client.query(QUERY) == []

    async def test_http_error_carries_status_and_body(self):
        transport = RecordingTransport(lambda request: httpx.Response(400, text="Invalid query"))
        client = SparqlClient(ENDPOINT, transport=transport)

        with pytest.raises(RemoteQueryError) as exc_info:
            await client.query(QUERY)

        assert exc_info.value.status_code == 400
        assert exc_info.value.body == "Invalid query"
        assert str(exc_info.value) == "HTTP error 400: Invalid query"

    async def test_server_error(self):
        transport = RecordingTransport(lambda request: httpx.Response(503, text="busy"))
        client = SparqlClient(ENDPOINT, transport=transport)

        with pytest.raises(RemoteQueryError, match="HTTP error 503"):
            await client.query(QUERY)
        assert len(transport.requests) == 1  # no retry

    async def test_non_json_body_is_remote_error(self, caplog):
        transport = RecordingTransport(lambda request: httpx.Response(200, text="<html>busy</html>"))
        client = SparqlClient(ENDPOINT, transport=transport)

        with pytest.raises(RemoteQueryError) as exc_info:
            await client.query(QUERY)

        assert exc_info.value.status_code == 200
        assert exc_info.value.body == "<html>busy</html>"
        assert "was not JSON" in caplog.text

    async def test_network_failure(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = SparqlClient(ENDPOINT, transport=httpx.MockTransport(refuse))

        with pytest.raises(TransportError, match="connection refused"):
            await client.query(QUERY)

    def test_defaults_to_configured_endpoint(self):
        with_settings = SparqlClient()
        assert with_settings.endpoint.startswith("https://")
        assert with_settings.timeout is None
