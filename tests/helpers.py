"""Builders for test data: postcode databases, SPARQL rows and mock transports."""

import json
import sqlite3

import httpx

from property_prices.data.build_postcodes import create_schema, insert_postcode

ENDPOINT = "https://example.com/sparql"
LRCOMMON = "http://landregistry.data.gov.uk/def/common/"

FIXTURE_POSTCODES = [
    ["AA1 1AA", "10", "1000", "1000", "C1", "NR1", "NH1", "AC1", "AD1", "AW1"],
    ["AA1 1AB", "10", "1005", "1005", "C1", "NR1", "NH1", "AC1", "AD1", "AW1"],
    ["AA1 1AC", "10", "1200", "1200", "C1", "NR1", "NH1", "AC1", "AD2", "AW2"],
]


def make_postcode_db(path, rows) -> str:
    conn = sqlite3.connect(path)
    create_schema(conn)
    with conn:
        for row in rows:
            insert_postcode(conn, row)
    conn.close()
    return str(path)


def binding(
    amount="250000",
    date="2024-01-01",
    postcode="PL6 8RU",
    property_type="terraced",
    street="PATTINSON DRIVE",
    town="PLYMOUTH",
    **extra,
) -> dict:
    """One SPARQL result row in application/sparql-results+json shape."""
    row = {
        "amount": {"type": "literal", "value": amount},
        "date": {"type": "literal", "value": date},
        "postcode": {"type": "literal", "value": postcode},
        "propertyType": {"type": "uri", "value": f"{LRCOMMON}{property_type}"},
        "street": {"type": "literal", "value": street},
        "town": {"type": "literal", "value": town},
    }
    for name, value in extra.items():
        row[name] = {"type": "literal", "value": value}
    return row


def sparql_response(bindings: list[dict]) -> dict:
    return {"head": {"vars": []}, "results": {"bindings": bindings}}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


def json_transport(bindings: list[dict]) -> RecordingTransport:
    return RecordingTransport(
        lambda request: httpx.Response(200, text=json.dumps(sparql_response(bindings)))
    )
