"""Shared fixtures: a tiny postcode database and SPARQL result rows.

Postcode fixture (OS grid metres):
    AA1 1AA  (1000, 1000)  district AD1   centre
    AA1 1AB  (1005, 1005)  district AD1   ~7m away
    AA1 1AC  (1200, 1200)  district AD2   ~283m away
"""

import pytest

from property_prices.data.postcodes import PostcodeStore
from property_prices.data.sparql import SparqlClient
from tests.helpers import ENDPOINT, FIXTURE_POSTCODES, binding, json_transport, make_postcode_db


@pytest.fixture
def postcode_db(tmp_path):
    return make_postcode_db(tmp_path / "postcodes.sqlite", FIXTURE_POSTCODES)


@pytest.fixture
def store(postcode_db):
    store = PostcodeStore(postcode_db)
    yield store
    store.close()


@pytest.fixture
def pattinson_drive_rows() -> list[dict]:
    """Twelve transactions in PL6 8RU, newest first (as the store returns them)."""
    prices = [
        "185000", "210000", "172500", "199950", "240000", "165000",
        "210000", "230000", "150000", "195000", "205000", "180000",
    ]
    types = ["terraced", "semi-detached", "terraced", "detached", "detached", "flat-maisonette"] * 2
    return [
        binding(
            amount=price,
            date=f"{2023 - i}-06-{10 + i:02d}",
            property_type=types[i],
            paon=str(i + 1),
        )
        for i, price in enumerate(prices)
    ]


@pytest.fixture
def sparql_client_for():
    def factory(bindings: list[dict]) -> SparqlClient:
        return SparqlClient(ENDPOINT, transport=json_transport(bindings))

    return factory
