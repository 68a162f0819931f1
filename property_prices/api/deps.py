"""FastAPI dependency injection."""

from property_prices.config import settings
from property_prices.data.postcodes import PostcodeStore, get_postcode_store
from property_prices.data.sparql import SparqlClient


def get_sparql_client() -> SparqlClient:
    return SparqlClient(settings.land_registry_endpoint)


def get_store() -> PostcodeStore:
    return get_postcode_store(settings.postcode_db_path)
