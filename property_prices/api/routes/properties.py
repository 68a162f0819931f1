"""Price paid search routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from property_prices.api.deps import get_sparql_client
from property_prices.api.schemas import SearchResponse
from property_prices.data.sparql import SparqlClient
from property_prices.engine.search import search_properties
from property_prices.errors import (
    IncompleteRecordError,
    RemoteQueryError,
    TransportError,
    ValidationError,
)
from property_prices.models.property import PropertyType, SearchCriteria, SortField, SortOrder

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])
logger = logging.getLogger(__name__)


@router.get("/search", response_model=SearchResponse)
async def search(
    postcode: str | None = None,
    street: str | None = None,
    city: str | None = None,
    min_price: int | None = None,
    max_price: int | None = None,
    property_type: PropertyType | None = None,
    from_date: str | None = Query(None, description="Inclusive lower bound, YYYY-MM-DD"),
    to_date: str | None = Query(None, description="Inclusive upper bound, YYYY-MM-DD"),
    sort_by: SortField | None = None,
    sort_order: SortOrder | None = None,
    offset: int | None = None,
    limit: int | None = None,
    client: SparqlClient = Depends(get_sparql_client),
):
    """Search Land Registry price paid transactions by postcode or street and city."""
    criteria = SearchCriteria(
        postcode=postcode,
        street=street,
        city=city,
        min_price=min_price,
        max_price=max_price,
        property_type=property_type,
        from_date=from_date,
        to_date=to_date,
        sort_by=sort_by,
        sort_order=sort_order,
        offset=offset,
        limit=limit,
    )
    try:
        return await search_properties(client.endpoint, criteria, client=client)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (RemoteQueryError, TransportError, IncompleteRecordError) as e:
        logger.error("Property search failed for %s: %s", criteria, e)
        raise HTTPException(status_code=502, detail=str(e))
