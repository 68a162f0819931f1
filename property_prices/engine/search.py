"""Property price search: validate, query, map, then filter/sort/paginate in memory.

The SPARQL query only constrains the address (and optionally dates). Price
and property-type filters, caller sorting and pagination run here so that
`total` always reflects the filtered set, never the page.
"""

import logging
from dataclasses import dataclass

from property_prices.data.mapper import parse_transaction
from property_prices.data.queries import add_date_filters, address_query, postcode_query
from property_prices.data.sparql import SparqlClient
from property_prices.errors import ValidationError
from property_prices.models.property import (
    PropertyTransaction,
    PropertyType,
    SearchCriteria,
    SearchResult,
    SortField,
    SortOrder,
)

logger = logging.getLogger(__name__)

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class ResolvedSearch:
    """SearchCriteria after validation, with every default filled in."""

    postcode: str | None
    street: str | None
    city: str | None
    min_price: int | None
    max_price: int | None
    property_type: str | None
    from_date: str | None
    to_date: str | None
    sort_by: SortField | None
    sort_order: SortOrder
    offset: int
    limit: int


def validate_search(endpoint: str, criteria: SearchCriteria) -> ResolvedSearch:
    """Check criteria in a fixed order and raise on the first failure.

    Street and city are uppercased because the Land Registry store matches
    addresses case-sensitively and holds them in upper case.
    """
    if not endpoint or not endpoint.startswith(("http://", "https://")):
        raise ValidationError("Invalid endpoint URL")
    if not criteria.postcode and (not criteria.street or not criteria.city):
        raise ValidationError("Either postcode or street and city must be provided")
    if criteria.min_price is not None and criteria.min_price < 0:
        raise ValidationError("min_price must be non-negative")
    if criteria.max_price is not None and criteria.max_price < 0:
        raise ValidationError("max_price must be non-negative")
    if (
        criteria.min_price is not None
        and criteria.max_price is not None
        and criteria.min_price > criteria.max_price
    ):
        raise ValidationError("min_price cannot be greater than max_price")
    if criteria.offset is not None and criteria.offset < 0:
        raise ValidationError("offset must be non-negative")
    if criteria.limit is not None and criteria.limit <= 0:
        raise ValidationError("limit must be positive")

    try:
        sort_by = SortField(criteria.sort_by) if criteria.sort_by else None
        sort_order = SortOrder(criteria.sort_order) if criteria.sort_order else SortOrder.DESC
    except ValueError as e:
        raise ValidationError(str(e)) from e
    if sort_by is None and criteria.sort_order:
        sort_by = SortField.DATE

    property_type = criteria.property_type
    if isinstance(property_type, PropertyType):
        property_type = property_type.value

    return ResolvedSearch(
        postcode=criteria.postcode or None,
        street=criteria.street.upper() if criteria.street else None,
        city=criteria.city.upper() if criteria.city else None,
        min_price=criteria.min_price,
        max_price=criteria.max_price,
        property_type=property_type,
        from_date=criteria.from_date,
        to_date=criteria.to_date,
        sort_by=sort_by,
        sort_order=sort_order,
        offset=criteria.offset if criteria.offset is not None else DEFAULT_OFFSET,
        limit=criteria.limit if criteria.limit is not None else DEFAULT_LIMIT,
    )


def build_query(search: ResolvedSearch) -> str:
    if search.postcode:
        query = postcode_query(search.postcode)
    else:
        query = address_query(search.street, search.city)
    return add_date_filters(query, search.from_date, search.to_date)


def filter_transactions(
    transactions: list[PropertyTransaction],
    min_price: int | None = None,
    max_price: int | None = None,
    property_type: str | None = None,
) -> list[PropertyTransaction]:
    """Inclusive price bounds, case-insensitive property type match."""
    result = transactions
    if min_price is not None:
        result = [t for t in result if t.price >= min_price]
    if max_price is not None:
        result = [t for t in result if t.price <= max_price]
    if property_type:
        wanted = property_type.lower()
        result = [t for t in result if t.property_type.value.lower() == wanted]
    return result


def sort_transactions(
    transactions: list[PropertyTransaction],
    sort_by: SortField,
    sort_order: SortOrder = SortOrder.DESC,
) -> list[PropertyTransaction]:
    # sorted() is stable for reverse=True as well, so ties keep fetch order.
    return sorted(
        transactions,
        key=lambda t: getattr(t, sort_by.value),
        reverse=sort_order == SortOrder.DESC,
    )


def paginate(
    transactions: list[PropertyTransaction], offset: int, limit: int
) -> list[PropertyTransaction]:
    return transactions[offset : offset + limit]


async def search_properties(
    endpoint: str,
    criteria: SearchCriteria,
    client: SparqlClient | None = None,
) -> SearchResult:
    """Search Land Registry price paid data.

    Args:
        endpoint: SPARQL endpoint URL.
        criteria: Postcode, or street and city, plus optional filters.
        client: SPARQL client to use (default: a new client for endpoint).

    Raises:
        ValidationError before any request is sent; RemoteQueryError,
        TransportError or IncompleteRecordError from the fetch. A failure
        aborts the whole search.
    """
    search = validate_search(endpoint, criteria)
    client = client or SparqlClient(endpoint)

    bindings = await client.query(build_query(search))
    transactions = [parse_transaction(b) for b in bindings]

    if transactions:
        logger.info(
            "Parsed %d transactions for %s (first: %s, %s)",
            len(transactions),
            search.postcode or f"{search.street}, {search.city}",
            transactions[0].street,
            transactions[0].city,
        )

    matched = filter_transactions(
        transactions, search.min_price, search.max_price, search.property_type
    )
    if search.sort_by is not None:
        matched = sort_transactions(matched, search.sort_by, search.sort_order)

    return SearchResult(
        properties=paginate(matched, search.offset, search.limit),
        total=len(matched),
        offset=search.offset,
        limit=search.limit,
    )
