"""Map SPARQL result rows to PropertyTransaction records."""

import logging
from decimal import Decimal, InvalidOperation

from property_prices.data.sparql import SparqlBinding
from property_prices.errors import IncompleteRecordError
from property_prices.models.property import PropertyTransaction, PropertyType

logger = logging.getLogger(__name__)

LRCOMMON = "http://landregistry.data.gov.uk/def/common/"

PROPERTY_TYPE_URIS = {
    f"{LRCOMMON}detached": PropertyType.DETACHED,
    f"{LRCOMMON}semi-detached": PropertyType.SEMI_DETACHED,
    f"{LRCOMMON}terraced": PropertyType.TERRACED,
    f"{LRCOMMON}flat-maisonette": PropertyType.FLAT,
}

REQUIRED_FIELDS = ("amount", "date", "propertyType")


def map_property_type(uri: str | None) -> PropertyType:
    """Map a Land Registry property-type URI, falling back to OTHER."""
    mapped = PROPERTY_TYPE_URIS.get(uri or "")
    if mapped is None:
        logger.warning("Unknown property type URI %r, defaulting to 'other'", uri)
        return PropertyType.OTHER
    return mapped


def _value(binding: SparqlBinding, name: str) -> str:
    return binding.get(name, {}).get("value", "")


def _optional(binding: SparqlBinding, name: str) -> str | None:
    return binding[name].get("value") if name in binding else None


def _parse_price(amount: str) -> int:
    try:
        return int(Decimal(amount))
    except (InvalidOperation, ValueError, OverflowError) as e:
        raise IncompleteRecordError(
            f"Invalid amount in SPARQL response: {amount!r}"
        ) from e


def parse_transaction(binding: SparqlBinding) -> PropertyTransaction:
    missing = [name for name in REQUIRED_FIELDS if not _value(binding, name).strip()]
    if missing:
        raise IncompleteRecordError(
            f"Missing required property data in SPARQL response: {', '.join(missing)}"
        )

    new_build = _optional(binding, "newBuild")
    estate_type = _optional(binding, "estateType")

    return PropertyTransaction(
        price=_parse_price(_value(binding, "amount")),
        date=_value(binding, "date"),
        postcode=_value(binding, "postcode"),
        property_type=map_property_type(_value(binding, "propertyType")),
        street=_value(binding, "street"),
        city=_value(binding, "town"),
        paon=_optional(binding, "paon"),
        saon=_optional(binding, "saon"),
        county=_optional(binding, "county"),
        estate_type=estate_type.rsplit("/", 1)[-1] if estate_type else None,
        new_build=new_build.lower() == "true" if new_build is not None else None,
        transaction_category=_optional(binding, "category"),
    )
