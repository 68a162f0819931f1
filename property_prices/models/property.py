from dataclasses import dataclass, field
from enum import Enum


class PropertyType(str, Enum):
    DETACHED = "detached"
    SEMI_DETACHED = "semi-detached"
    TERRACED = "terraced"
    FLAT = "flat"
    OTHER = "other"


class SortField(str, Enum):
    DATE = "date"
    PRICE = "price"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PropertyTransaction:
    price: int
    date: str  # ISO yyyy-mm-dd
    postcode: str
    property_type: PropertyType
    street: str
    city: str
    paon: str | None = None  # primary addressable object name (house number/name)
    saon: str | None = None  # secondary addressable object name (flat/unit)
    county: str | None = None
    estate_type: str | None = None
    new_build: bool | None = None
    transaction_category: str | None = None


@dataclass
class SearchCriteria:
    """Caller-supplied search parameters. Every field is optional here;
    defaults and cross-field rules are applied by the search engine."""

    postcode: str | None = None
    street: str | None = None
    city: str | None = None
    min_price: int | None = None
    max_price: int | None = None
    property_type: PropertyType | str | None = None
    from_date: str | None = None
    to_date: str | None = None
    sort_by: SortField | None = None
    sort_order: SortOrder | None = None
    offset: int | None = None
    limit: int | None = None


@dataclass(frozen=True)
class SearchResult:
    properties: list[PropertyTransaction] = field(default_factory=list)
    total: int = 0
    offset: int = 0
    limit: int = 10
