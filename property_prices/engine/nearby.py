"""Nearest-neighbour postcode lookup with adaptive radius expansion.

Candidates come from a bounding-box query against the R*Tree; exact
Euclidean distances on the OS National Grid (metres) are computed here.

Without an explicit radius the search starts at DEFAULT_RADIUS and doubles
around the same centre until it has at least `limit` candidates or would
exceed MAX_RADIUS. With an explicit radius there is a single query and
candidates outside the true circle are dropped.
"""

import logging
import math

from property_prices.data.postcodes import PostcodeStore, get_postcode_store, normalize_postcode
from property_prices.errors import NotFoundError
from property_prices.models.postcode import (
    MAX_RADIUS_METERS,
    LookupResult,
    PostcodeDistance,
    PostcodeLookupCriteria,
    PostcodeRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_RADIUS = 5000
MAX_RADIUS = MAX_RADIUS_METERS


def resolve_center(criteria: PostcodeLookupCriteria, store: PostcodeStore) -> PostcodeRecord:
    if criteria.postcode:
        record = store.get(criteria.postcode)
        if record is None:
            raise NotFoundError(f"Postcode not found: {normalize_postcode(criteria.postcode)}")
        return record

    return PostcodeRecord(
        postcode="",
        positional_quality=0,
        easting=criteria.easting,
        northing=criteria.northing,
        country_code="",
        admin_county_code="",
        admin_district_code="",
        admin_ward_code="",
    )


def find_candidates(
    store: PostcodeStore,
    center: PostcodeRecord,
    limit: int,
    radius_meters: float | None = None,
    admin_district: str | None = None,
) -> tuple[list[PostcodeRecord], float]:
    """Return (candidates, radius used for the last query)."""
    radius = radius_meters if radius_meters is not None else DEFAULT_RADIUS
    queried = radius
    candidates: list[PostcodeRecord] = []

    while len(candidates) < limit and radius <= MAX_RADIUS:
        candidates = store.within_box(center.easting, center.northing, radius, admin_district)
        queried = radius
        if radius_meters is not None:
            break
        if len(candidates) < limit:
            radius *= 2

    return candidates, queried


def distance_between(record: PostcodeRecord, easting: float, northing: float) -> float:
    return math.hypot(record.easting - easting, record.northing - northing)


def with_distance(record: PostcodeRecord, distance: float) -> PostcodeDistance:
    return PostcodeDistance(**vars(record), distance_meters=distance)


def lookup_postcodes(
    criteria: PostcodeLookupCriteria,
    store: PostcodeStore | None = None,
) -> LookupResult:
    """Find the postcodes nearest to a postcode or grid reference.

    Raises NotFoundError when the centre postcode is not in the table.
    """
    store = store or get_postcode_store()
    center = resolve_center(criteria, store)
    self_postcode = normalize_postcode(criteria.postcode) if criteria.postcode else None

    candidates, radius_used = find_candidates(
        store, center, criteria.limit, criteria.radius_meters, criteria.admin_district
    )

    ranked = []
    for record in candidates:
        distance = distance_between(record, center.easting, center.northing)
        if not criteria.include_self and self_postcode and record.postcode == self_postcode:
            continue
        if criteria.radius_meters is not None and distance > criteria.radius_meters:
            continue
        ranked.append(with_distance(record, distance))
    ranked.sort(key=lambda r: r.distance_meters)

    logger.info(
        "Postcode lookup around %s: radius %s, %d found, returning %d",
        self_postcode or f"({criteria.easting}, {criteria.northing})",
        radius_used,
        len(ranked),
        min(len(ranked), criteria.limit),
    )

    return LookupResult(center=center, postcodes=ranked[: criteria.limit], total=len(ranked))
