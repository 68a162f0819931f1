"""Postcode reference routes."""

from fastapi import APIRouter, Depends, HTTPException, Query

from property_prices.api.deps import get_store
from property_prices.api.schemas import LookupResponse, PostcodeResponse
from property_prices.data.postcodes import PostcodeStore, normalize_postcode
from property_prices.engine.nearby import lookup_postcodes
from property_prices.errors import NotFoundError, ValidationError
from property_prices.models.postcode import (
    MAX_LOOKUP_LIMIT,
    MAX_RADIUS_METERS,
    PostcodeLookupCriteria,
)

router = APIRouter(prefix="/api/v1/postcodes", tags=["postcodes"])


@router.get("/nearby", response_model=LookupResponse)
async def nearby(
    postcode: str | None = None,
    easting: float | None = None,
    northing: float | None = None,
    radius_meters: float | None = Query(None, gt=0, le=MAX_RADIUS_METERS),
    limit: int = Query(10, ge=1, le=MAX_LOOKUP_LIMIT),
    include_self: bool = False,
    admin_district: str | None = None,
    store: PostcodeStore = Depends(get_store),
):
    """Nearest postcodes to a postcode or an OS grid reference."""
    try:
        criteria = PostcodeLookupCriteria(
            postcode=postcode,
            easting=easting,
            northing=northing,
            radius_meters=radius_meters,
            limit=limit,
            include_self=include_self,
            admin_district=admin_district,
        )
        return lookup_postcodes(criteria, store)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{postcode}", response_model=PostcodeResponse)
async def get_postcode(postcode: str, store: PostcodeStore = Depends(get_store)):
    """Get a single postcode record."""
    record = store.get(postcode)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Postcode not found: {normalize_postcode(postcode)}")
    return record
