"""Pydantic schemas for API responses."""

from pydantic import BaseModel, ConfigDict

from property_prices.models.property import PropertyType


class PropertyTransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    price: int
    date: str
    postcode: str
    property_type: PropertyType
    street: str
    city: str
    paon: str | None = None
    saon: str | None = None
    county: str | None = None
    estate_type: str | None = None
    new_build: bool | None = None
    transaction_category: str | None = None


class SearchResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    properties: list[PropertyTransactionResponse]
    total: int
    offset: int
    limit: int


class PostcodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    postcode: str
    positional_quality: int
    easting: int | float
    northing: int | float
    country_code: str
    admin_county_code: str
    admin_district_code: str
    admin_ward_code: str
    nhs_regional_ha_code: str = ""
    nhs_ha_code: str = ""


class PostcodeDistanceResponse(PostcodeResponse):
    distance_meters: float


class LookupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    center: PostcodeResponse
    postcodes: list[PostcodeDistanceResponse]
    total: int
