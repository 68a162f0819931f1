from dataclasses import dataclass, field

from property_prices.errors import ValidationError

MAX_LOOKUP_LIMIT = 500
MAX_RADIUS_METERS = 200_000


@dataclass(frozen=True)
class PostcodeRecord:
    postcode: str
    positional_quality: int
    easting: int
    northing: int
    country_code: str
    admin_county_code: str
    admin_district_code: str
    admin_ward_code: str
    nhs_regional_ha_code: str = ""
    nhs_ha_code: str = ""


@dataclass(frozen=True)
class PostcodeDistance(PostcodeRecord):
    distance_meters: float = 0.0


@dataclass
class PostcodeLookupCriteria:
    postcode: str | None = None
    easting: float | None = None
    northing: float | None = None
    radius_meters: float | None = None
    limit: int = 10
    include_self: bool = False
    admin_district: str | None = None

    def __post_init__(self):
        """Validate criteria after initialization."""
        if not self.postcode and (self.easting is None or self.northing is None):
            raise ValidationError("Provide a postcode or both easting and northing")
        if self.radius_meters is not None and not 0 < self.radius_meters <= MAX_RADIUS_METERS:
            raise ValidationError(f"radius_meters must be in (0, {MAX_RADIUS_METERS}]")
        if not 1 <= self.limit <= MAX_LOOKUP_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_LOOKUP_LIMIT}")


@dataclass(frozen=True)
class LookupResult:
    center: PostcodeRecord
    postcodes: list[PostcodeDistance] = field(default_factory=list)
    total: int = 0
