"""
Run Input Models.

Pydantic model for the per-run crawl configuration (camelCase JSON input).
Defaults mirror the published input schema.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Listing age option → maximum days on market (None = any age)
LISTING_AGE_DAYS: dict[str, int | None] = {
    "24h": 1,
    "7days": 7,
    "30days": 30,
    "90days": 90,
    "any": None,
}


class ProxyInput(BaseModel):
    """Proxy configuration; an empty list disables proxies."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    proxy_urls: list[str] = Field(default_factory=list)


class RunInput(BaseModel):
    """Crawl input, consumed once at startup."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True
    )

    search_type: Literal["buy", "rent"] = "buy"
    regions: list[str] = Field(default_factory=lambda: ["Montreal"])
    neighborhoods: list[str] = Field(default_factory=list)
    property_types: list[str] = Field(default_factory=list)
    language: Literal["fr", "en"] = "fr"

    # Range filters (0 = unbounded)
    min_price: int = 0
    max_price: int = 0
    min_bedrooms: int = 0
    max_bedrooms: int = 0
    min_bathrooms: int = 0
    max_bathrooms: int = 0
    min_living_area: int = 0
    max_living_area: int = 0
    min_lot_size: int = 0
    max_lot_size: int = 0
    year_built_min: int = 0
    year_built_max: int = 0

    features: list[str] = Field(default_factory=list)
    listing_age: Literal["24h", "7days", "30days", "90days", "any"] = "any"
    sort_by: str = "date_desc"

    max_listings: int = Field(default=100, ge=1)
    include_details: bool = True
    include_images: bool = True
    max_concurrency: int = Field(default=3, ge=1)
    max_request_retries: int = Field(default=3, ge=0)
    proxy_configuration: ProxyInput = Field(default_factory=ProxyInput)

    @field_validator(
        "min_price",
        "max_price",
        "min_bedrooms",
        "max_bedrooms",
        "min_bathrooms",
        "max_bathrooms",
        "min_living_area",
        "max_living_area",
        "min_lot_size",
        "max_lot_size",
        "year_built_min",
        "year_built_max",
        mode="before",
    )
    @classmethod
    def unbounded_when_missing(cls, v: Any) -> Any:
        """None and negative bounds mean unbounded (0)."""
        if v is None:
            return 0
        if isinstance(v, (int, float)) and v < 0:
            return 0
        return v

    @field_validator("regions", mode="before")
    @classmethod
    def default_region(cls, v: Any) -> Any:
        """An empty region list falls back to Montreal."""
        if not v:
            return ["Montreal"]
        return v

    @property
    def transaction_type(self) -> str:
        """Output transaction type for this search."""
        return "Rental" if self.search_type == "rent" else "Sale"

    @property
    def max_days_on_market(self) -> int | None:
        """Listing age bound in days (None = any)."""
        return LISTING_AGE_DAYS[self.listing_age]

    def echo(self) -> dict:
        """Input summary persisted with the run report."""
        return {
            "searchType": self.search_type,
            "regions": self.regions,
            "propertyTypes": self.property_types,
            "priceRange": [self.min_price, self.max_price],
            "bedrooms": [self.min_bedrooms, self.max_bedrooms],
            "bathrooms": [self.min_bathrooms, self.max_bathrooms],
            "livingArea": [self.min_living_area, self.max_living_area],
            "lotSize": [self.min_lot_size, self.max_lot_size],
            "yearBuilt": [self.year_built_min, self.year_built_max],
            "maxListings": self.max_listings,
        }

    @classmethod
    def from_file(cls, path: str | Path) -> "RunInput":
        """Load input from a JSON file."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))
