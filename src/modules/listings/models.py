"""
Listing Models.

Pydantic models for Centris listing data: the summary card, the detail
page, and the normalized output record (camelCase on the wire).
"""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _non_negative(v: Any) -> int | None:
    """Coerce a count/price to a non-negative int, or None."""
    if v is None or isinstance(v, bool):
        return None
    try:
        value = int(v)
    except (TypeError, ValueError):
        return None
    return value if value >= 0 else None


def dedupe_urls(urls: list[str] | None) -> list[str]:
    """
    Deduplicate URLs keeping first-seen order, dropping non-absolute ones.

    Example:
        >>> dedupe_urls(["https://a/1.jpg", "/rel.jpg", "https://a/1.jpg"])
        ['https://a/1.jpg']
    """
    seen: set[str] = set()
    result: list[str] = []
    for url in urls or []:
        if not isinstance(url, str):
            continue
        url = url.strip()
        if not url.startswith(("http://", "https://")) or url in seen:
            continue
        seen.add(url)
        result.append(url)
    return result


class ListingSummary(BaseModel):
    """Fields extracted from one search-results card. Immutable."""

    model_config = ConfigDict(frozen=True)

    source_url: str
    external_id: str | None = None
    title: str | None = None
    price_raw: str | None = None
    price: int | None = None
    address_raw: str | None = None
    property_type_raw: str | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    main_image_url: str | None = None

    @field_validator("price", "bedrooms", "bathrooms", mode="before")
    @classmethod
    def non_negative(cls, v: Any) -> int | None:
        return _non_negative(v)


class ListingDetail(BaseModel):
    """Fields extracted from a listing's own page."""

    title: str | None = None
    price_raw: str | None = None
    price: int | None = None
    full_address: str | None = None
    property_type: str | None = None
    description: str | None = None
    features: list[str] = Field(default_factory=list)

    # Characteristics
    bedrooms: int | None = None
    bathrooms: int | None = None
    rooms: int | None = None
    living_area: int | None = Field(default=None, description="Square feet")
    lot_size: int | None = Field(default=None, description="Square feet")
    year_built: int | None = None
    parking_spaces: int | None = None
    garages: int | None = None
    municipal_taxes: int | None = None
    school_taxes: int | None = None
    mls_number: str | None = None

    # Broker
    broker_name: str | None = None
    broker_agency: str | None = None
    broker_phone: str | None = None

    images: list[str] = Field(default_factory=list)
    coordinates: tuple[float, float] | None = None
    listing_date: date | None = None
    days_on_market: int | None = None

    @field_validator("price", "bedrooms", "bathrooms", mode="before")
    @classmethod
    def non_negative(cls, v: Any) -> int | None:
        return _non_negative(v)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Address(_CamelModel):
    """Structured address."""

    street: str | None = None
    city: str | None = None
    neighborhood: str | None = None
    region: str | None = None
    postal_code: str | None = None
    full_address: str | None = None


class Broker(_CamelModel):
    """Listing broker contact."""

    name: str | None = None
    agency: str | None = None
    phone: str | None = None


class Coordinates(_CamelModel):
    """Geographic coordinates."""

    latitude: float
    longitude: float


class NormalizedListing(_CamelModel):
    """Canonical output record (wire format)."""

    id: str | None = None
    external_id: str | None = None
    url: str
    title: str | None = None
    address: Address = Field(default_factory=Address)

    price: int | None = None
    price_formatted: str | None = None
    property_type: str | None = None
    transaction_type: Literal["Sale", "Rental"]

    bedrooms: int | None = None
    bathrooms: int | None = None
    living_area: int | None = None
    lot_size: int | None = None
    year_built: int | None = None
    parking_spaces: int | None = None
    garages: int | None = None

    features: list[str] = Field(default_factory=list)
    description: str | None = None
    main_image: str | None = None
    images: list[str] = Field(default_factory=list)
    broker: Broker | None = None

    mls_number: str | None = None
    municipal_taxes: int | None = None
    school_taxes: int | None = None
    coordinates: Coordinates | None = None
    listing_date: date | None = None
    days_on_market: int | None = None

    scraped_at: datetime

    @field_validator("price", "bedrooms", "bathrooms", mode="before")
    @classmethod
    def non_negative(cls, v: Any) -> int | None:
        return _non_negative(v)

    @field_validator("images", mode="before")
    @classmethod
    def unique_absolute_images(cls, v: Any) -> list[str]:
        return dedupe_urls(v)

    def to_record(self) -> dict:
        """Serialize to the JSON-ready wire dict."""
        return self.model_dump(mode="json", by_alias=True)


class ErrorRecord(_CamelModel):
    """Output record for a task that exhausted its retries."""

    url: str
    label: str
    region: str | None = None
    error: str
    retry_count: int = 0
    failed: bool = Field(default=True, alias="#failed")

    def to_record(self) -> dict:
        """Serialize to the JSON-ready wire dict."""
        return self.model_dump(mode="json", by_alias=True)
