"""Listings module."""

from src.modules.listings.models import (
    Address,
    Broker,
    Coordinates,
    ErrorRecord,
    ListingDetail,
    ListingSummary,
    NormalizedListing,
    dedupe_urls,
)

__all__ = [
    "Address",
    "Broker",
    "Coordinates",
    "ErrorRecord",
    "ListingDetail",
    "ListingSummary",
    "NormalizedListing",
    "dedupe_urls",
]
