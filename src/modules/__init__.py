"""Modules package - Domain models for run input and listing records."""

from src.modules.input import ProxyInput, RunInput
from src.modules.listings import (
    Address,
    Broker,
    Coordinates,
    ErrorRecord,
    ListingDetail,
    ListingSummary,
    NormalizedListing,
)

__all__ = [
    # Input
    "RunInput",
    "ProxyInput",
    # Listings
    "ListingSummary",
    "ListingDetail",
    "NormalizedListing",
    "Address",
    "Broker",
    "Coordinates",
    "ErrorRecord",
]
