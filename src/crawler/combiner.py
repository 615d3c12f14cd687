"""
Combiner for merging summary and detail data.

This module merges a search-results card with the listing's detail page into
the canonical output record. Part of the Extract/Combine phase.
"""

from datetime import datetime, timezone

from src.modules.listings import (
    Address,
    Broker,
    Coordinates,
    ListingDetail,
    ListingSummary,
    NormalizedListing,
    dedupe_urls,
)
from src.utils.parsers import parse_address


def build_address(full_address: str | None) -> Address:
    """Build a structured Address from its full text."""
    parsed = parse_address(full_address)
    return Address(
        street=parsed["street"],
        city=parsed["city"],
        neighborhood=parsed["neighborhood"],
        region=parsed["region"],
        postal_code=parsed["postal_code"],
        full_address=full_address or None,
    )


def build_broker(detail: ListingDetail) -> Broker | None:
    """Build a Broker when the detail page shows any broker field."""
    if not (detail.broker_name or detail.broker_agency or detail.broker_phone):
        return None
    return Broker(
        name=detail.broker_name,
        agency=detail.broker_agency,
        phone=detail.broker_phone,
    )


def combine_listing(
    summary: ListingSummary,
    detail: ListingDetail | None,
    transaction_type: str = "Sale",
    include_images: bool = True,
) -> NormalizedListing:
    """
    Merge summary and detail data into a NormalizedListing.

    Priority rules:
    - url, id: from Summary
    - every field the Detail page defines (non-empty): Detail > Summary
    - address, broker: assembled from parsed sub-fields
    - images: Detail gallery, falling back to the Summary main image
    - transactionType, scrapedAt: set here and nowhere earlier

    Args:
        summary: Card data from the search-results page
        detail: Detail page data (None when details are disabled)
        transaction_type: "Sale" or "Rental"
        include_images: Keep the image gallery in the output

    Returns:
        NormalizedListing
    """
    detail = detail or ListingDetail()

    full_address = detail.full_address or summary.address_raw
    price_formatted = detail.price_raw or summary.price_raw
    price = detail.price if detail.price is not None else summary.price

    images = dedupe_urls(detail.images or [summary.main_image_url])
    main_image = summary.main_image_url or (images[0] if images else None)

    coordinates = None
    if detail.coordinates:
        coordinates = Coordinates(
            latitude=detail.coordinates[0], longitude=detail.coordinates[1]
        )

    return NormalizedListing(
        id=summary.external_id,
        external_id=summary.external_id,
        url=summary.source_url,
        title=detail.title or summary.title,
        address=build_address(full_address),
        price=price,
        price_formatted=price_formatted.strip() if price_formatted else None,
        property_type=detail.property_type or summary.property_type_raw,
        transaction_type=transaction_type,
        bedrooms=detail.bedrooms if detail.bedrooms is not None else summary.bedrooms,
        bathrooms=(
            detail.bathrooms if detail.bathrooms is not None else summary.bathrooms
        ),
        living_area=detail.living_area,
        lot_size=detail.lot_size,
        year_built=detail.year_built,
        parking_spaces=detail.parking_spaces,
        garages=detail.garages,
        features=detail.features,
        description=detail.description,
        main_image=main_image,
        images=images if include_images else [],
        broker=build_broker(detail),
        mls_number=detail.mls_number or summary.external_id,
        municipal_taxes=detail.municipal_taxes,
        school_taxes=detail.school_taxes,
        coordinates=coordinates,
        listing_date=detail.listing_date,
        days_on_market=detail.days_on_market,
        scraped_at=datetime.now(timezone.utc),
    )


def combine_with_summary_only(
    summary: ListingSummary,
    transaction_type: str = "Sale",
    include_images: bool = True,
) -> NormalizedListing:
    """
    Create a NormalizedListing from card data only.

    Used when detail pages are disabled.
    """
    return combine_listing(
        summary,
        None,
        transaction_type=transaction_type,
        include_images=include_images,
    )
