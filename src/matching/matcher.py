"""
Listing filter matching logic.

This module tests normalized listings against a FilterSpec. Extraction is
best-effort, so an unknown (None) field never rejects a listing: only a
known value outside an active bound does.
"""

from loguru import logger

from src.matching.filter_spec import Bound, FilterSpec
from src.modules.listings import Address, NormalizedListing

matcher_log = logger.bind(module="Matcher")


def match_range(value: int | float | None, bound: Bound) -> bool:
    """
    Match a value against an inclusive range.

    Args:
        value: Listing value (None = unknown)
        bound: Range; a side set to 0 is unbounded

    Returns:
        True if the value is unknown or within every active side

    Examples:
        >>> match_range(500000, Bound(min=400000, max=800000))
        True
        >>> match_range(None, Bound(min=400000))
        True
        >>> match_range(900000, Bound(max=800000))
        False
    """
    if value is None:
        return True  # Unknown, don't filter

    if bound.min > 0 and value < bound.min:
        return False
    if bound.max > 0 and value > bound.max:
        return False
    return True


def match_property_type(property_type: str | None, synonyms: tuple[str, ...]) -> bool:
    """
    Match free-text property type against accepted synonyms.

    The type must contain at least one synonym as a case-insensitive
    substring. No synonyms means every type passes.
    """
    if not synonyms:
        return True
    if not property_type:
        return True  # Unknown, don't filter

    text = property_type.lower()
    return any(synonym in text for synonym in synonyms)


def match_neighborhood(address: Address, neighborhoods: tuple[str, ...]) -> bool:
    """Match any requested neighborhood against the address (substring, case-insensitive)."""
    if not neighborhoods:
        return True

    haystack = " ".join(
        part
        for part in (address.neighborhood, address.city, address.full_address)
        if part
    ).lower()
    if not haystack:
        return True  # Unknown, don't filter

    return any(n.strip().lower() in haystack for n in neighborhoods)


def match_features(features: list[str], required: tuple[str, ...]) -> bool:
    """Every required feature must appear in some listed feature."""
    if not required:
        return True
    if not features:
        return True  # Unknown, don't filter

    listed = [f.lower() for f in features]
    return all(
        any(req.strip().lower() in feature for feature in listed) for req in required
    )


def match_listing_age(days_on_market: int | None, max_days: int | None) -> bool:
    """Listing must be at most max_days old."""
    if max_days is None or days_on_market is None:
        return True
    return days_on_market <= max_days


def matches(record: NormalizedListing, spec: FilterSpec) -> bool:
    """
    Check whether a listing passes every criterion of a filter.

    Matching logic (all must pass):
    - Range criteria (price, bedrooms, bathrooms, living area, lot size,
      year built): value within the active sides of the range
    - Property type: type text contains a synonym of a requested category
    - Neighborhoods: address mentions one of the requested neighborhoods
    - Features: every requested feature is listed
    - Listing age: days on market within the requested age

    Args:
        record: Normalized listing
        spec: Filter specification

    Returns:
        True if the listing matches
    """
    ranges = {
        "price": (record.price, spec.price),
        "bedrooms": (record.bedrooms, spec.bedrooms),
        "bathrooms": (record.bathrooms, spec.bathrooms),
        "living_area": (record.living_area, spec.living_area),
        "lot_size": (record.lot_size, spec.lot_size),
        "year_built": (record.year_built, spec.year_built),
    }
    for name, (value, bound) in ranges.items():
        if not match_range(value, bound):
            matcher_log.debug(f"Rejected {record.url}: {name}={value}")
            return False

    if not match_property_type(record.property_type, spec.type_synonyms):
        matcher_log.debug(f"Rejected {record.url}: type={record.property_type!r}")
        return False

    if not match_neighborhood(record.address, spec.neighborhoods):
        matcher_log.debug(f"Rejected {record.url}: neighborhood")
        return False

    if not match_features(record.features, spec.features):
        matcher_log.debug(f"Rejected {record.url}: features")
        return False

    if not match_listing_age(record.days_on_market, spec.max_days_on_market):
        matcher_log.debug(f"Rejected {record.url}: age={record.days_on_market}d")
        return False

    return True

