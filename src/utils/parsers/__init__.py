"""
Field parser utilities for Centris listing data.

Each field kind has an extractor with an ordered list of recognition
patterns. Callers depend only on extract_field() / the FieldExtractor
interface, so markup drift stays inside the pattern lists.
"""

from typing import Any

from src.utils.parsers.address import ParsedAddress, parse_address
from src.utils.parsers.area import (
    AREA_EXTRACTOR,
    LIVING_AREA_EXTRACTOR,
    LOT_SIZE_EXTRACTOR,
    AreaExtractor,
    sqft_to_sqm,
    sqm_to_sqft,
)
from src.utils.parsers.base import FieldExtractor, FieldKind, parse_number
from src.utils.parsers.coordinates import CoordinatesExtractor
from src.utils.parsers.count import (
    BATHROOMS_EXTRACTOR,
    BEDROOMS_EXTRACTOR,
    COUNT_EXTRACTOR,
    GARAGE_EXTRACTOR,
    PARKING_EXTRACTOR,
    ROOMS_EXTRACTOR,
    CountExtractor,
    parse_parking_total,
)
from src.utils.parsers.date import DateExtractor, days_on_market
from src.utils.parsers.price import (
    MUNICIPAL_TAX_EXTRACTOR,
    SCHOOL_TAX_EXTRACTOR,
    PriceExtractor,
    TaxExtractor,
    parse_price,
)
from src.utils.parsers.year import YearExtractor

EXTRACTORS: dict[FieldKind, FieldExtractor] = {
    FieldKind.PRICE: PriceExtractor(),
    FieldKind.BEDROOMS: BEDROOMS_EXTRACTOR,
    FieldKind.BATHROOMS: BATHROOMS_EXTRACTOR,
    FieldKind.ROOMS: ROOMS_EXTRACTOR,
    FieldKind.INTEGER_COUNT: COUNT_EXTRACTOR,
    FieldKind.PARKING: PARKING_EXTRACTOR,
    FieldKind.GARAGE: GARAGE_EXTRACTOR,
    FieldKind.AREA: AREA_EXTRACTOR,
    FieldKind.YEAR: YearExtractor(),
    FieldKind.DATE: DateExtractor(),
    FieldKind.COORDINATES: CoordinatesExtractor(),
}


def get_extractor(kind: FieldKind | str) -> FieldExtractor:
    """
    Get the registered extractor for a field kind.

    Raises:
        ValueError: Unknown kind tag
    """
    return EXTRACTORS[FieldKind(kind)]


def extract_field(fragment: str | None, kind: FieldKind | str) -> Any | None:
    """
    Extract a typed value from a text fragment.

    Args:
        fragment: Raw text (card text, characteristic value, page text)
        kind: Field kind tag (e.g., FieldKind.PRICE, "integer-count")

    Returns:
        Typed value or None when no pattern recognizes the fragment
        (or the kind tag is unknown)

    Examples:
        >>> extract_field("750 000 $", "price")
        750000
        >>> extract_field("3 chambres", FieldKind.BEDROOMS)
        3
        >>> extract_field("2 salles de bain", "integer-count")
        2
        >>> extract_field("n/a", "area") is None
        True
        >>> extract_field("blue", "color") is None
        True
    """
    try:
        extractor = get_extractor(kind)
    except ValueError:
        return None
    return extractor.extract(fragment)


__all__ = [
    # Base
    "FieldKind",
    "FieldExtractor",
    "EXTRACTORS",
    "get_extractor",
    "extract_field",
    "parse_number",
    # Price
    "PriceExtractor",
    "TaxExtractor",
    "MUNICIPAL_TAX_EXTRACTOR",
    "SCHOOL_TAX_EXTRACTOR",
    "parse_price",
    # Counts
    "CountExtractor",
    "COUNT_EXTRACTOR",
    "BEDROOMS_EXTRACTOR",
    "BATHROOMS_EXTRACTOR",
    "ROOMS_EXTRACTOR",
    "PARKING_EXTRACTOR",
    "GARAGE_EXTRACTOR",
    "parse_parking_total",
    # Area
    "AreaExtractor",
    "AREA_EXTRACTOR",
    "LIVING_AREA_EXTRACTOR",
    "LOT_SIZE_EXTRACTOR",
    "sqm_to_sqft",
    "sqft_to_sqm",
    # Year / date / coordinates
    "YearExtractor",
    "DateExtractor",
    "days_on_market",
    "CoordinatesExtractor",
    # Address
    "ParsedAddress",
    "parse_address",
]
