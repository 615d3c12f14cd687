"""
Utility modules for the Centris crawler.
"""

from src.utils.mappings import (
    PROPERTY_TYPE_SYNONYMS,
    REGION_NAME_TO_SLUG,
    convert_region_to_slug,
    get_property_type_synonyms,
    slugify_region,
)
from src.utils.parsers import (
    FieldKind,
    extract_field,
    parse_address,
    parse_price,
)

__all__ = [
    # Mappings
    "REGION_NAME_TO_SLUG",
    "PROPERTY_TYPE_SYNONYMS",
    "convert_region_to_slug",
    "slugify_region",
    "get_property_type_synonyms",
    # Parsers
    "FieldKind",
    "extract_field",
    "parse_address",
    "parse_price",
]
