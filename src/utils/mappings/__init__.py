"""
Mapping modules for the Centris crawler.

Contains synonym tables for converting free-text names to canonical identifiers.
"""

from src.utils.mappings.property_type import (
    PROPERTY_TYPE_SYNONYMS,
    get_property_type_synonyms,
)
from src.utils.mappings.regions import (
    REGION_NAME_TO_SLUG,
    convert_region_to_slug,
    slugify_region,
)

__all__ = [
    # Regions
    "REGION_NAME_TO_SLUG",
    "convert_region_to_slug",
    "slugify_region",
    # Property types
    "PROPERTY_TYPE_SYNONYMS",
    "get_property_type_synonyms",
]
