"""
Matching module for client-side listing filters.

URL query parameters are only hints to the site; every listing is checked
here before it is emitted.
"""

from src.matching.filter_spec import Bound, FilterSpec
from src.matching.matcher import (
    match_features,
    match_listing_age,
    match_neighborhood,
    match_property_type,
    match_range,
    matches,
)

__all__ = [
    # Spec
    "Bound",
    "FilterSpec",
    # Matching functions
    "match_range",
    "match_property_type",
    "match_neighborhood",
    "match_features",
    "match_listing_age",
    "matches",
]
