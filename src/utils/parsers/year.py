"""
Year parsing utilities.

Parse construction year from listing text.
"""

import re

from src.utils.parsers.base import FieldExtractor, FieldKind

MIN_YEAR = 1800
MAX_YEAR = 2100

YEAR = r"(?P<value>(?:18|19|20|21)\d{2})"


class YearExtractor(FieldExtractor):
    """Four-digit year, labeled ("Année de construction 1995") or bare."""

    kind = FieldKind.YEAR
    labeled_patterns = (
        re.compile(
            rf"(?:année\s+de\s+construction|year\s+built|construit\s+en|built\s+in|construction)\D{{0,20}}{YEAR}\b",
            re.IGNORECASE,
        ),
    )
    patterns = (re.compile(rf"(?<!\d){YEAR}(?!\d)"),)

    def convert(self, match: re.Match) -> int | None:
        value = int(match.group("value"))
        return value if MIN_YEAR <= value <= MAX_YEAR else None
