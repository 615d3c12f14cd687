"""
Field extractor base.

Every field extractor holds an ordered list of recognition patterns and
returns the first value it can convert. Extraction is best-effort: an
unrecognized fragment yields None, never an exception.
"""

import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

# Integer or decimal with optional thousands separators ("1 200", "1,200", "111,5")
NUMBER = r"\d{1,3}(?:[ \u00a0\u202f,]\d{3})+(?:[.,]\d+)?|\d+(?:[.,]\d+)?"


class FieldKind(str, Enum):
    """Kind tag selecting a field extractor."""

    PRICE = "price"
    BEDROOMS = "bedrooms"
    BATHROOMS = "bathrooms"
    ROOMS = "rooms"
    INTEGER_COUNT = "integer-count"
    PARKING = "parking"
    GARAGE = "garage"
    AREA = "area"
    YEAR = "year"
    DATE = "date"
    COORDINATES = "coordinates"


def parse_number(text: str | None) -> float | None:
    """
    Parse a locale-formatted number.

    Spaces are thousands separators. A comma followed by exactly three digits
    at the end is a thousands separator, otherwise a decimal mark.

    Examples:
        >>> parse_number("1 200")
        1200.0
        >>> parse_number("1,200")
        1200.0
        >>> parse_number("111,5")
        111.5
        >>> parse_number("abc") is None
        True
    """
    if not text:
        return None

    cleaned = re.sub(r"[\s\u00a0\u202f]", "", text)
    if "," in cleaned and "." in cleaned:
        cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        if re.search(r",\d{3}$", cleaned):
            cleaned = cleaned.replace(",", "")
        else:
            cleaned = cleaned.replace(",", ".")

    try:
        return float(cleaned)
    except ValueError:
        return None


class FieldExtractor(ABC):
    """
    Base class for field extractors.

    Subclasses declare two ordered pattern lists:
    - labeled_patterns: anchored on a field label ("Chambres : 3"), safe to
      run against a whole page of text
    - patterns: bare value shapes ("3"), only meaningful on a small fragment
    """

    kind: FieldKind
    labeled_patterns: tuple[re.Pattern, ...] = ()
    patterns: tuple[re.Pattern, ...] = ()

    @abstractmethod
    def convert(self, match: re.Match) -> Any | None:
        """
        Convert a pattern match to a typed value.

        Args:
            match: Successful match of one of the extractor's patterns

        Returns:
            Typed value, or None to let the next candidate try
        """
        pass

    def _first(self, fragment: Any, patterns: tuple[re.Pattern, ...]) -> Any | None:
        if not isinstance(fragment, str) or not fragment:
            return None

        for pattern in patterns:
            for match in pattern.finditer(fragment):
                try:
                    value = self.convert(match)
                except (ValueError, TypeError, KeyError, OverflowError):
                    value = None
                if value is not None:
                    return value
        return None

    def extract(self, fragment: str | None) -> Any | None:
        """Extract from a fragment, trying labeled patterns before bare ones."""
        return self._first(fragment, self.labeled_patterns + self.patterns)

    def extract_labeled(self, text: str | None) -> Any | None:
        """Extract from free text using label-anchored patterns only."""
        return self._first(text, self.labeled_patterns)
