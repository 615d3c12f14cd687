"""
Integer count parsing utilities.

Parse bedroom, bathroom, room, parking and garage counts from listing text
in French and English phrasings.
"""

import re

from src.utils.parsers.base import FieldExtractor, FieldKind

# Counts above this are treated as noise (years, prices)
MAX_COUNT = 99

# A fragment that is nothing but a small number ("3")
BARE_COUNT = re.compile(r"^\s*(?P<value>\d{1,2})\s*$")


class CountExtractor(FieldExtractor):
    """Non-negative integer count next to one of its unit words."""

    def __init__(self, kind: FieldKind, words: tuple[str, ...]):
        self.kind = kind
        self.words = words
        word = "|".join(words)
        self.labeled_patterns = (
            # "3 chambres", "2 bathrooms"
            re.compile(rf"(?<![\d.,])(?P<value>\d{{1,2}})\s*(?:{word})", re.IGNORECASE),
            # "Chambres : 3", "Bedrooms 2"
            re.compile(rf"(?:{word})\s*(?:\(\w+\))?\s*:?\s*\(?(?P<value>\d{{1,2}})\b", re.IGNORECASE),
        )
        self.patterns = (BARE_COUNT,)

    def convert(self, match: re.Match) -> int | None:
        value = int(match.group("value"))
        return value if 0 <= value <= MAX_COUNT else None


BEDROOMS_EXTRACTOR = CountExtractor(
    FieldKind.BEDROOMS,
    (r"chambres?\b", r"ch\.?\b", r"bedrooms?\b", r"beds?\b", r"cac\b"),
)
BATHROOMS_EXTRACTOR = CountExtractor(
    FieldKind.BATHROOMS,
    (r"salles?\s+de\s+bains?\b", r"sdb\b", r"bathrooms?\b", r"baths?\b"),
)
ROOMS_EXTRACTOR = CountExtractor(FieldKind.ROOMS, (r"pièces\b", r"\brooms\b"))
PARKING_EXTRACTOR = CountExtractor(
    FieldKind.PARKING,
    (r"stationnements?\b", r"parking\s+spaces?\b", r"parking\b"),
)
GARAGE_EXTRACTOR = CountExtractor(FieldKind.GARAGE, (r"garages?\b",))

# Any count: bare number or next to one of the known unit words
COUNT_EXTRACTOR = CountExtractor(
    FieldKind.INTEGER_COUNT,
    BEDROOMS_EXTRACTOR.words
    + BATHROOMS_EXTRACTOR.words
    + ROOMS_EXTRACTOR.words
    + PARKING_EXTRACTOR.words
    + GARAGE_EXTRACTOR.words,
)

# "Garage (1), Allée (2)"
PARENTHESISED_COUNT = re.compile(r"\((\d{1,2})\)")


def parse_parking_total(text: str | None) -> int | None:
    """
    Sum the per-kind counts of a parking breakdown.

    Examples:
        >>> parse_parking_total("Allée (2), Garage (1)")
        3
        >>> parse_parking_total("Aucun") is None
        True
    """
    counts = [int(n) for n in PARENTHESISED_COUNT.findall(text or "")]
    return sum(counts) if counts else None
