"""
Area parsing utilities.

Parse living area and lot size. Everything downstream is in square feet;
metric values are converted on extraction.
"""

import re

from src.utils.parsers.base import NUMBER, FieldExtractor, FieldKind, parse_number

# 1 ft = 0.3048 m
SQFT_PER_SQM = 1 / (0.3048**2)

SQFT_UNITS = r"pi²|pi2|pc\b|pi\.?\s*ca\.?|pieds?\s+carrés|sq\.?\s*ft\.?|ft²|square\s+feet"
SQM_UNITS = r"m²|m2\b|mètres?\s+carrés|square\s+met(?:er|re)s"


def sqm_to_sqft(value: float) -> int:
    """
    Convert square meters to square feet, rounded to the nearest integer.

    Example:
        >>> sqm_to_sqft(100)
        1076
    """
    return round(value * SQFT_PER_SQM)


def sqft_to_sqm(value: float) -> int:
    """
    Convert square feet to square meters, rounded to the nearest integer.

    Example:
        >>> sqft_to_sqm(1076)
        100
    """
    return round(value / SQFT_PER_SQM)


class AreaExtractor(FieldExtractor):
    """Area with unit, normalized to square feet."""

    kind = FieldKind.AREA
    patterns = (
        re.compile(rf"(?P<value>{NUMBER})\s*(?P<sqft>{SQFT_UNITS})", re.IGNORECASE),
        re.compile(rf"(?P<value>{NUMBER})\s*(?P<sqm>{SQM_UNITS})", re.IGNORECASE),
    )

    def __init__(self, labels: tuple[str, ...] = ()):
        if labels:
            label = "|".join(labels)
            self.labeled_patterns = tuple(
                re.compile(rf"(?:{label})\s*:?\s*{p.pattern}", re.IGNORECASE)
                for p in self.patterns
            )

    def convert(self, match: re.Match) -> int | None:
        value = parse_number(match.group("value"))
        if value is None or value <= 0:
            return None
        if match.groupdict().get("sqm"):
            return sqm_to_sqft(value)
        return round(value)


AREA_EXTRACTOR = AreaExtractor()
LIVING_AREA_EXTRACTOR = AreaExtractor(
    (
        r"superficie\s+habitable",
        r"aire\s+habitable",
        r"superficie\s+nette",
        r"living\s+area",
        r"net\s+area",
    )
)
LOT_SIZE_EXTRACTOR = AreaExtractor(
    (r"superficie\s+du\s+terrain", r"superficie\s+terrain", r"lot\s+(?:area|size)", r"land\s+area")
)
