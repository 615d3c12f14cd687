"""
Date parsing utilities.

Parse listing dates (ISO, French and English long forms) and compute
days on market.
"""

import re
from datetime import date

from src.utils.parsers.base import FieldExtractor, FieldKind

MONTHS: dict[str, int] = {
    # French
    "janvier": 1,
    "février": 2,
    "fevrier": 2,
    "mars": 3,
    "avril": 4,
    "mai": 5,
    "juin": 6,
    "juillet": 7,
    "août": 8,
    "aout": 8,
    "septembre": 9,
    "octobre": 10,
    "novembre": 11,
    "décembre": 12,
    "decembre": 12,
    # English
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "sept": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

_MONTH_NAMES = "|".join(sorted(MONTHS, key=len, reverse=True))

DATE_FORMATS = (
    # 2024-03-15
    r"(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})",
    # 15 mars 2024, 1er juin 2024
    rf"(?P<day>\d{{1,2}})(?:er)?\s+(?P<month_name>{_MONTH_NAMES})\.?\s+(?P<year>\d{{4}})",
    # March 15, 2024
    rf"(?P<month_name>{_MONTH_NAMES})\.?\s+(?P<day>\d{{1,2}})(?:st|nd|rd|th)?,?\s+(?P<year>\d{{4}})",
)

DATE_LABELS = (
    r"date\s+d'inscription",
    r"inscrit\s+le",
    r"mis\s+en\s+march[ée]\s+le",
    r"listed\s+on",
    r"listing\s+date",
    r"date\s+listed",
)


class DateExtractor(FieldExtractor):
    """Calendar date, returned as datetime.date."""

    kind = FieldKind.DATE
    labeled_patterns = tuple(
        re.compile(rf"(?:{'|'.join(DATE_LABELS)})\s*:?\s*{fmt}", re.IGNORECASE)
        for fmt in DATE_FORMATS
    )
    patterns = tuple(re.compile(fmt, re.IGNORECASE) for fmt in DATE_FORMATS)

    def convert(self, match: re.Match) -> date | None:
        parts = match.groupdict()
        if parts.get("month_name"):
            month = MONTHS[parts["month_name"].lower()]
        else:
            month = int(parts["month"])
        # Invalid calendar dates raise ValueError, handled by the base class
        return date(int(parts["year"]), month, int(parts["day"]))


def days_on_market(listed_on: date | None, today: date | None = None) -> int | None:
    """
    Compute days since a listing date.

    Args:
        listed_on: Listing date (None if unknown)
        today: Reference date (defaults to today)

    Returns:
        Non-negative day count, or None if the listing date is unknown

    Examples:
        >>> days_on_market(date(2024, 3, 1), today=date(2024, 3, 15))
        14
        >>> days_on_market(None) is None
        True
    """
    if listed_on is None:
        return None
    today = today or date.today()
    return max((today - listed_on).days, 0)
