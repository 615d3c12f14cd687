"""
Address parsing utilities.

Decompose a free-text Quebec address into structured subfields.
"""

import re
from typing import TypedDict

# Canadian postal code (e.g., "H2X 1Y4", "h2x1y4")
POSTAL_CODE = re.compile(r"\b([A-Za-z]\d[A-Za-z])\s?(\d[A-Za-z]\d)\b")

# Trailing parenthesised neighborhood on the city segment: "Montréal (Rosemont)"
NEIGHBORHOOD = re.compile(r"^(?P<city>[^()]*?)\s*\((?P<neighborhood>[^()]+)\)\s*$")


class ParsedAddress(TypedDict):
    """Structured address fields; every field may be None."""

    street: str | None
    city: str | None
    neighborhood: str | None
    region: str | None
    postal_code: str | None


def _format_postal_code(match: re.Match) -> str:
    return f"{match.group(1)} {match.group(2)}".upper()


def parse_address(full_address: str | None) -> ParsedAddress:
    """
    Parse a comma-separated address.

    Segment 0 is the street, 1 the city, 2 the region (a postal code found
    inside it is pulled out), 3 an explicit postal code that overrides one
    found in segment 2.

    Args:
        full_address: Address text (e.g., "1234, rue Sherbrooke Est, Montréal (Le Plateau), QC H2L 1M1")

    Returns:
        ParsedAddress dict

    Examples:
        >>> parse_address("123 Rue Principale, Laval, QC H7N 1A1")["postal_code"]
        'H7N 1A1'
        >>> parse_address(None)["street"] is None
        True
    """
    result: ParsedAddress = {
        "street": None,
        "city": None,
        "neighborhood": None,
        "region": None,
        "postal_code": None,
    }
    if not isinstance(full_address, str):
        return result

    segments = [s.strip() for s in re.sub(r"\s+", " ", full_address).split(",")]
    segments = [s for s in segments if s]
    if not segments:
        return result

    # Centris writes the civic number as its own segment: "1234, rue Sherbrooke Est"
    if len(segments) > 1 and re.fullmatch(r"\d+[A-Za-z]?(?:-\d+)?", segments[0]):
        segments = [f"{segments[0]} {segments[1]}"] + segments[2:]

    result["street"] = segments[0]

    if len(segments) > 1:
        city = segments[1]
        match = NEIGHBORHOOD.match(city)
        if match and match.group("city"):
            city = match.group("city")
            result["neighborhood"] = match.group("neighborhood").strip()
        result["city"] = city

    if len(segments) > 2:
        region = segments[2]
        postal = POSTAL_CODE.search(region)
        if postal:
            result["postal_code"] = _format_postal_code(postal)
            region = (region[: postal.start()] + region[postal.end() :]).strip()
        result["region"] = region or None

    if len(segments) > 3:
        postal = POSTAL_CODE.search(segments[3])
        result["postal_code"] = _format_postal_code(postal) if postal else segments[3]

    return result
