"""
Coordinates parsing utilities.
"""

import re

from src.utils.parsers.base import FieldExtractor, FieldKind

LAT = r"(?P<lat>-?\d{1,2}\.\d+)"
LNG = r"(?P<lng>-?\d{1,3}\.\d+)"


class CoordinatesExtractor(FieldExtractor):
    """Latitude/longitude pair, returned as a (lat, lng) tuple of floats."""

    kind = FieldKind.COORDINATES
    labeled_patterns = (
        re.compile(
            rf"lat(?:itude)?[\"'\s:=]+{LAT}.{{0,40}}?(?:lng|lon(?:gitude)?)[\"'\s:=]+{LNG}",
            re.IGNORECASE | re.DOTALL,
        ),
    )
    patterns = (re.compile(rf"{LAT}\s*[,;]\s*{LNG}"),)

    def convert(self, match: re.Match) -> tuple[float, float] | None:
        lat = float(match.group("lat"))
        lng = float(match.group("lng"))
        if not (-90 <= lat <= 90 and -180 <= lng <= 180):
            return None
        return lat, lng
