"""
Price parsing utilities.

Parse prices and labeled dollar amounts (taxes) from listing text.
"""

import re

from src.utils.parsers.base import NUMBER, FieldExtractor, FieldKind, parse_number


def parse_price(price_raw: str | None) -> int | None:
    """
    Parse a price by stripping every non-digit character.

    An empty result means unknown (None), never zero.

    Examples:
        >>> parse_price("750 000 $")
        750000
        >>> parse_price("0 $")
        0
        >>> parse_price("Prix sur demande") is None
        True
    """
    if not price_raw:
        return None
    digits = re.sub(r"[^0-9]", "", price_raw)
    return int(digits) if digits else None


class PriceExtractor(FieldExtractor):
    """Price extractor: labeled asking price first, then the whole fragment."""

    kind = FieldKind.PRICE
    labeled_patterns = (
        re.compile(
            rf"(?:prix\s+demandé|asking\s+price|prix|price)\s*:?\s*\$?\s*(?P<value>{NUMBER})\s*\$",
            re.IGNORECASE,
        ),
    )

    def convert(self, match: re.Match) -> int | None:
        return parse_price(match.group("value"))

    def extract(self, fragment: str | None) -> int | None:
        labeled = self.extract_labeled(fragment)
        if labeled is not None:
            return labeled
        return parse_price(fragment) if isinstance(fragment, str) else None


class TaxExtractor(FieldExtractor):
    """Yearly tax amount, labeled ("Taxes municipales (2024) 3 456 $") or bare."""

    kind = FieldKind.PRICE

    def __init__(self, labels: tuple[str, ...]):
        label = "|".join(labels)
        self.labeled_patterns = (
            re.compile(
                rf"(?:{label})(?:\s*\(\d{{4}}\))?\s*:?\s*\$?\s*(?P<value>{NUMBER})\s*\$",
                re.IGNORECASE,
            ),
        )
        self.patterns = (re.compile(rf"^\s*\$?\s*(?P<value>{NUMBER})\s*\$?\s*$"),)

    def convert(self, match: re.Match) -> int | None:
        value = parse_number(match.group("value"))
        return int(round(value)) if value is not None else None


MUNICIPAL_TAX_EXTRACTOR = TaxExtractor((r"taxes?\s+municipales?", r"municipal\s+tax(?:es)?"))
SCHOOL_TAX_EXTRACTOR = TaxExtractor((r"taxes?\s+scolaires?", r"school\s+tax(?:es)?"))
