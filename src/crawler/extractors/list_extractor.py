"""
Search-results page extractor for the Centris crawler.

This module extracts listing summary cards and the next-page link from a
rendered search-results page. Selector lists are tried in order; markup
drift only degrades individual fields to None.
"""

from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Tag
from loguru import logger

from src.crawler.url_builder import BASE_URL, absolutize_url, extract_external_id
from src.modules.listings import ListingSummary
from src.utils.parsers import FieldKind, extract_field, get_extractor

extractor_log = logger.bind(module="ListExtractor")

CARD_SELECTORS = (
    ".property-thumbnail-item",
    ".thumbnail-item",
    "[data-id]",
    ".property-thumbnail",
    "a.property-thumbnail-summary-link",
    ".shell",
)

LINK_SELECTOR = (
    "a.property-thumbnail-summary-link, "
    'a[href*="propriete"], a[href*="property"], '
    'a[href*="~a-vendre~"], a[href*="~a-louer~"], '
    'a[href*="~for-sale~"], a[href*="~for-rent~"]'
)

PRICE_SELECTORS = (".price", ".price span", '[class*="price"]', ".property-price")
ADDRESS_SELECTORS = (".address", ".location", '[class*="address"]', ".property-address")
TYPE_SELECTORS = (".category", ".property-type", '[class*="category"]')
BEDROOM_SELECTORS = (".cac", ".bedrooms", '[class*="bedroom"]')
BATHROOM_SELECTORS = (".sdb", ".bathrooms", '[class*="bathroom"]')

NEXT_PAGE_SELECTOR = (
    'a.next, a[rel="next"], li.next a, .pagination a.active + a, '
    '[class*="pagination"] a:last-child'
)


def _select_text(card: Tag, selectors: tuple[str, ...], must_contain: str = "") -> str | None:
    """Text of the first element matching one of the selectors."""
    for selector in selectors:
        elem = card.select_one(selector)
        if elem is None:
            continue
        text = elem.get_text(", ", strip=True)
        if text and must_contain in text:
            return text
    return None


def _find_cards(soup: BeautifulSoup) -> list[Tag]:
    """Find listing cards using the first selector that matches anything."""
    for selector in CARD_SELECTORS:
        cards = soup.select(selector)
        if cards:
            return cards

    # No card container, fall back to bare links carrying a listing id
    # (search and pager links also contain "propriete")
    return [
        link
        for link in soup.select(LINK_SELECTOR)
        if extract_external_id(link.get("href"))
    ]


def _parse_card(card: Tag, base_url: str) -> ListingSummary | None:
    """
    Parse a single card element into a ListingSummary.

    Args:
        card: Card element (container or link)
        base_url: Site root for resolving relative links

    Returns:
        ListingSummary, or None when the card has no usable listing link
    """
    link = card if card.name == "a" else card.select_one(LINK_SELECTOR)
    if link is None:
        return None

    url = absolutize_url(link.get("href"), base_url)
    if not url or urlsplit(url).netloc != urlsplit(base_url).netloc:
        return None

    price_raw = _select_text(card, PRICE_SELECTORS, must_contain="$")
    address_raw = _select_text(card, ADDRESS_SELECTORS)
    type_raw = _select_text(card, TYPE_SELECTORS)

    card_text = card.get_text(" ", strip=True)
    bedrooms = extract_field(_select_text(card, BEDROOM_SELECTORS), FieldKind.BEDROOMS)
    if bedrooms is None:
        bedrooms = get_extractor(FieldKind.BEDROOMS).extract_labeled(card_text)
    bathrooms = extract_field(_select_text(card, BATHROOM_SELECTORS), FieldKind.BATHROOMS)
    if bathrooms is None:
        bathrooms = get_extractor(FieldKind.BATHROOMS).extract_labeled(card_text)

    main_image = None
    img = card.find("img")
    if img is not None:
        main_image = absolutize_url(img.get("src") or img.get("data-src"), base_url)

    return ListingSummary(
        source_url=url,
        external_id=extract_external_id(url),
        title=link.get("title") or None,
        price_raw=price_raw,
        price=extract_field(price_raw, FieldKind.PRICE),
        address_raw=address_raw,
        property_type_raw=type_raw,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        main_image_url=main_image,
    )


def extract_summaries(html: str, base_url: str = BASE_URL) -> list[ListingSummary]:
    """
    Extract listing summaries from a search-results page.

    Cards that fail to parse are skipped. Summaries are unique by URL,
    in page order.

    Args:
        html: Rendered page HTML
        base_url: Site root for resolving relative links

    Returns:
        List of ListingSummary
    """
    soup = BeautifulSoup(html, "html.parser")
    cards = _find_cards(soup)

    extractor_log.debug(f"Found {len(cards)} candidate cards")

    results: list[ListingSummary] = []
    seen: set[str] = set()
    for card in cards:
        try:
            summary = _parse_card(card, base_url)
        except Exception as e:
            extractor_log.warning(f"Failed to parse card: {e}")
            continue

        if summary is None or summary.source_url in seen:
            continue
        seen.add(summary.source_url)
        results.append(summary)

    return results


def find_next_page_url(html: str, base_url: str = BASE_URL) -> str | None:
    """
    Find the "next page" link on a search-results page.

    Args:
        html: Rendered page HTML
        base_url: Site root for resolving relative links

    Returns:
        Absolute URL of the next page, or None
    """
    soup = BeautifulSoup(html, "html.parser")
    link = soup.select_one(NEXT_PAGE_SELECTOR)
    if link is None:
        return None
    return absolutize_url(link.get("href"), base_url)
