"""
Detail page extractor for the Centris crawler.

This module extracts ListingDetail fields from a rendered listing page.
Structured characteristic rows (label/value pairs) are read first; label-anchored
patterns over the whole page text fill what the rows did not provide.
"""

import re
from datetime import date

from bs4 import BeautifulSoup, Tag
from loguru import logger

from src.crawler.url_builder import absolutize_url, extract_external_id
from src.modules.listings import ListingDetail, dedupe_urls
from src.utils.parsers import (
    BATHROOMS_EXTRACTOR,
    BEDROOMS_EXTRACTOR,
    GARAGE_EXTRACTOR,
    LIVING_AREA_EXTRACTOR,
    LOT_SIZE_EXTRACTOR,
    MUNICIPAL_TAX_EXTRACTOR,
    PARKING_EXTRACTOR,
    ROOMS_EXTRACTOR,
    SCHOOL_TAX_EXTRACTOR,
    FieldKind,
    days_on_market,
    extract_field,
    get_extractor,
    parse_parking_total,
)

extractor_log = logger.bind(module="DetailExtractor")

TITLE_SELECTOR = 'h1, [itemprop="name"], .property-title'
ADDRESS_SELECTOR = '[itemprop="address"], .property-address, .address-container'
PRICE_SELECTOR = '[itemprop="price"], .price, .property-price'
DESCRIPTION_SELECTOR = '[itemprop="description"], .property-description, .description'
TYPE_SELECTOR = '.property-category, .category, [data-id="PageTitle"]'
IMAGE_SELECTOR = (
    'img[src*="centris"], img[src*="mspublic"], .gallery img, [class*="photo"] img'
)
BROKER_SELECTOR = '.broker-info, .agent-info, [class*="courtier"], [class*="broker"]'
FEATURE_SELECTOR = ".features li, .property-features li, [class*=\"feature\"] li"

# Characteristic rows: (title, value) pairs in one of the known containers
ROW_SELECTOR = ".carac-container"
ROW_TITLE = ".carac-title"
ROW_VALUE = ".carac-value"

MLS_NUMBER = re.compile(r"(?:MLS|Centris)\D{0,15}(\d{7,})", re.IGNORECASE)

# Row label → (ListingDetail field, value parser)
ROW_FIELDS: tuple[tuple[re.Pattern, str, FieldKind], ...] = (
    (re.compile(r"chambres?|bedrooms?", re.I), "bedrooms", FieldKind.BEDROOMS),
    (re.compile(r"salles?\s+de\s+bains?|bathrooms?", re.I), "bathrooms", FieldKind.BATHROOMS),
    (re.compile(r"pi[eè]ces|rooms", re.I), "rooms", FieldKind.ROOMS),
    (
        re.compile(r"superficie\s+(?:habitable|nette)|aire\s+habitable|living\s+area|net\s+area", re.I),
        "living_area",
        FieldKind.AREA,
    ),
    (re.compile(r"terrain|lot\s+(?:area|size)|land\s+area", re.I), "lot_size", FieldKind.AREA),
    (re.compile(r"ann[ée]e\s+de\s+construction|year\s+built", re.I), "year_built", FieldKind.YEAR),
    (re.compile(r"stationnement|parking", re.I), "parking_spaces", FieldKind.PARKING),
    (re.compile(r"garage", re.I), "garages", FieldKind.GARAGE),
    (re.compile(r"date|inscrit|listed", re.I), "listing_date", FieldKind.DATE),
)

# Page text fallbacks, label-anchored only
TEXT_FALLBACKS = {
    "bedrooms": BEDROOMS_EXTRACTOR,
    "bathrooms": BATHROOMS_EXTRACTOR,
    "rooms": ROOMS_EXTRACTOR,
    "living_area": LIVING_AREA_EXTRACTOR,
    "lot_size": LOT_SIZE_EXTRACTOR,
    "year_built": get_extractor(FieldKind.YEAR),
    "parking_spaces": PARKING_EXTRACTOR,
    "garages": GARAGE_EXTRACTOR,
    "municipal_taxes": MUNICIPAL_TAX_EXTRACTOR,
    "school_taxes": SCHOOL_TAX_EXTRACTOR,
    "listing_date": get_extractor(FieldKind.DATE),
}


def _clean(text: str | None) -> str | None:
    if not text:
        return None
    text = re.sub(r"\s+", " ", text).strip()
    return text or None


def _text(soup: BeautifulSoup | Tag, selector: str) -> str | None:
    elem = soup.select_one(selector)
    if elem is None:
        return None
    return _clean(elem.get_text(" "))


def _characteristic_rows(soup: BeautifulSoup) -> list[tuple[str, str]]:
    """Collect label/value pairs from characteristic containers, definition lists and tables."""
    rows: list[tuple[str, str]] = []

    for container in soup.select(ROW_SELECTOR):
        title = container.select_one(ROW_TITLE)
        value = container.select_one(ROW_VALUE)
        if title and value:
            rows.append((title.get_text(" ", strip=True), value.get_text(" ", strip=True)))

    for dl in soup.find_all("dl"):
        for dt in dl.find_all("dt"):
            dd = dt.find_next_sibling("dd")
            if dd is not None:
                rows.append((dt.get_text(" ", strip=True), dd.get_text(" ", strip=True)))

    for tr in soup.select("table tr"):
        cells = tr.find_all(["th", "td"])
        if len(cells) >= 2:
            rows.append((cells[0].get_text(" ", strip=True), cells[1].get_text(" ", strip=True)))

    return rows


def _parse_rows(rows: list[tuple[str, str]]) -> dict:
    """Map characteristic rows to detail fields; the first row matching a field wins."""
    data: dict = {}
    for label, value in rows:
        for pattern, field, kind in ROW_FIELDS:
            if field in data or not pattern.search(label):
                continue
            parsed = extract_field(value, kind)
            if parsed is None and field == "parking_spaces":
                parsed = parse_parking_total(value)
            if parsed is not None:
                data[field] = parsed
            break
    return data


def _extract_address(soup: BeautifulSoup) -> str | None:
    text = _text(soup, ADDRESS_SELECTOR)
    if text is None:
        return None
    return re.sub(r"\s+,", ",", text)


def _extract_price(soup: BeautifulSoup) -> tuple[str | None, int | None]:
    """Price text and value; itemprop="price" may carry the amount in content."""
    elem = soup.select_one(PRICE_SELECTOR)
    if elem is None:
        return None, None

    price_raw = _clean(elem.get_text(" "))
    price = extract_field(price_raw, FieldKind.PRICE)
    if price is None and elem.get("content"):
        price = extract_field(str(elem["content"]).split(".")[0], FieldKind.PRICE)
    return price_raw, price


def _extract_coordinates(soup: BeautifulSoup, html: str) -> tuple[float, float] | None:
    lat = soup.select_one('[itemprop="latitude"]')
    lng = soup.select_one('[itemprop="longitude"]')
    if lat is not None and lng is not None:
        pair = f"{lat.get('content') or lat.get_text()}, {lng.get('content') or lng.get_text()}"
        coordinates = extract_field(pair, FieldKind.COORDINATES)
        if coordinates is not None:
            return coordinates
    return get_extractor(FieldKind.COORDINATES).extract_labeled(html)


def _extract_images(soup: BeautifulSoup, base_url: str) -> list[str]:
    images = []
    for img in soup.select(IMAGE_SELECTOR):
        src = absolutize_url(img.get("src") or img.get("data-src"), base_url)
        if not src or "logo" in src or "icon" in src:
            continue
        images.append(src)
    return dedupe_urls(images)


def _extract_broker(soup: BeautifulSoup) -> dict:
    broker = soup.select_one(BROKER_SELECTOR)
    if broker is None:
        return {}

    phone = None
    phone_elem = broker.select_one('a[href^="tel:"], .phone')
    if phone_elem is not None:
        href = phone_elem.get("href") or ""
        phone = _clean(href.removeprefix("tel:")) or _clean(phone_elem.get_text())

    return {
        "broker_name": _text(broker, ".name, h3, h4, strong"),
        "broker_agency": _text(broker, '.agency, .banner, [class*="agency"]'),
        "broker_phone": phone,
    }


def extract_detail(
    html: str,
    url: str,
    today: date | None = None,
) -> ListingDetail:
    """
    Extract detail fields from a listing page.

    Every field is best-effort: a missing element or unrecognized value
    leaves the field None.

    Args:
        html: Rendered page HTML
        url: Page URL (for resolving links and the id fallback)
        today: Reference date for days on market

    Returns:
        ListingDetail
    """
    soup = BeautifulSoup(html, "html.parser")
    page_text = soup.get_text(" ")

    data = _parse_rows(_characteristic_rows(soup))

    # Card-style counters on the detail header
    for selector, field, kind in (
        (".cac", "bedrooms", FieldKind.BEDROOMS),
        (".sdb", "bathrooms", FieldKind.BATHROOMS),
        (".piece", "rooms", FieldKind.ROOMS),
    ):
        if field not in data:
            value = extract_field(_text(soup, selector), kind)
            if value is not None:
                data[field] = value

    for field, extractor in TEXT_FALLBACKS.items():
        if data.get(field) is None:
            value = extractor.extract_labeled(page_text)
            if value is not None:
                data[field] = value

    price_raw, price = _extract_price(soup)

    mls_match = MLS_NUMBER.search(page_text)
    mls_number = mls_match.group(1) if mls_match else extract_external_id(url)

    listing_date = data.pop("listing_date", None)

    features = []
    for item in soup.select(FEATURE_SELECTOR):
        feature = _clean(item.get_text(" "))
        if feature and feature not in features:
            features.append(feature)

    detail = ListingDetail(
        title=_text(soup, TITLE_SELECTOR),
        price_raw=price_raw,
        price=price,
        full_address=_extract_address(soup),
        property_type=_text(soup, TYPE_SELECTOR),
        description=_text(soup, DESCRIPTION_SELECTOR),
        features=features,
        mls_number=mls_number,
        images=_extract_images(soup, url),
        coordinates=_extract_coordinates(soup, html),
        listing_date=listing_date,
        days_on_market=days_on_market(listing_date, today),
        **_extract_broker(soup),
        **data,
    )

    extractor_log.debug(
        f"Extracted detail {mls_number}: price={detail.price} "
        f"bedrooms={detail.bedrooms} area={detail.living_area}"
    )
    return detail
