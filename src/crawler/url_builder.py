"""
Centris URL builder.

Builds region search URLs and pagination URLs. Every function here is pure
and deterministic: the scheduler dedups pages by URL identity.
"""

import re
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

from loguru import logger

from src.matching import FilterSpec
from src.utils.mappings import REGION_NAME_TO_SLUG, convert_region_to_slug

url_log = logger.bind(module="UrlBuilder")

BASE_URL = "https://www.centris.ca"

# (language, search type) → path prefix
SEARCH_PATHS: dict[tuple[str, str], str] = {
    ("fr", "buy"): "/fr/propriete~a-vendre~",
    ("fr", "rent"): "/fr/propriete~a-louer~",
    ("en", "buy"): "/en/properties~for-sale~",
    ("en", "rent"): "/en/properties~for-rent~",
}

# Centris listing ids are 7+ digits
LISTING_ID = re.compile(r"(\d{7,})")


def build_search_url(
    region: str,
    search_type: str = "buy",
    language: str = "fr",
    filters: FilterSpec | None = None,
    base_url: str = BASE_URL,
) -> str:
    """
    Build a region search URL.

    Filter values become query hints (pmin, pmax, bed). The site may ignore
    them, so results are always filtered again client-side.

    Args:
        region: Region name, any case (e.g., "Montréal", "quebec city")
        search_type: "buy" or "rent"
        language: "fr" or "en"
        filters: Filter specification (only active bounds are sent)
        base_url: Site root

    Returns:
        Absolute search URL

    Examples:
        >>> build_search_url("Québec")
        'https://www.centris.ca/fr/propriete~a-vendre~quebec'
        >>> build_search_url("Laval", "rent", "en")
        'https://www.centris.ca/en/properties~for-rent~laval'
    """
    slug = convert_region_to_slug(region) or "montreal"
    if region and region.strip().lower() not in REGION_NAME_TO_SLUG:
        url_log.debug(f"Region {region!r} not in table, using slug {slug!r}")

    language = language if language in ("fr", "en") else "fr"
    search_type = search_type if search_type in ("buy", "rent") else "buy"
    url = f"{base_url}{SEARCH_PATHS[(language, search_type)]}{slug}"

    params: list[tuple[str, int]] = []
    if filters is not None:
        if filters.price.min > 0:
            params.append(("pmin", filters.price.min))
        if filters.price.max > 0:
            params.append(("pmax", filters.price.max))
        if filters.bedrooms.min > 0:
            params.append(("bed", filters.bedrooms.min))

    return f"{url}?{urlencode(params)}" if params else url


def build_page_url(base_url: str, page_number: int) -> str:
    """
    Build the URL of a results page.

    Page 1 (or lower) is the base URL itself.

    Examples:
        >>> build_page_url("https://www.centris.ca/fr/propriete~a-vendre~laval", 1)
        'https://www.centris.ca/fr/propriete~a-vendre~laval'
        >>> build_page_url("https://www.centris.ca/fr/propriete~a-vendre~laval?pmin=1", 3)
        'https://www.centris.ca/fr/propriete~a-vendre~laval?pmin=1&view=Thumbnail&page=3'
    """
    if page_number <= 1:
        return base_url

    parts = urlsplit(base_url)
    params = [
        (k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True)
        if k not in ("view", "page")
    ]
    params += [("view", "Thumbnail"), ("page", str(page_number))]
    return urlunsplit(parts._replace(query=urlencode(params)))


def canonicalize_url(url: str) -> str:
    """
    Canonical form of a URL for dedup: lowercase host, sorted query, no fragment.

    Example:
        >>> canonicalize_url("https://WWW.Centris.ca/a?b=2&a=1#top")
        'https://www.centris.ca/a?a=1&b=2'
    """
    parts = urlsplit(url.strip())
    query = urlencode(sorted(parse_qsl(parts.query, keep_blank_values=True)))
    return urlunsplit(
        (parts.scheme.lower(), parts.netloc.lower(), parts.path, query, "")
    )


def absolutize_url(href: str | None, base_url: str = BASE_URL) -> str | None:
    """
    Resolve a link against the site root.

    Returns None for empty and javascript: links.

    Examples:
        >>> absolutize_url("/fr/maison~a-vendre~laval/12345678")
        'https://www.centris.ca/fr/maison~a-vendre~laval/12345678'
        >>> absolutize_url("javascript:void(0)") is None
        True
    """
    if not href or not href.strip():
        return None
    href = href.strip()
    if href.lower().startswith("javascript") or href.startswith("#"):
        return None
    return urljoin(base_url + "/", href)


def extract_external_id(url: str | None) -> str | None:
    """
    Extract the Centris listing id from a listing URL.

    Example:
        >>> extract_external_id("https://www.centris.ca/fr/maison~a-vendre~laval/12345678")
        '12345678'
    """
    if not url:
        return None
    match = LISTING_ID.search(urlsplit(url).path)
    return match.group(1) if match else None
