"""
Unit tests for src/crawler/url_builder.py
"""

from src.crawler.url_builder import (
    absolutize_url,
    build_page_url,
    build_search_url,
    canonicalize_url,
    extract_external_id,
)
from src.matching import Bound, FilterSpec

BASE = "https://www.centris.ca"


class TestBuildSearchUrl:
    """Tests for build_search_url function."""

    def test_buy_french(self):
        assert build_search_url("Montréal") == f"{BASE}/fr/propriete~a-vendre~montreal"

    def test_rent_french(self):
        assert build_search_url("Laval", "rent") == f"{BASE}/fr/propriete~a-louer~laval"

    def test_english_paths(self):
        assert (
            build_search_url("Laval", "buy", "en")
            == f"{BASE}/en/properties~for-sale~laval"
        )
        assert (
            build_search_url("Laval", "rent", "en")
            == f"{BASE}/en/properties~for-rent~laval"
        )

    def test_region_variants_same_url(self):
        assert build_search_url("Québec") == build_search_url("quebec city")

    def test_unknown_region_slugified(self):
        assert build_search_url("Saint Jean sur Richelieu").endswith(
            "~saint-jean-sur-richelieu"
        )

    def test_filter_hints(self):
        filters = FilterSpec(
            price=Bound(min=400000, max=800000),
            bedrooms=Bound(min=3),
        )
        assert build_search_url("Montreal", filters=filters) == (
            f"{BASE}/fr/propriete~a-vendre~montreal?pmin=400000&pmax=800000&bed=3"
        )

    def test_inactive_filters_omitted(self):
        filters = FilterSpec(price=Bound(max=800000))
        assert build_search_url("Montreal", filters=filters) == (
            f"{BASE}/fr/propriete~a-vendre~montreal?pmax=800000"
        )

    def test_deterministic(self):
        filters = FilterSpec(price=Bound(min=1))
        assert build_search_url("Laval", filters=filters) == build_search_url(
            "Laval", filters=filters
        )


class TestBuildPageUrl:
    """Tests for build_page_url function."""

    def test_first_page_unchanged(self):
        url = f"{BASE}/fr/propriete~a-vendre~laval"
        assert build_page_url(url, 1) == url
        assert build_page_url(url, 0) == url

    def test_later_page(self):
        url = f"{BASE}/fr/propriete~a-vendre~laval"
        assert build_page_url(url, 3) == f"{url}?view=Thumbnail&page=3"

    def test_keeps_existing_query(self):
        url = f"{BASE}/fr/propriete~a-vendre~laval?pmin=1"
        assert build_page_url(url, 2) == f"{url}&view=Thumbnail&page=2"

    def test_replaces_previous_page(self):
        url = f"{BASE}/fr/propriete~a-vendre~laval?view=Thumbnail&page=2"
        assert build_page_url(url, 3).endswith("?view=Thumbnail&page=3")


class TestCanonicalizeUrl:
    """Tests for canonicalize_url function."""

    def test_sorts_query_and_drops_fragment(self):
        assert (
            canonicalize_url("https://WWW.Centris.ca/a?b=2&a=1#top")
            == "https://www.centris.ca/a?a=1&b=2"
        )

    def test_equal_urls(self):
        assert canonicalize_url(f"{BASE}/x?page=2&view=Thumbnail") == canonicalize_url(
            f"{BASE}/x?view=Thumbnail&page=2"
        )


class TestAbsolutizeUrl:
    """Tests for absolutize_url function."""

    def test_relative(self):
        assert (
            absolutize_url("/fr/maison~a-vendre~laval/12345678")
            == f"{BASE}/fr/maison~a-vendre~laval/12345678"
        )

    def test_absolute_unchanged(self):
        url = "https://mspublic.centris.ca/media.ashx?id=1"
        assert absolutize_url(url) == url

    def test_rejected(self):
        assert absolutize_url("javascript:void(0)") is None
        assert absolutize_url("#") is None
        assert absolutize_url("") is None
        assert absolutize_url(None) is None


class TestExtractExternalId:
    """Tests for extract_external_id function."""

    def test_listing_url(self):
        assert extract_external_id(f"{BASE}/fr/maison~a-vendre~laval/12345678") == "12345678"

    def test_no_id(self):
        assert extract_external_id(f"{BASE}/fr/propriete~a-vendre~laval") is None
        assert extract_external_id(None) is None
