"""
Unit tests for src/utils/mappings/
"""

from src.utils.mappings import (
    convert_region_to_slug,
    get_property_type_synonyms,
    slugify_region,
)


class TestConvertRegionToSlug:
    """Tests for convert_region_to_slug function."""

    def test_accented_and_unaccented(self):
        assert convert_region_to_slug("Montréal") == "montreal"
        assert convert_region_to_slug("montreal") == "montreal"

    def test_english_variant(self):
        assert convert_region_to_slug("Quebec City") == "quebec"
        assert convert_region_to_slug("Québec") == "quebec"

    def test_case_and_whitespace(self):
        assert convert_region_to_slug("  LAVAL ") == "laval"
        assert convert_region_to_slug("Trois   Rivières") == "trois-rivieres"

    def test_unknown_falls_back_to_slug(self):
        assert convert_region_to_slug("Saint Jean sur Richelieu") == "saint-jean-sur-richelieu"

    def test_blank(self):
        assert convert_region_to_slug("") is None
        assert convert_region_to_slug(None) is None


class TestSlugifyRegion:
    """Tests for slugify_region function."""

    def test_whitespace_runs(self):
        assert slugify_region("  Saint Jean  sur Richelieu ") == "saint-jean-sur-richelieu"


class TestPropertyTypeSynonyms:
    """Tests for get_property_type_synonyms function."""

    def test_house(self):
        synonyms = get_property_type_synonyms("house")
        assert "maison" in synonyms
        assert "bungalow" in synonyms

    def test_case_insensitive(self):
        assert get_property_type_synonyms("Condo") == get_property_type_synonyms("condo")

    def test_unknown_is_own_synonym(self):
        assert get_property_type_synonyms("Yacht") == ("yacht",)

    def test_blank(self):
        assert get_property_type_synonyms("") == ()
        assert get_property_type_synonyms(None) == ()
