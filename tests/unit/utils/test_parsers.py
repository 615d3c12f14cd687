"""
Unit tests for src/utils/parsers/
"""

from datetime import date

import pytest

from src.utils.parsers import (
    BATHROOMS_EXTRACTOR,
    BEDROOMS_EXTRACTOR,
    LIVING_AREA_EXTRACTOR,
    LOT_SIZE_EXTRACTOR,
    MUNICIPAL_TAX_EXTRACTOR,
    SCHOOL_TAX_EXTRACTOR,
    FieldKind,
    days_on_market,
    extract_field,
    get_extractor,
    parse_address,
    parse_number,
    parse_parking_total,
    parse_price,
    sqft_to_sqm,
    sqm_to_sqft,
)

# ============================================================
# parse_number tests
# ============================================================


class TestParseNumber:
    """Tests for parse_number function."""

    def test_space_thousands(self):
        assert parse_number("1 200") == 1200.0

    def test_nbsp_thousands(self):
        assert parse_number("1 250 000") == 1250000.0

    def test_comma_thousands(self):
        assert parse_number("1,200") == 1200.0

    def test_comma_decimal(self):
        assert parse_number("111,5") == 111.5

    def test_dot_decimal_with_comma_thousands(self):
        assert parse_number("1,200.50") == 1200.5

    def test_invalid(self):
        assert parse_number("abc") is None

    def test_empty(self):
        assert parse_number("") is None
        assert parse_number(None) is None


# ============================================================
# Price tests
# ============================================================


class TestParsePrice:
    """Tests for price extraction."""

    def test_price_cases(self, price_cases):
        for price_raw, expected in price_cases:
            assert parse_price(price_raw) == expected, price_raw

    def test_extract_field_price_cases(self, price_cases):
        for price_raw, expected in price_cases:
            assert extract_field(price_raw, FieldKind.PRICE) == expected, price_raw

    def test_zero_is_not_unknown(self):
        """'0 $' is a known zero price, not a missing one."""
        assert parse_price("0 $") == 0

    def test_labeled_price_ignores_trailing_digits(self):
        """A labeled amount wins over stripping every digit in the fragment."""
        assert extract_field("Prix : 425 000 $ (2 chambres)", "price") == 425000

    def test_asking_price_english(self):
        assert extract_field("Asking price $1,249,000", FieldKind.PRICE) is not None


class TestTaxes:
    """Tests for municipal and school tax extractors."""

    def test_municipal_labeled(self):
        text = "Taxes municipales (2024) 3 456 $ Taxes scolaires (2024) 412 $"
        assert MUNICIPAL_TAX_EXTRACTOR.extract_labeled(text) == 3456
        assert SCHOOL_TAX_EXTRACTOR.extract_labeled(text) == 412

    def test_english_labels(self):
        text = "Municipal taxes: 2,980 $ School taxes: 301 $"
        assert MUNICIPAL_TAX_EXTRACTOR.extract_labeled(text) == 2980
        assert SCHOOL_TAX_EXTRACTOR.extract_labeled(text) == 301

    def test_bare_fragment(self):
        assert MUNICIPAL_TAX_EXTRACTOR.extract("3 456 $") == 3456

    def test_missing(self):
        assert MUNICIPAL_TAX_EXTRACTOR.extract_labeled("Aucune taxe indiquée") is None


# ============================================================
# Count tests
# ============================================================


class TestCounts:
    """Tests for bedroom / bathroom / room / parking / garage counts."""

    def test_bedrooms_french(self):
        assert extract_field("3 chambres", FieldKind.BEDROOMS) == 3

    def test_bedrooms_label_first(self):
        assert extract_field("Chambres : 4", FieldKind.BEDROOMS) == 4

    def test_bedrooms_english(self):
        assert extract_field("2 bedrooms", "bedrooms") == 2

    def test_bare_number(self):
        """A card counter holds just the number."""
        assert extract_field("3", FieldKind.BEDROOMS) == 3
        assert extract_field(" 2 ", FieldKind.BATHROOMS) == 2

    def test_bathrooms_french(self):
        assert extract_field("2 salles de bain", FieldKind.BATHROOMS) == 2

    def test_rooms(self):
        assert extract_field("9 pièces", FieldKind.ROOMS) == 9

    def test_parking(self):
        assert extract_field("2 stationnements", FieldKind.PARKING) == 2

    def test_garage_parenthesised(self):
        assert extract_field("Garage (1)", FieldKind.GARAGE) == 1

    def test_large_numbers_rejected(self):
        """Three-digit numbers next to a unit word are noise."""
        assert extract_field("150 chambres", FieldKind.BEDROOMS) is None

    def test_no_match(self):
        assert extract_field("beaucoup", FieldKind.BEDROOMS) is None
        assert extract_field(None, FieldKind.BEDROOMS) is None

    def test_labeled_in_page_text(self):
        text = "Prix 500 000 $ 3 chambres 2 salles de bain"
        assert BEDROOMS_EXTRACTOR.extract_labeled(text) == 3
        assert BATHROOMS_EXTRACTOR.extract_labeled(text) == 2

    def test_labeled_ignores_bare_numbers(self):
        assert BEDROOMS_EXTRACTOR.extract_labeled("3") is None


class TestParseParkingTotal:
    """Tests for parse_parking_total function."""

    def test_breakdown(self):
        assert parse_parking_total("Allée (2), Garage (1)") == 3

    def test_single(self):
        assert parse_parking_total("Garage (2)") == 2

    def test_no_counts(self):
        assert parse_parking_total("Aucun") is None
        assert parse_parking_total(None) is None


# ============================================================
# Area tests
# ============================================================


class TestArea:
    """Tests for area extraction (square feet)."""

    def test_area_cases(self, area_cases):
        for area_raw, expected in area_cases:
            assert extract_field(area_raw, FieldKind.AREA) == expected, area_raw

    def test_sqm_to_sqft(self):
        assert sqm_to_sqft(100) == 1076

    def test_sqft_to_sqm(self):
        assert sqft_to_sqm(1076) == 100

    def test_number_without_unit(self):
        assert extract_field("1450", FieldKind.AREA) is None

    def test_labeled_living_area_and_lot(self):
        text = "Superficie habitable : 1 450 pc Superficie du terrain : 4 000 pc"
        assert LIVING_AREA_EXTRACTOR.extract_labeled(text) == 1450
        assert LOT_SIZE_EXTRACTOR.extract_labeled(text) == 4000

    def test_labeled_metric_lot(self):
        assert LOT_SIZE_EXTRACTOR.extract_labeled("Lot area: 100 m²") == 1076


# ============================================================
# Year tests
# ============================================================


class TestYear:
    """Tests for construction year extraction."""

    def test_bare_year(self):
        assert extract_field("1978", FieldKind.YEAR) == 1978

    def test_labeled_french(self):
        assert extract_field("Année de construction : 1995", FieldKind.YEAR) == 1995

    def test_labeled_takes_construction_year(self):
        assert extract_field("Construit en 2005, rénové en 2019", "year") == 2005

    def test_out_of_range(self):
        assert extract_field("1750", FieldKind.YEAR) is None
        assert extract_field("2150", FieldKind.YEAR) is None

    def test_no_year(self):
        assert get_extractor(FieldKind.YEAR).extract_labeled("Prix 450 000 $") is None


# ============================================================
# Date tests
# ============================================================


class TestDate:
    """Tests for listing date extraction and days on market."""

    def test_iso(self):
        assert extract_field("2024-03-15", FieldKind.DATE) == date(2024, 3, 15)

    def test_french(self):
        assert extract_field("15 mars 2024", FieldKind.DATE) == date(2024, 3, 15)

    def test_french_first_of_month(self):
        assert extract_field("1er juin 2024", FieldKind.DATE) == date(2024, 6, 1)

    def test_english(self):
        assert extract_field("March 15, 2024", FieldKind.DATE) == date(2024, 3, 15)

    def test_labeled(self):
        extractor = get_extractor(FieldKind.DATE)
        text = "Date d'inscription : 15 mars 2024"
        assert extractor.extract_labeled(text) == date(2024, 3, 15)

    def test_invalid_calendar_date(self):
        assert extract_field("2024-02-30", FieldKind.DATE) is None

    def test_no_date(self):
        assert extract_field("bientôt", FieldKind.DATE) is None

    def test_days_on_market(self):
        assert days_on_market(date(2024, 3, 1), today=date(2024, 3, 15)) == 14

    def test_days_on_market_never_negative(self):
        assert days_on_market(date(2024, 3, 20), today=date(2024, 3, 15)) == 0

    def test_days_on_market_unknown(self):
        assert days_on_market(None) is None


# ============================================================
# Coordinates tests
# ============================================================


class TestCoordinates:
    """Tests for coordinates extraction."""

    def test_pair(self):
        assert extract_field("45.5017, -73.5673", FieldKind.COORDINATES) == (
            45.5017,
            -73.5673,
        )

    def test_labeled_json(self):
        extractor = get_extractor(FieldKind.COORDINATES)
        text = '{"latitude":45.55,"longitude":-73.58}'
        assert extractor.extract_labeled(text) == (45.55, -73.58)

    def test_out_of_range(self):
        assert extract_field("95.0, 10.0", FieldKind.COORDINATES) is None


# ============================================================
# Registry tests
# ============================================================


class TestRegistry:
    """Tests for get_extractor / extract_field."""

    def test_lookup_by_string(self):
        assert get_extractor("bedrooms") is BEDROOMS_EXTRACTOR

    def test_every_kind_registered(self):
        for kind in FieldKind:
            assert get_extractor(kind).kind is not None

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            get_extractor("color")

    def test_extract_field_unknown_kind(self):
        """extract_field never raises, even for an unregistered tag."""
        assert extract_field("3", "color") is None

    def test_generic_kind_tags(self):
        assert extract_field("750 000 $", "price") == 750000
        assert extract_field("3", "integer-count") == 3
        assert extract_field("1 450 pc", "area") == 1450
        assert extract_field("1978", "year") == 1978
        assert extract_field("2024-03-15", "date") == date(2024, 3, 15)
        assert extract_field("45.5, -73.5", "coordinates") == (45.5, -73.5)

    def test_integer_count_unit_words(self):
        assert extract_field("4 chambres", "integer-count") == 4
        assert extract_field("2 salles de bain", "integer-count") == 2
        assert extract_field("Stationnement : 2", "integer-count") == 2
        assert extract_field("150 pièces", "integer-count") is None

    def test_never_raises_on_garbage(self):
        for kind in FieldKind:
            assert extract_field("???", kind) is None


# ============================================================
# parse_address tests
# ============================================================


class TestParseAddress:
    """Tests for parse_address function."""

    def test_full_centris_address(self):
        result = parse_address(
            "1234, rue Sherbrooke Est, Montréal (Le Plateau-Mont-Royal), QC H2L 1M1"
        )
        assert result["street"] == "1234 rue Sherbrooke Est"
        assert result["city"] == "Montréal"
        assert result["neighborhood"] == "Le Plateau-Mont-Royal"
        assert result["region"] == "QC"
        assert result["postal_code"] == "H2L 1M1"

    def test_postal_code_normalized(self):
        result = parse_address("123 Rue Principale, Laval, QC h7n1a1")
        assert result["postal_code"] == "H7N 1A1"
        assert result["region"] == "QC"

    def test_region_without_postal_code(self):
        result = parse_address("123 Main St, Gatineau, Québec, J8X 2K1")
        assert result["city"] == "Gatineau"
        assert result["region"] == "Québec"
        assert result["postal_code"] == "J8X 2K1"

    def test_fourth_segment_overrides_postal_code(self):
        result = parse_address("123 Main St, Gatineau, QC H1H 1H1, J8X 2K1")
        assert result["postal_code"] == "J8X 2K1"

    def test_empty_segments_dropped(self):
        result = parse_address(" , Laval , ")
        assert result["street"] == "Laval"
        assert result["city"] is None

    def test_street_only(self):
        result = parse_address("Rue Principale")
        assert result["street"] == "Rue Principale"
        assert result["city"] is None
        assert result["neighborhood"] is None

    def test_none_and_empty(self):
        for value in (None, ""):
            result = parse_address(value)
            assert all(v is None for v in result.values())
