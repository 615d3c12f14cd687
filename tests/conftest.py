"""
Shared pytest fixtures for all tests.
"""

from datetime import date

import pytest

from config.settings import BrowserSettings

# ============================================================
# Settings Fixtures
# ============================================================


@pytest.fixture
def fast_browser_settings() -> BrowserSettings:
    """Browser settings with no settle delays and a short task budget."""
    return BrowserSettings(
        renderer="http",
        handler_timeout=5.0,
        navigation_timeout=5.0,
        search_settle_ms=0,
        search_scroll_settle_ms=0,
        detail_settle_ms=0,
        popup_settle_ms=0,
    )


@pytest.fixture
def today() -> date:
    """Fixed reference date for days-on-market."""
    return date(2024, 4, 14)


# ============================================================
# Field Text Fixtures
# ============================================================


@pytest.fixture
def price_cases() -> list[tuple[str | None, int | None]]:
    """Test cases for price parsing: (input, expected)."""
    return [
        ("750 000 $", 750000),
        ("$1,250,000", 1250000),
        ("1 250 000 $", 1250000),
        ("0 $", 0),
        ("Prix sur demande", None),
        ("", None),
        (None, None),
    ]


@pytest.fixture
def area_cases() -> list[tuple[str | None, int | None]]:
    """Test cases for area parsing (square feet): (input, expected)."""
    return [
        ("1 450 pc", 1450),
        ("1,450 sq. ft.", 1450),
        ("1 200 pi²", 1200),
        ("100 m²", 1076),
        ("111,5 m2", 1200),
        ("n/a", None),
        (None, None),
    ]
