"""
Region mapping (free-text name → Centris slug).

Accented, unaccented, French and English spellings all map to one slug.
"""

import re

REGION_NAME_TO_SLUG: dict[str, str] = {
    "montreal": "montreal",
    "montréal": "montreal",
    "quebec": "quebec",
    "québec": "quebec",
    "quebec city": "quebec",
    "québec city": "quebec",
    "ville de québec": "quebec",
    "ville de quebec": "quebec",
    "laval": "laval",
    "longueuil": "longueuil",
    "gatineau": "gatineau",
    "sherbrooke": "sherbrooke",
    "trois-rivières": "trois-rivieres",
    "trois-rivieres": "trois-rivieres",
    "trois rivières": "trois-rivieres",
    "trois rivieres": "trois-rivieres",
    "saguenay": "saguenay",
    "lévis": "levis",
    "levis": "levis",
    "terrebonne": "terrebonne",
    "brossard": "brossard",
    "repentigny": "repentigny",
}


def slugify_region(name: str) -> str:
    """
    Fallback slug for a region missing from the table.

    Example:
        >>> slugify_region("  Saint Jean  sur Richelieu ")
        'saint-jean-sur-richelieu'
    """
    return re.sub(r"\s+", "-", name.strip().lower())


def convert_region_to_slug(name: str | None) -> str | None:
    """
    Convert a region name to its Centris slug.

    Args:
        name: Region name, any case (e.g., "Montréal", "quebec city")

    Returns:
        Canonical slug, the slugified input on a table miss, or None for blank input

    Example:
        >>> convert_region_to_slug("Québec")
        'quebec'
        >>> convert_region_to_slug("Quebec City")
        'quebec'
        >>> convert_region_to_slug("Blainville")
        'blainville'
    """
    if not name or not name.strip():
        return None
    key = re.sub(r"\s+", " ", name.strip().lower())
    return REGION_NAME_TO_SLUG.get(key) or slugify_region(key)
