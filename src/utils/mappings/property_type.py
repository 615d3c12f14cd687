"""
Property type mapping (category → accepted synonyms).

Synonyms are lowercase substrings matched against the free-text property
type shown on Centris cards ("Maison à vendre", "Condo for sale", ...).
"""

PROPERTY_TYPE_SYNONYMS: dict[str, tuple[str, ...]] = {
    "house": (
        "maison",
        "house",
        "bungalow",
        "cottage",
        "split-level",
        "à étages",
        "two or more storey",
        "mobile home",
        "maison mobile",
    ),
    "condo": ("condo", "appartement", "apartment", "loft", "studio"),
    "plex": ("plex", "duplex", "triplex", "quadruplex", "quintuplex"),
    "townhouse": ("townhouse", "maison de ville", "jumelé", "semi-detached", "en rangée"),
    "land": ("terrain", "lot", "land"),
    "farm": ("ferme", "farm", "fermette", "hobby farm"),
    "chalet": ("chalet", "cottage"),
    "commercial": ("commercial", "bureau", "office", "local", "industriel", "industrial"),
}


def get_property_type_synonyms(category: str | None) -> tuple[str, ...]:
    """
    Get accepted synonyms for a property-type category.

    Unknown categories are treated as their own single synonym.

    Args:
        category: Category name, any case (e.g., "house", "Condo")

    Returns:
        Tuple of lowercase synonym substrings (empty for blank input)

    Example:
        >>> get_property_type_synonyms("Condo")[:2]
        ('condo', 'appartement')
        >>> get_property_type_synonyms("Yacht")
        ('yacht',)
    """
    if not category or not category.strip():
        return ()
    key = category.strip().lower()
    return PROPERTY_TYPE_SYNONYMS.get(key, (key,))
