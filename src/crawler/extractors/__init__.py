"""
Page extractors for the Centris crawler.

This package turns rendered HTML into listing data:
- list_extractor: search-results cards and the next-page link
- detail_extractor: the fields of a listing's own page
"""

from src.crawler.extractors.detail_extractor import extract_detail
from src.crawler.extractors.list_extractor import (
    extract_summaries,
    find_next_page_url,
)

__all__ = [
    # Search results
    "extract_summaries",
    "find_next_page_url",
    # Detail page
    "extract_detail",
]
