#!/usr/bin/env python3
"""
Test script for the detail page extractor.

Usage:
    uv run python scripts/test_detail_playwright.py https://www.centris.ca/fr/maison~a-vendre~laval/12345678
    uv run python scripts/test_detail_playwright.py URL1 URL2 --http
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import BrowserSettings
from src.crawler.errors import CrawlError
from src.crawler.extractors import extract_detail
from src.crawler.renderer import HttpRenderer, PlaywrightRenderer


async def main(urls: list[str], use_http: bool = False):
    """Run detail page extraction test."""
    print(f"\n{'=' * 60}")
    print("Detail Page Extractor Test")
    print(f"URLs: {len(urls)}")
    print(f"{'=' * 60}\n")

    settings = BrowserSettings()
    renderer = HttpRenderer(settings) if use_http else PlaywrightRenderer(settings)

    stats = {"success": 0, "error": 0}

    try:
        await renderer.start()

        for url in urls:
            print(f"\n--- {url} ---")
            print("Fetching detail...")

            try:
                async with renderer.open(url) as page:
                    await page.wait_for_load()
                    await page.settle(settings.detail_settle_ms)
                    html = await page.html()
            except CrawlError as e:
                stats["error"] += 1
                print(f"Status: ERROR ({e})")
                continue

            detail = extract_detail(html, url)
            stats["success"] += 1
            print("Status: SUCCESS")
            print(json.dumps(detail.model_dump(mode="json"), ensure_ascii=False, indent=2))
            print()

    except Exception as e:
        print(f"Error: {e}")
        import traceback

        traceback.print_exc()

    finally:
        await renderer.close()

    # Print summary
    print(f"{'=' * 60}")
    print(f"Summary: {stats['success']} success, {stats['error']} error")
    print(f"{'=' * 60}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Test detail page extraction")
    parser.add_argument("urls", nargs="+", help="Listing URL(s) to fetch")
    parser.add_argument("--http", action="store_true", help="Use the static HTTP renderer")

    args = parser.parse_args()
    asyncio.run(main(args.urls, args.http))
