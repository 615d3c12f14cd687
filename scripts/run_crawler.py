#!/usr/bin/env python3
"""
Run a crawl from an input file.

Usage:
    uv run python scripts/run_crawler.py --input input.example.json
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.main import main

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Crawl Centris.ca listings")
    parser.add_argument("--input", type=Path, default=None, help="Run input JSON file")

    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.input)))
