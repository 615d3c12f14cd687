"""
Unit tests for src/output/sink.py
"""

import asyncio
import json

from config.settings import OutputSettings
from src.output import JsonLinesSink, MemorySink


class TestJsonLinesSink:
    """Tests for the file sink."""

    def test_one_record_per_line(self, tmp_path):
        sink = JsonLinesSink(tmp_path / "out" / "listings.jsonl", tmp_path / "STATS.json")

        async def write():
            await sink.push({"id": "1", "city": "Montréal"})
            await sink.push({"id": "2"})
            await sink.close()

        asyncio.run(write())

        lines = (tmp_path / "out" / "listings.jsonl").read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["id"] for line in lines] == ["1", "2"]
        assert "Montréal" in lines[0]
        assert sink.count == 2

    def test_appends_across_sinks(self, tmp_path):
        path = tmp_path / "listings.jsonl"

        async def write(record):
            sink = JsonLinesSink(path, tmp_path / "STATS.json")
            await sink.push(record)
            await sink.close()

        asyncio.run(write({"id": "1"}))
        asyncio.run(write({"id": "2"}))

        assert len(path.read_text(encoding="utf-8").splitlines()) == 2

    def test_report(self, tmp_path):
        sink = JsonLinesSink(tmp_path / "listings.jsonl", tmp_path / "STATS.json")
        asyncio.run(sink.save_report({"errors": 0, "listingsScraped": 3}))

        report = json.loads((tmp_path / "STATS.json").read_text(encoding="utf-8"))
        assert report["listingsScraped"] == 3
        # No records pushed, no dataset file
        assert not (tmp_path / "listings.jsonl").exists()

    def test_from_settings(self, tmp_path):
        settings = OutputSettings(directory=tmp_path, report_file="report.json")
        sink = JsonLinesSink.from_settings(settings)
        assert sink.dataset_path == tmp_path / "listings.jsonl"
        assert sink.report_path == tmp_path / "report.json"


class TestMemorySink:
    """Tests for the in-memory sink."""

    def test_splits_listings_and_errors(self):
        sink = MemorySink()

        async def write():
            await sink.push({"id": "1"})
            await sink.push({"url": "https://x", "#failed": True})
            await sink.save_report({"errors": 1})

        asyncio.run(write())

        assert sink.listings == [{"id": "1"}]
        assert len(sink.errors) == 1
        assert sink.report == {"errors": 1}
