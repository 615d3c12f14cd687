"""
Output sinks.

Append-only destinations for output records (normalized listings and
error records) and the final run report.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

from config.settings import OutputSettings

sink_log = logger.bind(module="Sink")


class OutputSink(ABC):
    """Destination for crawl output. push() may be called from any worker."""

    @abstractmethod
    async def push(self, record: dict) -> None:
        """Append one record."""
        pass

    @abstractmethod
    async def save_report(self, report: dict) -> None:
        """Persist the run report (called once, at shutdown)."""
        pass

    async def close(self) -> None:
        """Flush and release resources."""


class JsonLinesSink(OutputSink):
    """
    File sink: one JSON record per line, report as a separate JSON file.

    Each record is written and flushed in a single call so a stopped run
    never leaves a partial line behind.
    """

    def __init__(self, dataset_path: Path | str, report_path: Path | str):
        self.dataset_path = Path(dataset_path)
        self.report_path = Path(report_path)
        self._lock = asyncio.Lock()
        self._file = None
        self.count = 0

    @classmethod
    def from_settings(cls, settings: OutputSettings) -> "JsonLinesSink":
        return cls(settings.dataset_path, settings.report_path)

    def _open(self):
        if self._file is None:
            self.dataset_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self.dataset_path.open("a", encoding="utf-8")
            sink_log.info(f"Writing records to {self.dataset_path}")
        return self._file

    async def push(self, record: dict) -> None:
        line = json.dumps(record, ensure_ascii=False)
        async with self._lock:
            f = self._open()
            f.write(line + "\n")
            f.flush()
            self.count += 1

    async def save_report(self, report: dict) -> None:
        self.report_path.parent.mkdir(parents=True, exist_ok=True)
        self.report_path.write_text(
            json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8"
        )
        sink_log.info(f"Report saved to {self.report_path}")

    async def close(self) -> None:
        async with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None
        sink_log.info(f"Sink closed ({self.count} records)")


class MemorySink(OutputSink):
    """In-memory sink."""

    def __init__(self):
        self.records: list[dict] = []
        self.report: dict | None = None

    @property
    def listings(self) -> list[dict]:
        return [r for r in self.records if not r.get("#failed")]

    @property
    def errors(self) -> list[dict]:
        return [r for r in self.records if r.get("#failed")]

    async def push(self, record: dict) -> None:
        self.records.append(record)

    async def save_report(self, report: dict) -> None:
        self.report = report
