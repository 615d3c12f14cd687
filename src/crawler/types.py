"""
Crawl frontier type definitions.

A crawl task is either a search-results page or a listing detail page.
Tasks move QUEUED → IN_FLIGHT → SUCCEEDED | FAILED; a failed task is
re-queued with retry_count + 1 until it runs out of retries.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar

from src.modules.listings import ListingSummary


class TaskLabel(str, Enum):
    """Task kind, also written to error records."""

    SEARCH = "LIST"
    DETAIL = "LISTING"


class TaskStatus(str, Enum):
    """Task lifecycle state."""

    QUEUED = "queued"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(kw_only=True)
class CrawlTask:
    """Unit of work in the frontier."""

    label: ClassVar[TaskLabel]

    url: str
    retry_count: int = 0
    status: TaskStatus = TaskStatus.QUEUED
    last_error: str | None = None

    @property
    def region(self) -> str | None:
        return None


@dataclass(kw_only=True)
class SearchPageTask(CrawlTask):
    """A page of region search results."""

    label: ClassVar[TaskLabel] = TaskLabel.SEARCH

    search_region: str
    page_number: int = 1

    @property
    def region(self) -> str | None:
        return self.search_region


@dataclass(kw_only=True)
class DetailPageTask(CrawlTask):
    """A listing's own page, carrying the card it was discovered from."""

    label: ClassVar[TaskLabel] = TaskLabel.DETAIL

    summary: ListingSummary
    search_region: str | None = None

    @property
    def region(self) -> str | None:
        return self.search_region


@dataclass
class RunStats:
    """
    Run-wide counters.

    Mutated only by the scheduler while it holds its lock.
    """

    listings_emitted: int = 0
    listings_filtered: int = 0
    pages_scraped: int = 0
    detail_pages_scraped: int = 0
    errors: int = 0
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: datetime | None = None

    def to_report(self, input_echo: dict | None = None) -> dict:
        """Build the final run report."""
        return {
            "listingsScraped": self.listings_emitted,
            "listingsFiltered": self.listings_filtered,
            "pagesScraped": self.pages_scraped,
            "detailPagesScraped": self.detail_pages_scraped,
            "errors": self.errors,
            "startTime": self.started_at.isoformat(),
            "finishTime": self.finished_at.isoformat() if self.finished_at else None,
            "input": input_echo or {},
        }
