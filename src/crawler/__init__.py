"""Crawler modules."""

from src.crawler.combiner import combine_listing, combine_with_summary_only
from src.crawler.errors import CrawlError, NavigationError, TaskTimeoutError
from src.crawler.proxy import ProxyProvider
from src.crawler.renderer import (
    HttpRenderer,
    PageRenderer,
    PlaywrightRenderer,
    RenderedPage,
    create_renderer,
)
from src.crawler.scheduler import CrawlScheduler
from src.crawler.types import (
    CrawlTask,
    DetailPageTask,
    RunStats,
    SearchPageTask,
    TaskLabel,
    TaskStatus,
)

__all__ = [
    # Types
    "CrawlTask",
    "SearchPageTask",
    "DetailPageTask",
    "TaskLabel",
    "TaskStatus",
    "RunStats",
    # Errors
    "CrawlError",
    "NavigationError",
    "TaskTimeoutError",
    # Combiner
    "combine_listing",
    "combine_with_summary_only",
    # Rendering
    "PageRenderer",
    "RenderedPage",
    "PlaywrightRenderer",
    "HttpRenderer",
    "create_renderer",
    "ProxyProvider",
    # Scheduler
    "CrawlScheduler",
]
