"""
Crawler error types.

Any exception raised while processing a task counts as a failed attempt;
these types name the failures the crawler raises itself.
"""


class CrawlError(Exception):
    """Base class for crawler failures."""


class NavigationError(CrawlError):
    """Page could not be loaded (network error or HTTP status >= 400)."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Navigation to {url} failed: {reason}")


class TaskTimeoutError(CrawlError):
    """Task exceeded its wall-clock budget."""

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(f"Processing {url} exceeded {timeout:g}s")
