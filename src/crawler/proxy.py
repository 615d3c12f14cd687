"""
Proxy rotation.

Round-robin over the proxy URLs of the run input.
"""

import itertools
from urllib.parse import urlsplit

from loguru import logger

proxy_log = logger.bind(module="Renderer")


class ProxyProvider:
    """Hands out proxies in round-robin order; no URLs means no proxy."""

    def __init__(self, proxy_urls: list[str] | None = None):
        self.proxy_urls = [u.strip() for u in proxy_urls or [] if u and u.strip()]
        self._cycle = itertools.cycle(self.proxy_urls) if self.proxy_urls else None
        if self.proxy_urls:
            proxy_log.info(f"Using {len(self.proxy_urls)} proxies")

    @property
    def enabled(self) -> bool:
        return self._cycle is not None

    def next_url(self) -> str | None:
        """Next proxy URL, or None when proxies are disabled."""
        if self._cycle is None:
            return None
        return next(self._cycle)

    def next_playwright_proxy(self) -> dict | None:
        """
        Next proxy as a Playwright proxy setting.

        Example:
            >>> ProxyProvider(["http://u:p@proxy:8000"]).next_playwright_proxy()
            {'server': 'http://proxy:8000', 'username': 'u', 'password': 'p'}
        """
        url = self.next_url()
        if url is None:
            return None

        parts = urlsplit(url)
        server = f"{parts.scheme or 'http'}://{parts.hostname}"
        if parts.port:
            server += f":{parts.port}"

        proxy = {"server": server}
        if parts.username:
            proxy["username"] = parts.username
        if parts.password:
            proxy["password"] = parts.password
        return proxy

    def next_requests_proxies(self) -> dict | None:
        """Next proxy as a requests `proxies` mapping."""
        url = self.next_url()
        if url is None:
            return None
        return {"http": url, "https": url}
