"""
Page renderers for the Centris crawler.

A renderer opens a URL and yields a RenderedPage handle. The crawler only
needs load waiting, fixed settle delays, scrolling, consent-popup dismissal
and the final HTML; extraction runs on that HTML with BeautifulSoup.

Variants:
- PlaywrightRenderer: headless Chromium (listings render client-side)
- HttpRenderer: plain requests session, for static pages and debugging
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import requests
import urllib3
from loguru import logger
from playwright.async_api import Browser, Page, async_playwright
from playwright.async_api import Error as PlaywrightError

from config.settings import BrowserSettings
from src.crawler.errors import NavigationError
from src.crawler.proxy import ProxyProvider

renderer_log = logger.bind(module="Renderer")

ACCEPT_LANGUAGE = {
    "fr": "fr-CA,fr;q=0.9,en;q=0.8",
    "en": "en-CA,en;q=0.9,fr;q=0.8",
}

LAUNCH_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--no-sandbox",
    "--disable-setuid-sandbox",
]

# Hide navigator.webdriver from page scripts
WEBDRIVER_INIT_SCRIPT = (
    "Object.defineProperty(navigator, 'webdriver', { get: () => false });"
)

CONSENT_SELECTORS = (
    "#didomi-notice-agree-button",
    'button[id*="accept"]',
    'button[class*="accept"]',
    ".cookie-banner button",
    "#onetrust-accept-btn-handler",
)


class RenderedPage(ABC):
    """Handle on a loaded page."""

    @property
    @abstractmethod
    def url(self) -> str:
        """Final URL after redirects."""
        pass

    @abstractmethod
    async def wait_for_load(self) -> None:
        """Wait for the DOM content to be loaded."""
        pass

    @abstractmethod
    async def settle(self, ms: int) -> None:
        """Fixed delay for client-side rendering to finish."""
        pass

    @abstractmethod
    async def scroll(self, fraction: float = 0.5) -> None:
        """Scroll to a fraction of the page height (triggers lazy loading)."""
        pass

    @abstractmethod
    async def dismiss_popups(
        self, selectors: tuple[str, ...] = CONSENT_SELECTORS, settle_ms: int = 0
    ) -> bool:
        """
        Click the first visible consent button.

        Returns:
            True if a button was clicked
        """
        pass

    @abstractmethod
    async def html(self) -> str:
        """Current page HTML."""
        pass


class PageRenderer(ABC):
    """Opens pages. One renderer is shared by every crawl worker."""

    async def start(self) -> None:
        """Acquire resources (browser, session)."""

    async def close(self) -> None:
        """Release resources."""

    @abstractmethod
    def open(
        self, url: str, language: str = "fr"
    ) -> AbstractAsyncContextManager[RenderedPage]:
        """
        Navigate to a URL.

        Args:
            url: Absolute URL
            language: "fr" or "en", selects the Accept-Language header

        Raises:
            NavigationError: Network failure or HTTP status >= 400
        """
        pass


class PlaywrightPage(RenderedPage):
    """RenderedPage backed by a Playwright page."""

    def __init__(self, page: Page):
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    async def wait_for_load(self) -> None:
        await self._page.wait_for_load_state("domcontentloaded")

    async def settle(self, ms: int) -> None:
        if ms > 0:
            await self._page.wait_for_timeout(ms)

    async def scroll(self, fraction: float = 0.5) -> None:
        await self._page.evaluate(
            f"window.scrollTo(0, document.body.scrollHeight * {fraction})"
        )

    async def dismiss_popups(
        self, selectors: tuple[str, ...] = CONSENT_SELECTORS, settle_ms: int = 0
    ) -> bool:
        for selector in selectors:
            try:
                button = await self._page.query_selector(selector)
                if button and await button.is_visible():
                    await button.click()
                    renderer_log.debug(f"Dismissed popup: {selector}")
                    await self.settle(settle_ms)
                    return True
            except PlaywrightError as e:
                renderer_log.debug(f"Popup selector {selector} failed: {e}")
        return False

    async def html(self) -> str:
        return await self._page.content()


class PlaywrightRenderer(PageRenderer):
    """
    Renderer using Playwright browser automation.

    One browser is shared; every navigation gets its own context so the
    proxy and Accept-Language header can vary per request.
    """

    def __init__(
        self,
        settings: BrowserSettings | None = None,
        proxies: ProxyProvider | None = None,
    ):
        """
        Initialize the Playwright renderer.

        Args:
            settings: Browser settings (headless, user agent, timeouts)
            proxies: Proxy rotation (None = direct connection)
        """
        self.settings = settings or BrowserSettings()
        self.proxies = proxies or ProxyProvider()
        self._playwright = None
        self._browser: Browser | None = None

    async def start(self) -> None:
        """Start the browser."""
        if self._browser:
            return

        renderer_log.info("Starting PlaywrightRenderer...")
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.settings.headless, args=LAUNCH_ARGS
        )
        renderer_log.info("PlaywrightRenderer started")

    async def close(self) -> None:
        """Close the browser."""
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        renderer_log.info("PlaywrightRenderer closed")

    @asynccontextmanager
    async def open(self, url: str, language: str = "fr") -> AsyncIterator[RenderedPage]:
        if not self._browser:
            await self.start()

        context = await self._browser.new_context(
            user_agent=self.settings.user_agent,
            viewport={"width": 1920, "height": 1080},
            proxy=self.proxies.next_playwright_proxy(),
            extra_http_headers={
                "Accept-Language": ACCEPT_LANGUAGE.get(language, ACCEPT_LANGUAGE["fr"])
            },
        )
        try:
            await context.add_init_script(WEBDRIVER_INIT_SCRIPT)
            page = await context.new_page()

            try:
                response = await page.goto(
                    url,
                    wait_until="domcontentloaded",
                    timeout=self.settings.navigation_timeout * 1000,
                )
            except PlaywrightError as e:
                raise NavigationError(url, str(e)) from e

            if response is not None and response.status >= 400:
                raise NavigationError(url, f"HTTP {response.status}")

            yield PlaywrightPage(page)
        finally:
            await context.close()


class HttpPage(RenderedPage):
    """RenderedPage over a static HTTP response. Nothing runs client-side."""

    def __init__(self, url: str, text: str):
        self._url = url
        self._text = text

    @property
    def url(self) -> str:
        return self._url

    async def wait_for_load(self) -> None:
        pass

    async def settle(self, ms: int) -> None:
        pass

    async def scroll(self, fraction: float = 0.5) -> None:
        pass

    async def dismiss_popups(
        self, selectors: tuple[str, ...] = CONSENT_SELECTORS, settle_ms: int = 0
    ) -> bool:
        return False

    async def html(self) -> str:
        return self._text


class HttpRenderer(PageRenderer):
    """Renderer using a requests session; blocking calls run in a worker thread."""

    def __init__(
        self,
        settings: BrowserSettings | None = None,
        proxies: ProxyProvider | None = None,
        verify: bool = True,
    ):
        self.settings = settings or BrowserSettings()
        self.proxies = proxies or ProxyProvider()
        self.verify = verify
        self._session: requests.Session | None = None

        if not verify:
            # Suppress SSL warnings
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    async def start(self) -> None:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(
                {
                    "User-Agent": self.settings.user_agent,
                    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                }
            )
            renderer_log.info("HttpRenderer started")

    async def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
            renderer_log.info("HttpRenderer closed")

    def _get(self, url: str, language: str) -> requests.Response:
        return self._session.get(
            url,
            headers={
                "Accept-Language": ACCEPT_LANGUAGE.get(language, ACCEPT_LANGUAGE["fr"])
            },
            proxies=self.proxies.next_requests_proxies(),
            timeout=self.settings.navigation_timeout,
            verify=self.verify,
        )

    @asynccontextmanager
    async def open(self, url: str, language: str = "fr") -> AsyncIterator[RenderedPage]:
        if self._session is None:
            await self.start()

        try:
            resp = await asyncio.to_thread(self._get, url, language)
        except requests.RequestException as e:
            raise NavigationError(url, str(e)) from e

        if resp.status_code >= 400:
            raise NavigationError(url, f"HTTP {resp.status_code}")

        yield HttpPage(resp.url, resp.text)


def create_renderer(
    settings: BrowserSettings | None = None,
    proxies: ProxyProvider | None = None,
) -> PageRenderer:
    """Create the renderer selected by BROWSER_RENDERER."""
    settings = settings or BrowserSettings()
    if settings.renderer == "http":
        return HttpRenderer(settings, proxies)
    return PlaywrightRenderer(settings, proxies)
