"""
Crawl scheduler.

Owns the frontier (an asyncio queue of CrawlTasks), the worker pool, the
retry policy and the global listing quota.

Workflow:
1. Seed one SearchPageTask per requested region
2. Workers drain the queue; each task runs end-to-end under a time budget
3. Search page: extract cards, enqueue detail tasks (or filter and emit
   directly), then follow the "next page" link
4. Detail page: extract, merge with the card, filter, emit
5. A failed task is re-queued until it runs out of retries, then an error
   record is written
6. The run ends when the queue is drained; the report is saved once
"""

import asyncio
from datetime import date, datetime, timezone

from loguru import logger

from config.settings import BrowserSettings
from src.crawler.combiner import combine_listing, combine_with_summary_only
from src.crawler.errors import TaskTimeoutError
from src.crawler.extractors import extract_detail, extract_summaries, find_next_page_url
from src.crawler.renderer import PageRenderer
from src.crawler.types import (
    CrawlTask,
    DetailPageTask,
    RunStats,
    SearchPageTask,
    TaskLabel,
    TaskStatus,
)
from src.crawler.url_builder import BASE_URL, build_search_url, canonicalize_url
from src.matching import FilterSpec, matches
from src.modules.input import RunInput
from src.modules.listings import ErrorRecord, ListingSummary, NormalizedListing
from src.output import OutputSink

scheduler_log = logger.bind(module="Scheduler")


class CrawlScheduler:
    """
    Crawl scheduler for one run.

    Stats and the quota check-and-emit sequence share one asyncio.Lock, so
    concurrent detail tasks can never emit more than max_listings records.
    """

    def __init__(
        self,
        run_input: RunInput,
        renderer: PageRenderer,
        sink: OutputSink,
        settings: BrowserSettings | None = None,
        base_url: str = BASE_URL,
        today: date | None = None,
    ):
        """
        Initialize the scheduler.

        Args:
            run_input: Crawl input (regions, filters, quota, concurrency)
            renderer: Page renderer shared by all workers
            sink: Output sink for listings, error records and the report
            settings: Browser settings (timeouts, settle delays)
            base_url: Site root
            today: Reference date for days on market (defaults to today)
        """
        self.run_input = run_input
        self.renderer = renderer
        self.sink = sink
        self.settings = settings or BrowserSettings()
        self.base_url = base_url
        self.today = today

        self.filter_spec = FilterSpec.from_input(run_input)
        self.stats = RunStats()

        self._queue: asyncio.Queue[CrawlTask] | None = None
        self._lock: asyncio.Lock | None = None
        self._seen: set[str] = set()
        self._stopping = False

    @property
    def quota_reached(self) -> bool:
        return self.stats.listings_emitted >= self.run_input.max_listings

    @property
    def stopping(self) -> bool:
        return self._stopping

    def stop(self) -> None:
        """
        Stop dequeuing new work.

        In-flight tasks finish (or time out); queued tasks are dropped.
        """
        if not self._stopping:
            scheduler_log.warning("Stop requested, finishing in-flight tasks")
        self._stopping = True

    # ========== Frontier ==========

    def _listing_key(self, summary: ListingSummary) -> str:
        if summary.external_id:
            return f"listing:{summary.external_id}"
        return f"{TaskLabel.DETAIL.value}:{canonicalize_url(summary.source_url)}"

    def _task_key(self, task: CrawlTask) -> str:
        if isinstance(task, DetailPageTask):
            return self._listing_key(task.summary)
        return f"{task.label.value}:{canonicalize_url(task.url)}"

    def _claim_listing(self, summary: ListingSummary) -> bool:
        """
        Mark a listing as handled for this run.

        Returns:
            False if the listing was already seen (other page, region or attempt)
        """
        key = self._listing_key(summary)
        if key in self._seen:
            scheduler_log.debug(f"Skipping duplicate listing {summary.source_url}")
            return False
        self._seen.add(key)
        return True

    def _enqueue(self, task: CrawlTask) -> bool:
        """
        Add a new task to the frontier unless its URL was already seen.

        Returns:
            True if the task was queued
        """
        key = self._task_key(task)
        if key in self._seen:
            scheduler_log.debug(f"Skipping duplicate {task.label.value} {task.url}")
            return False

        self._seen.add(key)
        task.status = TaskStatus.QUEUED
        self._queue.put_nowait(task)
        return True

    def seed_tasks(self) -> list[SearchPageTask]:
        """Build one search task per requested region."""
        return [
            SearchPageTask(
                url=build_search_url(
                    region,
                    search_type=self.run_input.search_type,
                    language=self.run_input.language,
                    filters=self.filter_spec,
                    base_url=self.base_url,
                ),
                search_region=region,
            )
            for region in self.run_input.regions
        ]

    # ========== Run ==========

    async def run(self) -> RunStats:
        """
        Run the crawl until the frontier is drained.

        The report is saved even if every task failed.

        Returns:
            Final RunStats
        """
        self._queue = asyncio.Queue()
        self._lock = asyncio.Lock()
        self.stats = RunStats()

        for task in self.seed_tasks():
            self._enqueue(task)

        worker_count = self.run_input.max_concurrency
        scheduler_log.info(
            f"Starting crawl: {self._queue.qsize()} regions, "
            f"{worker_count} workers, quota {self.run_input.max_listings}"
        )

        workers: list[asyncio.Task] = []
        try:
            await self.renderer.start()
            workers = [
                asyncio.create_task(self._worker(i + 1)) for i in range(worker_count)
            ]
            await self._queue.join()
        finally:
            for worker in workers:
                worker.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

            try:
                await self.renderer.close()
            finally:
                self.stats.finished_at = datetime.now(timezone.utc)
                await self.sink.save_report(
                    self.stats.to_report(self.run_input.echo())
                )

        scheduler_log.info(
            f"Crawl finished: {self.stats.listings_emitted} emitted, "
            f"{self.stats.listings_filtered} filtered, "
            f"{self.stats.pages_scraped} pages, "
            f"{self.stats.detail_pages_scraped} detail pages, "
            f"{self.stats.errors} errors"
        )
        return self.stats

    async def _worker(self, worker_id: int) -> None:
        """Take tasks off the queue until cancelled."""
        while True:
            task = await self._queue.get()
            try:
                if self._stopping:
                    scheduler_log.debug(f"[W{worker_id}] Dropping {task.url} (stopping)")
                    continue
                await self._process(task, worker_id)
            finally:
                self._queue.task_done()

    async def _process(self, task: CrawlTask, worker_id: int) -> None:
        """Run one attempt of a task; route failures to the retry policy."""
        task.status = TaskStatus.IN_FLIGHT
        timeout = self.settings.handler_timeout

        try:
            try:
                await asyncio.wait_for(self._handle(task), timeout=timeout)
            except asyncio.TimeoutError as e:
                raise TaskTimeoutError(task.url, timeout) from e
        except Exception as e:
            await self._on_failure(task, e, worker_id)
        else:
            task.status = TaskStatus.SUCCEEDED

    async def _on_failure(self, task: CrawlTask, error: Exception, worker_id: int) -> None:
        """
        Retry policy.

        A task is attempted max_request_retries + 1 times. Only the last
        failure writes an error record and counts as an error.
        """
        task.last_error = str(error) or type(error).__name__
        max_retries = self.run_input.max_request_retries

        if task.retry_count < max_retries:
            task.retry_count += 1
            task.status = TaskStatus.QUEUED
            scheduler_log.warning(
                f"[W{worker_id}] {task.label.value} {task.url} failed "
                f"(retry {task.retry_count}/{max_retries}): {task.last_error}"
            )
            # Re-queued directly, the URL is already in the seen set
            self._queue.put_nowait(task)
            return

        task.status = TaskStatus.FAILED
        scheduler_log.error(
            f"[W{worker_id}] {task.label.value} {task.url} failed after "
            f"{task.retry_count + 1} attempts: {task.last_error}"
        )

        record = ErrorRecord(
            url=task.url,
            label=task.label.value,
            region=task.region,
            error=task.last_error,
            retry_count=task.retry_count,
        )
        async with self._lock:
            self.stats.errors += 1
            try:
                await self.sink.push(record.to_record())
            except Exception as e:
                # A sink failure must not end the worker
                scheduler_log.error(
                    f"[W{worker_id}] Failed to write error record for {task.url}: {e}"
                )

    async def _handle(self, task: CrawlTask) -> None:
        if isinstance(task, SearchPageTask):
            await self._handle_search_page(task)
        elif isinstance(task, DetailPageTask):
            await self._handle_detail_page(task)
        else:
            raise TypeError(f"Unknown task type: {type(task).__name__}")

    # ========== Handlers ==========

    async def _handle_search_page(self, task: SearchPageTask) -> None:
        if self.quota_reached:
            scheduler_log.debug(f"Quota reached, skipping search page {task.url}")
            return

        browser = self.settings
        async with self.renderer.open(task.url, self.run_input.language) as page:
            await page.wait_for_load()
            await page.dismiss_popups(settle_ms=browser.popup_settle_ms)
            await page.settle(browser.search_settle_ms)
            await page.scroll(0.5)
            await page.settle(browser.search_scroll_settle_ms)
            html = await page.html()

        summaries = extract_summaries(html, self.base_url)

        async with self._lock:
            self.stats.pages_scraped += 1
        scheduler_log.info(
            f"{task.search_region} page {task.page_number}: {len(summaries)} listings"
        )

        for summary in summaries:
            if self.quota_reached:
                break
            if self.run_input.include_details:
                self._enqueue(
                    DetailPageTask(
                        url=summary.source_url,
                        summary=summary,
                        search_region=task.search_region,
                    )
                )
            elif self._claim_listing(summary):
                try:
                    await self._emit(self._summary_record(summary))
                except Exception:
                    # Released so a retry of this page can emit it
                    self._seen.discard(self._listing_key(summary))
                    raise

        # No cards means end of results
        if not summaries or self.quota_reached:
            return

        next_url = find_next_page_url(html, self.base_url)
        if next_url:
            self._enqueue(
                SearchPageTask(
                    url=next_url,
                    search_region=task.search_region,
                    page_number=task.page_number + 1,
                )
            )

    async def _handle_detail_page(self, task: DetailPageTask) -> None:
        if self.quota_reached:
            scheduler_log.debug(f"Quota reached, skipping listing {task.url}")
            return

        async with self.renderer.open(task.url, self.run_input.language) as page:
            await page.wait_for_load()
            await page.settle(self.settings.detail_settle_ms)
            html = await page.html()

        detail = extract_detail(html, task.url, today=self.today)

        async with self._lock:
            self.stats.detail_pages_scraped += 1

        record = combine_listing(
            task.summary,
            detail,
            transaction_type=self.run_input.transaction_type,
            include_images=self.run_input.include_images,
        )
        await self._emit(record)

    def _summary_record(self, summary: ListingSummary) -> NormalizedListing:
        return combine_with_summary_only(
            summary,
            transaction_type=self.run_input.transaction_type,
            include_images=self.run_input.include_images,
        )

    async def _emit(self, record: NormalizedListing) -> bool:
        """
        Filter a record and push it if it matches and the quota is open.

        Returns:
            True if the record was pushed to the sink
        """
        passed = matches(record, self.filter_spec)

        async with self._lock:
            if not passed:
                self.stats.listings_filtered += 1
                return False
            if self.quota_reached:
                scheduler_log.debug(f"Quota reached, dropping {record.url}")
                return False

            await self.sink.push(record.to_record())
            self.stats.listings_emitted += 1
            emitted = self.stats.listings_emitted

        scheduler_log.info(
            f"Emitted {emitted}/{self.run_input.max_listings}: "
            f"{record.external_id or record.url} ({record.price})"
        )
        return True
