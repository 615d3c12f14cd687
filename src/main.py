"""
Crawler entry point.

Usage:
    python -m src.main --input input.json
"""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load .env file at startup
load_dotenv()

from loguru import logger  # noqa: E402

from config.settings import Settings, get_settings  # noqa: E402
from src.crawler import CrawlScheduler, ProxyProvider, RunStats, create_renderer  # noqa: E402
from src.modules.input import RunInput  # noqa: E402
from src.output import JsonLinesSink  # noqa: E402

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]: <14}</cyan> | <level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Intercept standard logging and redirect to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding loguru level
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str = "INFO") -> None:
    """Configure loguru format with default module and route stdlib logs."""
    logger.configure(extra={"module": "Main"})
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())

    # Intercept asyncio / playwright logs
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


log = logger.bind(module="Main")


async def run_crawl(run_input: RunInput, settings: Settings | None = None) -> RunStats:
    """
    Run one crawl with file output.

    SIGINT/SIGTERM stop the scheduler gracefully: in-flight tasks finish
    and the report is still written.

    Args:
        run_input: Crawl input
        settings: Application settings (defaults to environment)

    Returns:
        Final RunStats
    """
    settings = settings or get_settings()

    proxies = ProxyProvider(run_input.proxy_configuration.proxy_urls)
    renderer = create_renderer(settings.browser, proxies)
    sink = JsonLinesSink.from_settings(settings.output)
    scheduler = CrawlScheduler(
        run_input,
        renderer,
        sink,
        settings=settings.browser,
        base_url=settings.base_url,
    )

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, scheduler.stop)
        except NotImplementedError:
            # Windows event loops have no signal handlers
            pass

    try:
        return await scheduler.run()
    finally:
        await sink.close()


async def main(input_path: Path | None) -> int:
    settings = get_settings()
    setup_logging(settings.log_level)

    if input_path is not None:
        log.info(f"Loading input from {input_path}")
        run_input = RunInput.from_file(input_path)
    else:
        log.info("No input file, using defaults")
        run_input = RunInput()

    log.info(
        f"Searching {run_input.search_type} in {', '.join(run_input.regions)} "
        f"(max {run_input.max_listings} listings)"
    )

    stats = await run_crawl(run_input, settings)
    return 0 if stats.listings_emitted or not stats.errors else 1


def cli() -> None:
    parser = argparse.ArgumentParser(description="Crawl Centris.ca listings")
    parser.add_argument(
        "--input", type=Path, default=None, help="Run input JSON file"
    )

    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.input)))


if __name__ == "__main__":
    cli()
