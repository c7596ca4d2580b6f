"""
Entrypoint: load config, fetch http://localhost:3000/ once, print the body or save it
"""

import asyncio
import logging
import sys
from dotenv import load_dotenv
from crawler.config import Config
from crawler.fetcher import HTTPFetcher
from crawler.storage import create_storage
from crawler.worker import Crawler

logger = logging.getLogger(__name__)


def resolve_level(level) -> int:
    """Accept a level name ("debug", "INFO") or a number ("10", 20)."""
    if isinstance(level, int):
        return level
    level = str(level).strip()
    if level.isdigit():
        return int(level)
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(log_config: dict):
    """Send logs to stderr, stdout is reserved for the fetched body"""
    logging.basicConfig(
        level=resolve_level(log_config.get('level', 'INFO')),
        format=log_config.get('format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


async def run(config: Config):
    """Wire up the fetcher, storage and crawler, then crawl once"""
    storage = create_storage(config.output.get('mode', 'stdout'), config.output.get('path', 'crawler.html'))

    async with HTTPFetcher(timeout=config.fetcher.get('timeout')) as fetcher:
        crawler = Crawler(fetcher=fetcher, storage=storage, url=config.fetcher.get('url'))
        return await crawler.start()


def main():
    # Load environment variables from .env file
    load_dotenv()

    try:
        config = Config()
        setup_logging(config.logging)
        asyncio.run(run(config))
    except Exception as e:
        if logging.getLogger().handlers:
            logger.error(f"Fatal error: {e}", exc_info=True)
        else:
            print(f"Fatal error during startup: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
