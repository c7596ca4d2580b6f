"""
Fetches one URL and hands the body to a completion action
"""

import logging

from .fetcher import FetchResult, HTTPFetcher

logger = logging.getLogger(__name__)


class Crawler:
    """One-shot crawler: a single GET, then either save the body or log the error"""

    def __init__(self, fetcher: HTTPFetcher = None, storage=None, url: str = None):
        self.fetcher = fetcher
        self.storage = storage
        self.url = url

    async def start(self) -> FetchResult:
        """Fetch the URL once. Storage errors are left to the caller."""
        logger.debug(f"Crawling: {self.url}")
        result = await self.fetcher.fetch(self.url)

        if result.failed:
            logger.error(f"Error crawling {self.url}: {result.error}")
            return result

        logger.debug(f"Fetched {result.size} bytes from {result.url} (status {result.status_code})")
        self.storage.save(result)
        return result
