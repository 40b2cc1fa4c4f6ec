# src/crawler/controllers/async_fetch_controller.py
import asyncio
import logging
from typing import List, Optional

from crawler.managers.progress_manager import ProgressManager
from crawler.model import FetchSettings, PageSource
from crawler.services.async_page_fetcher_service import PageFetcher

logger = logging.getLogger(__name__)


class AsyncFetchController:
    """
    Downloads the deployed counterpart of every page concurrently.
    Results are stored on the PageSource they belong to, so completion order does not matter.
    """

    def __init__(self, settings: Optional[FetchSettings] = None, show_progress: bool = True):
        self.settings = settings or FetchSettings()
        self.show_progress = show_progress
        self.failures = 0

    async def _fetch_one(self, fetcher: PageFetcher, page: PageSource, progress: ProgressManager) -> None:
        page.remote_html = await fetcher.fetch_html(page.url)
        if page.remote_html is None:
            self.failures += 1
        progress.advance(failures_count=self.failures)

    async def fetch_all(self, pages: List[PageSource]) -> List[PageSource]:
        """Fills `remote_html` on each page; pages that could not be fetched keep None."""
        logger.info("Requesting %d URL(s).", len(pages))
        for page in pages:
            logger.debug("Queued %s", page.url)

        progress = ProgressManager(total=len(pages), desc="Fetched", unit="page", enabled=self.show_progress)
        try:
            async with PageFetcher(self.settings) as fetcher:
                await asyncio.gather(*(self._fetch_one(fetcher, page, progress) for page in pages))
        finally:
            progress.close()

        logger.info("Done fetching URLs! %d of %d failed.", self.failures, len(pages))
        return pages

    def run(self, pages: List[PageSource]) -> List[PageSource]:
        """Blocking entry point for synchronous callers."""
        return asyncio.run(self.fetch_all(pages))
