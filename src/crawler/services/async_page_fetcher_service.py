# src/crawler/services/async_page_fetcher_service.py
import asyncio
import logging
from typing import Optional

import aiohttp

from crawler.model import FetchSettings
from crawler.services.generate_default_user_agent_service import generate_default_user_agent

logger = logging.getLogger(__name__)


class PageFetcher:
    """
    Fetches deployed pages over a shared aiohttp session.
    Concurrency is capped by a semaphore; failures are reported as missing HTML.
    """

    def __init__(self, settings: Optional[FetchSettings] = None):
        self.settings = settings or FetchSettings()
        self.user_agent = self.settings.user_agent or generate_default_user_agent()
        self.semaphore = asyncio.Semaphore(max(1, self.settings.concurrency))
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def initialize(self):
        if not self.session or self.session.closed:
            connector = aiohttp.TCPConnector(limit=0, ttl_dns_cache=300)
            timeout_obj = aiohttp.ClientTimeout(total=self.settings.timeout)
            default_headers = {
                'Accept-Encoding': 'gzip, deflate',
                'User-Agent': self.user_agent
            }
            self.session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout_obj,
                headers=default_headers
            )
            logger.debug(f"Fetch session initialized. Max Concurrency: {self.settings.concurrency}")

    async def close(self):
        if self.session and not self.session.closed:
            await self.session.close()

    async def fetch_html(self, url: str) -> Optional[str]:
        """
        Returns the body of a successful response, or None for any non-2xx
        status or network failure.
        """
        if not self.session or self.session.closed:
            await self.initialize()

        async with self.semaphore:
            try:
                async with self.session.get(url) as response:
                    if not response.ok:
                        logger.debug("GET %s returned status %s.", url, response.status)
                        return None
                    try:
                        return await response.text()
                    except UnicodeDecodeError:
                        content_bytes = await response.read()
                        return content_bytes.decode('utf-8', errors='replace')
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.debug("GET %s failed: %s", url, e)
                return None
