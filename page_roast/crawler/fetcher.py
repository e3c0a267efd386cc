# page_roast/crawler/fetcher.py
"""
Fetcher module: retrieves the single landing page to be roasted.

One GET per call, bounded by a timeout, no retries. Anything other than a
2xx answer with a readable body is a :class:`~page_roast.errors.FetchError`;
partial content is never handed on.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from page_roast.config import RoastConfig
from page_roast.crawler.models import PageData
from page_roast.errors import FetchError
from page_roast.logger import logger
from page_roast.utils import is_http_url


class PageFetcher:
    """Handles the HTTP GET of the target page with a descriptive User-Agent."""

    def __init__(self, session: ClientSession, config: RoastConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str, timeout: Optional[ClientTimeout] = None) -> PageData:
        """
        Fetch *url* and return its decoded HTML.

        Raises FetchError on unsupported schemes, transport errors, timeouts
        and non-2xx statuses.
        """
        if not is_http_url(url):
            raise FetchError(f"Unsupported URL: {url!r}", url=url)

        timeout = timeout or ClientTimeout(total=self.config.timeout)
        try:
            async with self.session.get(
                url,
                headers={"User-Agent": self.config.user_agent},
                timeout=timeout,
            ) as resp:
                if not 200 <= resp.status < 300:
                    logger.warning("Fetch %s -> HTTP %s", url, resp.status)
                    raise FetchError(f"HTTP {resp.status} for {url}", url=url, status=resp.status)
                text = await resp.text(errors="replace")
                logger.debug("Fetched %s: %d chars", url, len(text))
                return PageData(url, text, resp.status)
        except asyncio.TimeoutError as exc:
            logger.warning("Fetch %s timed out after %ss", url, timeout.total)
            raise FetchError(f"Timeout fetching {url}", url=url) from exc
        except ClientError as exc:
            logger.warning("Fetch %s failed: %s", url, exc)
            raise FetchError(f"Could not fetch {url}: {exc}", url=url) from exc
