"""
Fetcher module: proxy-backed HTTP fetching and the retrying dispatcher.
"""
from __future__ import annotations

import asyncio
import enum
from typing import List, Optional, Protocol

from aiohttp import ClientError, ClientSession

from site_crawler.crawler.link_extractor import extract_links
from site_crawler.crawler.models import FetchOutcome, PageResult
from site_crawler.crawler.url_resolver import resolve
from site_crawler.errors import ExtractionError, FetchError
from site_crawler.logger import logger

__all__ = ("Fetcher", "HttpFetcher", "AttemptState", "FetchDispatcher", "CRAWL_ENDPOINT")

CRAWL_ENDPOINT = "/crawl"


class Fetcher(Protocol):
    """Capability to fetch one URL."""

    async def fetch(self, url: str) -> FetchOutcome:
        """Fetch *url* once. May raise ClientError, OSError, TimeoutError or ExtractionError."""
        ...


class HttpFetcher:
    """Fetches pages with aiohttp, either directly or through a crawl proxy."""

    def __init__(self, session: ClientSession, proxy_url: Optional[str] = None) -> None:
        self.session = session
        self.proxy_url = proxy_url.rstrip("/") if proxy_url else None

    async def fetch(self, url: str) -> FetchOutcome:
        """
        GET *url* (via ``<proxy>/crawl?url=...`` when a proxy is configured).

        Non-2xx answers come back as failed outcomes; an undecodable body raises
        :class:`ExtractionError`.
        """
        if self.proxy_url:
            request = self.session.get(self.proxy_url + CRAWL_ENDPOINT, params={"url": url})
        else:
            request = self.session.get(url)
        async with request as resp:
            if not 200 <= resp.status < 300:
                return FetchOutcome.failure(url, f"HTTP {resp.status}", status=resp.status)
            try:
                body = await resp.text()
            except (UnicodeDecodeError, LookupError) as exc:
                raise ExtractionError(url, f"body is not text: {exc}") from exc
            return FetchOutcome.success(url, resp.status, body)


class AttemptState(enum.Enum):
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FetchDispatcher:
    """Runs sequential fetch attempts for a URL and turns a success into resolved links."""

    def __init__(
        self,
        fetcher: Fetcher,
        max_attempts: int = 4,
        timeout: float = 10.0,
        retry_backoff: float = 0.0,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.fetcher = fetcher
        self.max_attempts = max_attempts
        self.timeout = timeout
        self.retry_backoff = retry_backoff

    async def fetch(self, url: str) -> PageResult:
        """Fetch *url* with retries. Failures are logged and reported, never raised."""
        attempts = 0
        state = AttemptState.ATTEMPTING
        outcome: Optional[FetchOutcome] = None
        while state is AttemptState.ATTEMPTING:
            attempts += 1
            try:
                outcome = await self._attempt(url)
            except ExtractionError as exc:
                logger.warning("Cannot extract links from %s: %s", url, exc.reason)
                return PageResult(url, ok=False, attempts=attempts, error=str(exc))
            if outcome.ok:
                state = AttemptState.SUCCEEDED
            elif attempts >= self.max_attempts:
                state = AttemptState.FAILED
            else:
                delay = self._backoff(attempts)
                logger.debug(
                    "Try %d/%d for %s failed (%s), retrying in %.2f s",
                    attempts, self.max_attempts, url, outcome.error, delay,
                )
                if delay:
                    await asyncio.sleep(delay)

        assert outcome is not None
        if state is AttemptState.FAILED:
            err = FetchError(url, attempts, outcome.error or "unknown error")
            logger.warning("Failed %s", err)
            return PageResult(url, ok=False, status=outcome.status, attempts=attempts, error=str(err))

        if attempts > 1:
            logger.info("Try %d for %s succeeded", attempts, url)
        links = self.discover(url, outcome.body or "")
        return PageResult(url, ok=True, status=outcome.status, attempts=attempts, links=tuple(links))

    @staticmethod
    def discover(url: str, body: str) -> List[str]:
        """Extract links from *body* and resolve each against *url*."""
        links: List[str] = []
        for raw in extract_links(body):
            link = resolve(url, raw)
            logger.debug("New link: %s", link)
            links.append(link)
        return links

    async def _attempt(self, url: str) -> FetchOutcome:
        try:
            return await asyncio.wait_for(self.fetcher.fetch(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            return FetchOutcome.failure(url, f"timed out after {self.timeout} s")
        except (ClientError, OSError) as exc:
            return FetchOutcome.failure(url, f"{type(exc).__name__}: {exc}")

    def _backoff(self, attempt: int) -> float:
        if not self.retry_backoff:
            return 0.0
        return min(self.retry_backoff * 2 ** (attempt - 1), 60.0)
