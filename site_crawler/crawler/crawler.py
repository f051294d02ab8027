from __future__ import annotations

import asyncio
import time
from typing import List, Optional

from aiohttp import ClientSession, ClientTimeout

from site_crawler.crawler.fetcher import Fetcher, FetchDispatcher, HttpFetcher
from site_crawler.crawler.frontier import Frontier
from site_crawler.crawler.models import PageResult
from site_crawler.crawler.scope import DomainScope, parse_seed_list
from site_crawler.crawler.url_resolver import defrag
from site_crawler.logger import logger

__all__ = ("Crawler",)


class Crawler:
    """Breadth-first async crawler: seeds -> frontier -> dispatcher -> discovered links."""

    def __init__(self, config, fetcher: Optional[Fetcher] = None) -> None:
        self.config = config
        self.scope = DomainScope.from_seeds(parse_seed_list(config.seeds))
        self.frontier = Frontier(dedupe=config.dedupe)
        self.results: List[PageResult] = []
        self.session: Optional[ClientSession] = None
        self._fetcher = fetcher
        self._dispatcher: Optional[FetchDispatcher] = None
        self._dispatched = 0
        self._stop_event = asyncio.Event()
        self._workers: List[asyncio.Task[None]] = []

    async def __aenter__(self) -> Crawler:
        if self._fetcher is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            proxy = str(self.config.proxy_url) if self.config.proxy_url else None
            self._fetcher = HttpFetcher(self.session, proxy)
        self._dispatcher = FetchDispatcher(
            self._fetcher,
            max_attempts=self.config.max_attempts,
            timeout=self.config.timeout,
            retry_backoff=self.config.retry_backoff,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> List[PageResult]:
        """Drain the frontier and return one PageResult per dispatched URL."""
        if self._dispatcher is None:
            raise RuntimeError("Crawler must be used as an async context manager")
        if not self.scope.roots:
            logger.warning("No valid seeds in %r, nothing to crawl", self.config.seeds)
            return self.results

        logger.info("Crawl started: %s", ", ".join(self.scope.roots))
        start = time.monotonic()
        self.frontier.seed(self.scope.roots)
        self._workers = [
            asyncio.create_task(self._worker()) for _ in range(self.config.concurrency)
        ]
        drained = asyncio.create_task(self.frontier.join())
        stopped = asyncio.create_task(self._stop_event.wait())
        try:
            await asyncio.wait({drained, stopped}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (drained, stopped, *self._workers):
                task.cancel()
            await asyncio.gather(drained, stopped, *self._workers, return_exceptions=True)
            self.frontier.discard_pending()

        duration = time.monotonic() - start
        failed = sum(1 for r in self.results if not r.ok)
        logger.info(
            "Crawl finished: %d pages (%d failed) in %.2f s",
            len(self.results), failed, duration,
        )
        return self.results

    def stop(self) -> None:
        """Abandon in-flight fetches and drop every URL not yet dispatched."""
        dropped = self.frontier.discard_pending()
        logger.info("Crawl stopped, %d queued URL(s) discarded", dropped)
        self._stop_event.set()

    async def _worker(self) -> None:
        assert self._dispatcher is not None
        while True:
            url = await self.frontier.pop()
            try:
                if self._dispatched >= self.config.max_pages:
                    continue
                self._dispatched += 1
                result = await self._dispatcher.fetch(url)
                self.results.append(result)
                if self.config.follow_links:
                    for link in result.links:
                        self._enqueue(link)
            finally:
                self.frontier.task_done()

    def _enqueue(self, link: str) -> None:
        url = defrag(link)
        if not self.scope.contains(url):
            return
        self.frontier.push(url)
