# File: tests/conftest.py
import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Dict, List, Optional, Sequence, Union

import pytest
import pytest_asyncio
from aiohttp import web

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.models import FetchOutcome

ScriptItem = Union[str, int, BaseException]


class FakeFetcher:
    """
    In-memory Fetcher.

    *pages* maps a URL to the body returned on every call; *script* maps a URL to a
    list of items consumed one per call: a str is a 200 body, an int a failing status,
    an exception is raised. Unknown URLs answer 404.
    """

    def __init__(
        self,
        pages: Optional[Dict[str, str]] = None,
        script: Optional[Dict[str, Sequence[ScriptItem]]] = None,
        delay: float = 0.0,
    ) -> None:
        self.pages = dict(pages or {})
        self.script = {url: list(items) for url, items in (script or {}).items()}
        self.delay = delay
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, url: str) -> FetchOutcome:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.script.get(url):
                item = self.script[url].pop(0)
                if isinstance(item, BaseException):
                    raise item
                if isinstance(item, int):
                    return FetchOutcome.failure(url, f"HTTP {item}", status=item)
                return FetchOutcome.success(url, 200, item)
            if url in self.pages:
                return FetchOutcome.success(url, 200, self.pages[url])
            return FetchOutcome.failure(url, "HTTP 404", status=404)
        finally:
            self.in_flight -= 1


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """
    Return a CrawlerConfig for tests: one seed, no proxy, no backoff.
    """
    return CrawlerConfig(
        seeds="example.com",
        proxy_url=None,
        timeout=2.0,
        retry_backoff=0.0,
        user_agent="TestAgent/1.0",
    )


@pytest_asyncio.fixture
async def serve() -> AsyncIterator[Callable[[web.Application, int], Awaitable[str]]]:
    """Start aiohttp apps on demand, yield their base URL, clean up after the test."""
    runners: List[web.AppRunner] = []

    async def _serve(app: web.Application, port: int) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        return f"http://127.0.0.1:{port}"

    yield _serve
    for runner in reversed(runners):
        await runner.cleanup()
