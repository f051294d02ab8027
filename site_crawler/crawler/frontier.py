"""
Frontier: FIFO queue of URLs waiting to be fetched.
"""
from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Iterable, Set

from site_crawler.crawler.models import Url

__all__ = ("Frontier", "visit_key")


def visit_key(url: str) -> str:
    """Key used by the seen-set: lowercase scheme/host, ``/`` for an empty path, no fragment."""
    parsed = Url.parse(url)
    return replace(
        parsed,
        scheme=parsed.scheme.lower(),
        netloc=parsed.netloc.lower(),
        path=parsed.path or "/",
        fragment="",
    ).unparse()


class Frontier:
    """
    Pending-work queue shared by the crawl workers.

    With *dedupe* enabled a URL is accepted at most once per run (see :func:`visit_key`);
    without it the same URL may be queued and fetched any number of times.
    """

    def __init__(self, dedupe: bool = True) -> None:
        self.dedupe = dedupe
        self._queue: asyncio.Queue[str] = asyncio.Queue()
        self._seen: Set[str] = set()

    def seed(self, domains: Iterable[str]) -> int:
        """Append root domains to the tail. Returns how many were accepted."""
        return sum(1 for d in domains if self.push(d))

    def push(self, url: str) -> bool:
        if self.dedupe:
            key = visit_key(url)
            if key in self._seen:
                return False
            self._seen.add(key)
        self._queue.put_nowait(url)
        return True

    async def pop(self) -> str:
        """Wait for and remove the head of the queue."""
        return await self._queue.get()

    def task_done(self) -> None:
        self._queue.task_done()

    async def join(self) -> None:
        """Block until every popped URL has been marked done and the queue is empty."""
        await self._queue.join()

    def discard_pending(self) -> int:
        """Drop every queued, not yet dispatched URL."""
        dropped = 0
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return dropped
            self._queue.task_done()
            dropped += 1

    def seen(self, url: str) -> bool:
        return visit_key(url) in self._seen

    def empty(self) -> bool:
        return self._queue.empty()

    def __len__(self) -> int:
        return self._queue.qsize()
