"""
Exceptions raised inside the crawler core.

None of them is fatal to a crawl: the dispatcher catches them per URL and turns
them into a failed :class:`~site_crawler.crawler.models.PageResult`.
"""
from __future__ import annotations


class CrawlerError(Exception):
    """Base class for SiteCrawler errors."""


class FetchError(CrawlerError):
    """A URL could not be fetched after all attempts were used."""

    def __init__(self, url: str, attempts: int, reason: str) -> None:
        super().__init__(f"{url}: {reason} (after {attempts} attempt(s))")
        self.url = url
        self.attempts = attempts
        self.reason = reason


class ExtractionError(CrawlerError):
    """A response body could not be read as text."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


__all__ = ["CrawlerError", "FetchError", "ExtractionError"]
