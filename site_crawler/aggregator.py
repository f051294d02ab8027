# File: site_crawler/aggregator.py
"""site_crawler.aggregator: Модуль агрегатора отчетов обхода."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import List, Optional, Sequence, TypedDict

from site_crawler.crawler.models import PageResult


class PageInfo(TypedDict):
    """Информация о загруженной странице."""

    url: str
    ok: bool
    status: Optional[int]
    attempts: int
    links: List[str]
    error: Optional[str]


@dataclass(slots=True)
class CrawlReport:
    """Результаты обхода: корневые домены, страницы, найденные ссылки и ошибки."""

    roots: List[str] = field(default_factory=list)
    pages: List[PageInfo] = field(default_factory=list)
    discovered: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление CrawlReport."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


def _page_info(result: PageResult) -> PageInfo:
    return {
        "url": result.url,
        "ok": result.ok,
        "status": result.status,
        "attempts": result.attempts,
        "links": list(result.links),
        "error": result.error,
    }


def aggregate_results(roots: Sequence[str], results: Sequence[PageResult]) -> CrawlReport:
    """Собирает CrawlReport: discovered содержит уникальные ссылки в порядке обнаружения."""
    discovered = list(dict.fromkeys(link for r in results for link in r.links))
    return CrawlReport(
        roots=list(roots),
        pages=[_page_info(r) for r in results],
        discovered=discovered,
        failures=[r.url for r in results if not r.ok],
    )
