# === FILE: site_crawler/scanner.py ===
"""
Модуль-обёртка для функции запуска обхода.
"""
from site_crawler.aggregator import CrawlReport, aggregate_results
from site_crawler.crawler.crawler import Crawler


async def start_crawl(cfg) -> CrawlReport:
    """
    Запускает асинхронный краулер в контексте и возвращает агрегированный отчёт.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация обхода.

    Returns
    -------
    CrawlReport
        Корневые домены, результаты по страницам и найденные ссылки.
    """
    async with Crawler(cfg) as crawler:
        results = await crawler.crawl()
    return aggregate_results(crawler.scope.roots, results)

__all__ = ["start_crawl"]
