"""Crawler core: URL resolution, link extraction, scope, frontier and fetch dispatch."""
from site_crawler.crawler.crawler import Crawler
from site_crawler.crawler.fetcher import FetchDispatcher, Fetcher, HttpFetcher
from site_crawler.crawler.frontier import Frontier
from site_crawler.crawler.link_extractor import extract_links
from site_crawler.crawler.models import FetchOutcome, PageResult, Url
from site_crawler.crawler.scope import DomainScope, parse_seed_list
from site_crawler.crawler.url_resolver import defrag, resolve

__all__ = [
    "Crawler",
    "DomainScope",
    "FetchDispatcher",
    "FetchOutcome",
    "Fetcher",
    "Frontier",
    "HttpFetcher",
    "PageResult",
    "Url",
    "defrag",
    "extract_links",
    "parse_seed_list",
    "resolve",
]
