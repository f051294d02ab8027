"""
Root-domain scope derived from user supplied seeds.
"""
from __future__ import annotations

from typing import FrozenSet, Iterable, List, Sequence

from site_crawler.crawler.models import Url
from site_crawler.logger import logger

__all__ = ("DomainScope", "parse_seed_list")

_DEFAULT_SCHEME = "https"
_CRAWLABLE_SCHEMES = ("http", "https")


def parse_seed_list(raw: str) -> List[str]:
    """Split a comma-separated seed string, dropping blank entries."""
    return [part.strip() for part in raw.split(",") if part.strip()]


class DomainScope:
    """Set of canonical ``scheme://host`` roots a link must fall under to be crawled."""

    def __init__(self, roots: Iterable[str]) -> None:
        self.roots: List[str] = list(roots)
        self._hosts: FrozenSet[str] = frozenset(Url.parse(r).host for r in self.roots)

    @classmethod
    def from_seeds(cls, seeds: Sequence[str]) -> DomainScope:
        return cls(cls.normalize(seeds))

    @staticmethod
    def normalize(seeds: Sequence[str]) -> List[str]:
        """
        Turn seeds into lowercase ``scheme://host`` roots.

        A seed without ``://`` gets ``https://``. The port is dropped, seeds without a
        host are skipped. Order is preserved and duplicates are kept.
        """
        roots: List[str] = []
        for seed in seeds:
            text = seed if "://" in seed else f"{_DEFAULT_SCHEME}://{seed}"
            url = Url.parse(text)
            host = url.netloc.split(":")[0]
            if not host:
                logger.warning("Skipping seed without a host: %r", seed)
                continue
            roots.append(f"{url.scheme or _DEFAULT_SCHEME}://{host}".lower())
        return roots

    def contains(self, url: str) -> bool:
        """True if *url* is http(s) and its host equals the host of one of the roots."""
        parsed = Url.parse(url)
        return parsed.scheme.lower() in _CRAWLABLE_SCHEMES and parsed.host in self._hosts

    def __len__(self) -> int:
        return len(self.roots)

    def __repr__(self) -> str:
        return f"DomainScope({self.roots!r})"
