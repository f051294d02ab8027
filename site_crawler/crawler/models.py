"""
Data models for the SiteCrawler core.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import urlsplit, urlunsplit


@dataclass(frozen=True, slots=True)
class Url:
    """A parsed address: scheme, netloc (host[:port]), path, query, fragment."""

    scheme: str = ""
    netloc: str = ""
    path: str = ""
    query: str = ""
    fragment: str = ""

    @classmethod
    def parse(cls, text: str) -> Url:
        """Split *text* into components; malformed input yields empty components."""
        try:
            parts = urlsplit(text)
        except ValueError:
            return cls()
        return cls(parts.scheme, parts.netloc, parts.path, parts.query, parts.fragment)

    def unparse(self) -> str:
        return urlunsplit((self.scheme, self.netloc, self.path, self.query, self.fragment))

    @property
    def host(self) -> str:
        """Lowercase host without userinfo or port."""
        netloc = self.netloc.rpartition("@")[2]
        if netloc.startswith("["):
            return netloc.partition("]")[0].lstrip("[").lower()
        return netloc.split(":", 1)[0].lower()

    @property
    def is_relative(self) -> bool:
        return not self.netloc


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    """Result of one fetch attempt. Exactly one of *body* / *error* is set."""

    url: str
    status: Optional[int] = None
    body: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.body is None) == (self.error is None):
            raise ValueError("FetchOutcome needs exactly one of body or error")

    @classmethod
    def success(cls, url: str, status: int, body: str) -> FetchOutcome:
        return cls(url=url, status=status, body=body)

    @classmethod
    def failure(cls, url: str, error: str, status: Optional[int] = None) -> FetchOutcome:
        return cls(url=url, status=status, error=error)

    @property
    def ok(self) -> bool:
        return self.body is not None


@dataclass(frozen=True, slots=True)
class PageResult:
    """Summary of one dispatched URL: outcome of the last attempt plus resolved links."""

    url: str
    ok: bool
    status: Optional[int] = None
    attempts: int = 0
    links: Tuple[str, ...] = ()
    error: Optional[str] = None
