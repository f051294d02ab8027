"""
Relative reference resolution for discovered links.

:func:`resolve` follows the scheme allow-lists of :mod:`urllib.parse` but keeps a
literal path policy: a reference path replaces the base path as-is, dot segments
(``./``, ``../``) are never merged against the base. The policy lives in
:func:`join_path` so that a stricter RFC 3986 merge can be dropped in there.
"""
from __future__ import annotations

from dataclasses import replace
from typing import FrozenSet

from site_crawler.crawler.models import Url

__all__ = ("USES_RELATIVE", "USES_NETLOC", "resolve", "join_path", "defrag")

#: schemes whose references may be resolved against a base
USES_RELATIVE: FrozenSet[str] = frozenset((
    "", "ftp", "http", "gopher", "nntp", "imap",
    "wais", "file", "https", "shttp", "mms",
    "prospero", "rtsp", "rtsps", "rtspu", "sftp",
    "svn", "svn+ssh", "ws", "wss",
))

#: schemes that carry a network location
USES_NETLOC: FrozenSet[str] = USES_RELATIVE | frozenset((
    "telnet", "snews", "rsync", "nfs", "git", "git+ssh", "itms-services",
))


def join_path(base_path: str, ref_path: str) -> str:
    """Combine a base path with a non-empty reference path (literal: the reference wins)."""
    return ref_path


def resolve(base: str, reference: str) -> str:
    """
    Resolve *reference* against *base* and return an absolute URL string.

    Never raises: unparseable components are treated as empty strings.
    """
    if not base:
        return reference
    if not reference:
        return base

    b = Url.parse(base)
    r = Url.parse(reference)
    if r.scheme not in USES_RELATIVE:
        # mailto:, javascript:, data: ... are already absolute
        return reference

    scheme = r.scheme or b.scheme
    netloc = r.netloc
    if b.scheme in USES_NETLOC:
        if netloc:
            return Url(scheme, netloc, r.path, r.query, r.fragment).unparse()
        netloc = b.netloc

    if not r.path:
        return Url(scheme, netloc, b.path, r.query or b.query, r.fragment).unparse()
    return Url(scheme, netloc, join_path(b.path, r.path), r.query, r.fragment).unparse()


def defrag(url: str) -> str:
    """Drop the ``#fragment`` part of *url*."""
    if "#" not in url:
        return url
    return replace(Url.parse(url), fragment="").unparse()
