"""
Link extraction for SiteCrawler.

Pages are not parsed as HTML: a single regular expression scans the raw text for
quoted ``href`` attribute values.
"""
from __future__ import annotations

import re
from typing import Iterator, Pattern, Tuple

__all__ = ("HREF_RE", "SKIP_MARKERS", "extract_links")

HREF_RE: Pattern[str] = re.compile(r"""href=["']([^\s"'<>]+)""", re.IGNORECASE)

#: substrings that mark stylesheet and favicon references
SKIP_MARKERS: Tuple[str, ...] = ("css", "ico")


def extract_links(page_text: str) -> Iterator[str]:
    """
    Yield raw ``href`` values found in *page_text*, in document order.

    Values containing ``css`` or ``ico`` anywhere are skipped. The generator makes a
    single pass over the text.
    """
    for match in HREF_RE.finditer(page_text):
        link = match.group(1)
        if any(marker in link for marker in SKIP_MARKERS):
            continue
        yield link
