"""
Pagination cursor handling.

The list endpoint returns its ``next``/``prev`` cursors as full URLs.
Only the ``page`` query parameter of such a URL is trusted; the host
and path may differ from the request that produced it.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Optional

from .errors import MalformedCursor


logger = logging.getLogger(__name__)


def extract_page(cursor_url: Optional[str]) -> Optional[int]:
    """Return the page a cursor points to, or ``None`` when there is no cursor.

    Raises ``MalformedCursor`` when the URL has no positive integer
    ``page`` parameter.
    """
    if not cursor_url:
        return None
    query = urllib.parse.urlsplit(cursor_url).query
    values = urllib.parse.parse_qs(query).get("page")
    if not values:
        raise MalformedCursor(cursor_url, "no page parameter")
    raw = values[0].strip()
    if not raw.isdecimal():
        raise MalformedCursor(cursor_url, f"page {raw!r} is not a number")
    page = int(raw)
    if page < 1:
        raise MalformedCursor(cursor_url, f"page {page} is not positive")
    return page


def cursor_page(cursor_url: Optional[str]) -> Optional[int]:
    """Like ``extract_page()`` but a malformed cursor counts as exhausted."""
    try:
        return extract_page(cursor_url)
    except MalformedCursor as exc:
        logger.warning("%s; disabling navigation in that direction", exc)
        return None
