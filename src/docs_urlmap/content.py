from __future__ import annotations

import re
from typing import Final

from bs4 import BeautifulSoup

_HTML_MEDIA_TYPES: Final[frozenset[str]] = frozenset(
    {"text/html", "application/xhtml+xml"}
)
# Leading comments are allowed before the doctype or root element.
_HTML_START_RE: Final[re.Pattern[bytes]] = re.compile(
    rb"\s*(?:<!--.*?-->\s*)*<(?:!doctype\s+html|html|head)\b", re.I | re.S
)


def is_html(body: bytes, *, content_type: str | None) -> bool:
    """Trust a Content-Type when the server sent one, else sniff the body."""
    if content_type:
        media_type = content_type.split(";", 1)[0].strip().lower()
        return media_type in _HTML_MEDIA_TYPES
    return _HTML_START_RE.match(body[:4096]) is not None


def extract_title(html: str) -> str | None:
    """Title of a documentation landing page: first <h1>, else <title>."""
    soup = BeautifulSoup(html, "html.parser")
    h1 = soup.find("h1")
    if h1 and h1.get_text(strip=True):
        return h1.get_text(" ", strip=True)
    if soup.title and soup.title.get_text(strip=True):
        return soup.title.get_text(" ", strip=True)
    return None
