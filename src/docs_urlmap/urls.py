from __future__ import annotations

from urllib.parse import ParseResult, urlparse

_DOC_SCHEMES = {"http", "https"}


def is_documentation_base_url(url: str) -> bool:
    """Return True when ``url`` can serve as a documentation root.

    - Absolute http(s) URL with a host.
    - Path ends in ``/`` so page names append below it.
    - No query or fragment.
    """

    if not isinstance(url, str) or not url or url != url.strip():
        return False
    parsed: ParseResult = urlparse(url)
    if (parsed.scheme or "").lower() not in _DOC_SCHEMES:
        return False
    if not parsed.hostname:
        return False
    if parsed.query or parsed.fragment:
        return False
    return (parsed.path or "").endswith("/")


def join_doc_url(base_url: str, page: str) -> str:
    if not is_documentation_base_url(base_url):
        raise ValueError(f"Not a documentation base URL: {base_url!r}")
    parsed = urlparse(page)
    if parsed.scheme or parsed.netloc:
        raise ValueError(f"Page must be relative to the base URL: {page!r}")
    # A leading slash would drop the base path under urljoin semantics.
    return base_url + page.lstrip("/")
