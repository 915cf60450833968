"""Reachability check for documentation base URLs.

Fetches each base URL of a table once and records what came back. This is a
maintenance aid for keeping the table current; lookups never touch the
network.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import requests

from .content import extract_title, is_html
from .http_client import HttpClient
from .table import DOC_LINKS, DocumentationLinkTable

logger = logging.getLogger(__name__)


def utc_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


@dataclass(frozen=True)
class LinkCheckConfig:
    timeout_s: float = 30
    max_retries: int = 3
    backoff_base_s: float = 1.0
    max_wait_s: float = 60.0
    user_agent: str = "docs-urlmap-linkcheck"


@dataclass(frozen=True)
class LinkCheckResult:
    namespace_prefix: str
    base_url: str
    final_url: str | None = None
    status_code: int | None = None
    title: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    @property
    def redirected(self) -> bool:
        return self.final_url is not None and self.final_url != self.base_url

    def to_dict(self) -> dict[str, Any]:
        return {
            "namespace_prefix": self.namespace_prefix,
            "base_url": self.base_url,
            "final_url": self.final_url,
            "status_code": self.status_code,
            "ok": self.ok,
            "title": self.title,
            "error": self.error,
        }


@dataclass(frozen=True)
class LinkCheckReport:
    results: tuple[LinkCheckResult, ...]
    checked_at: str = field(default_factory=utc_iso)

    @property
    def failures(self) -> tuple[LinkCheckResult, ...]:
        return tuple(r for r in self.results if not r.ok)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict[str, Any]:
        return {
            "checked_at": self.checked_at,
            "total": len(self.results),
            "failed": len(self.failures),
            "results": [r.to_dict() for r in self.results],
        }


def _check_one(
    http: HttpClient,
    prefix: str,
    base_url: str,
    *,
    headers: dict[str, str],
) -> LinkCheckResult:
    try:
        fetched = http.get(base_url, headers=headers)
    except RuntimeError as e:
        logger.info("%s: %s unreachable: %s", prefix, base_url, e)
        return LinkCheckResult(prefix, base_url, error=str(e))

    title = None
    if is_html(fetched.body, content_type=fetched.content_type):
        title = extract_title(fetched.body.decode("utf-8", errors="replace"))

    result = LinkCheckResult(
        namespace_prefix=prefix,
        base_url=base_url,
        final_url=fetched.final_url,
        status_code=fetched.status_code,
        title=title,
    )
    if result.ok:
        logger.debug("%s: %s -> %s", prefix, base_url, fetched.status_code)
    else:
        logger.info("%s: %s returned HTTP %s", prefix, base_url, fetched.status_code)
    return result


def check_links(
    table: DocumentationLinkTable = DOC_LINKS,
    *,
    http: HttpClient | None = None,
    config: LinkCheckConfig | None = None,
) -> LinkCheckReport:
    config = config or LinkCheckConfig()
    if http is None:
        http = HttpClient(
            requests.Session(),
            timeout_s=config.timeout_s,
            max_retries=config.max_retries,
            backoff_base_s=config.backoff_base_s,
            max_wait_s=config.max_wait_s,
        )
    headers = {"User-Agent": config.user_agent}

    results = tuple(
        _check_one(http, e.namespace_prefix, e.base_url, headers=headers)
        for e in table.entries
    )
    report = LinkCheckReport(results=results)
    if not report.ok:
        logger.warning(
            "%d of %d documentation base URLs failed the check",
            len(report.failures),
            len(results),
        )
    return report


def write_report(report: LinkCheckReport, out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(
        json.dumps(report.to_dict(), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return out_path
