from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable

import requests
from requests import exceptions as req_exc

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


def parse_retry_after(value: str | None) -> float | None:
    """Seconds from a delta-seconds ``Retry-After`` header.

    HTTP-date forms, negative, NaN and infinite values are unusable and give
    None, which means "use the normal backoff".
    """

    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


@dataclass(frozen=True)
class FetchResult:
    url: str
    final_url: str
    status_code: int
    content_type: str | None
    body: bytes


class HttpClient:
    """GET with bounded retries for the link check.

    Connection errors and retryable statuses are retried with exponential
    backoff; a server ``Retry-After`` replaces the backoff. Every wait is
    capped at ``max_wait_s``. A retryable status on the last attempt is
    returned like any other response.
    """

    def __init__(
        self,
        session: requests.Session,
        *,
        timeout_s: float = 30,
        max_retries: int = 3,
        backoff_base_s: float = 1.0,
        max_wait_s: float = 60.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._session = session
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._backoff_base_s = backoff_base_s
        self._max_wait_s = max(0.0, max_wait_s)
        self._sleep = sleep

    def wait_before_retry(self, attempt: int, retry_after: float | None) -> float:
        wait_s = retry_after
        if wait_s is None:
            wait_s = self._backoff_base_s * (2**attempt)
        return min(max(0.0, wait_s), self._max_wait_s)

    def get(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> FetchResult:
        last_error: Exception | None = None

        for attempt in range(self._max_retries + 1):
            last_attempt = attempt >= self._max_retries
            try:
                resp = self._session.get(url, timeout=self._timeout_s, headers=headers)
            except req_exc.RequestException as e:
                last_error = e
                if last_attempt:
                    break
                wait_s = self.wait_before_retry(attempt, None)
                logger.warning("GET %s failed (%s); retry in %.1fs", url, e, wait_s)
                self._sleep(wait_s)
                continue

            if resp.status_code in RETRYABLE_STATUSES and not last_attempt:
                retry_after = parse_retry_after(resp.headers.get("Retry-After"))
                wait_s = self.wait_before_retry(attempt, retry_after)
                logger.warning(
                    "GET %s: HTTP %s; retry in %.1fs", url, resp.status_code, wait_s
                )
                self._sleep(wait_s)
                continue

            return FetchResult(
                url=url,
                final_url=str(resp.url),
                status_code=int(resp.status_code),
                content_type=resp.headers.get("Content-Type"),
                body=resp.content,
            )

        raise RuntimeError(f"Failed to fetch {url}: {last_error}")
