"""Blocking HTTP client used to fetch remote task documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from max_tasks.settings import DEFAULT_REQUEST_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "max-tasks/0.1 (+https://github.com/frozzare/max)"


@dataclass(slots=True)
class FetchResult:
    """Result of an HTTP fetch operation."""

    url: str
    status_code: int
    content: bytes
    content_type: str
    is_success: bool
    error: str | None = None


class HttpFetcher:
    """HTTP client wrapper with timeout, retry and user-agent configuration."""

    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        max_retries: int = 0,
        user_agent: str = DEFAULT_USER_AGENT,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = httpx.Timeout(timeout_seconds, connect=min(timeout_seconds, 10.0))
        base_headers = {"User-Agent": user_agent}
        if headers:
            base_headers.update(headers)
        self._client = httpx.Client(
            timeout=self._timeout,
            headers=base_headers,
            transport=transport or httpx.HTTPTransport(retries=max_retries),
            follow_redirects=True,
        )

    def fetch(self, url: str) -> FetchResult:
        """Fetch URL content, returning structured result."""

        try:
            response = self._client.get(url)
        except httpx.TimeoutException:
            logger.warning("Timeout fetching %s", url)
            return FetchResult(
                url=url,
                status_code=0,
                content=b"",
                content_type="",
                is_success=False,
                error="timeout",
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("HTTP error fetching %s: %s", url, exc)
            return FetchResult(
                url=url,
                status_code=0,
                content=b"",
                content_type="",
                is_success=False,
                error=str(exc),
            )

        return FetchResult(
            url=url,
            status_code=response.status_code,
            content=response.content,
            content_type=response.headers.get("content-type", ""),
            is_success=response.is_success,
            error=None if response.is_success else f"HTTP {response.status_code}",
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpFetcher:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
