"""HTTP transport for remote includes."""

from max_tasks.http.fetcher import FetchResult, HttpFetcher

__all__ = ["FetchResult", "HttpFetcher"]
