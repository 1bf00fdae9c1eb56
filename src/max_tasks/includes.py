"""Resolvers for task entries that reference another document."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from max_tasks.cache import ContentCache
from max_tasks.errors import CacheWriteError, RemoteFetchError, UnmarshalError
from max_tasks.http.fetcher import HttpFetcher
from max_tasks.task import Task, parse_task

logger = logging.getLogger(__name__)


class RemoteIncludeResolver:
    """Fetch task documents over HTTP(S), consulting an optional cache.

    ``cache`` is ``None`` when no cache could be created; the only
    difference is that every lookup goes to the network.
    """

    def __init__(self, fetcher: HttpFetcher, cache: ContentCache | None = None) -> None:
        self.fetcher = fetcher
        self.cache = cache

    def fetch_content(self, url: str) -> bytes:
        """Return the document bytes for ``url``, from cache when present."""

        if self.cache is not None:
            cached = self.cache.get(url)
            if cached is not None:
                logger.debug("Cache hit for %s", url)
                return cached

        logger.info("Fetching remote task %s", url)
        result = self.fetcher.fetch(url)
        if not result.is_success:
            raise RemoteFetchError(
                message=f"max: can't fetch {url}: {result.error}",
                url=url,
                status_code=result.status_code or None,
            )

        if self.cache is not None:
            try:
                self.cache.put(url, result.content)
            except CacheWriteError as exc:
                logger.warning("%s", exc)
        return result.content

    def resolve(self, url: str) -> Task:
        return parse_task(self.fetch_content(url))

    def fetch_many(self, urls: Iterable[str], max_workers: int = 1) -> dict[str, bytes]:
        """Fetch distinct URLs, at most ``max_workers`` at a time.

        Content is returned as bytes so every entry naming the same URL
        parses its own ``Task``. The first failure (in input order) is
        raised once all fetches have finished.
        """

        unique = list(dict.fromkeys(urls))
        if max_workers <= 1 or len(unique) <= 1:
            return {url: self.fetch_content(url) for url in unique}

        with ThreadPoolExecutor(max_workers=min(max_workers, len(unique))) as executor:
            futures = {url: executor.submit(self.fetch_content, url) for url in unique}
        return {url: future.result() for url, future in futures.items()}


class LocalIncludeResolver:
    """Read task documents from the filesystem."""

    def __init__(self, base_dir: Path, *, strict: bool = False) -> None:
        self.base_dir = base_dir
        self.strict = strict

    def resolve(self, path: str) -> Task | None:
        """Parse the task at ``path``; ``None`` when lenient and unreadable."""

        try:
            file_path = self.base_dir / Path(path).expanduser()
            content = file_path.read_bytes()
        except (OSError, ValueError, RuntimeError) as exc:
            if self.strict:
                raise UnmarshalError(
                    message=f"max: can't read included task {path}: {exc}",
                ) from exc
            logger.warning("Skipping unreadable task include %r: %s", path, exc)
            return None
        return parse_task(content)
