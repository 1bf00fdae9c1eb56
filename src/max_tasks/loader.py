"""Public entry points: resolve a configuration from text or from a file."""

from __future__ import annotations

import logging
from pathlib import Path

from max_tasks.cache import ContentCache, create_default_cache
from max_tasks.discovery import locate_document
from max_tasks.document import Config, DocumentParser
from max_tasks.environment import Environment, SystemEnvironment
from max_tasks.errors import CacheCreationError
from max_tasks.http.fetcher import HttpFetcher
from max_tasks.includes import LocalIncludeResolver, RemoteIncludeResolver
from max_tasks.settings import ResolverSettings

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Wire settings, environment, cache and fetcher into a ``DocumentParser``.

    The cache is created once per loader. When it can't be created the
    loader keeps working without one and every remote include is fetched.
    """

    def __init__(
        self,
        *,
        settings: ResolverSettings | None = None,
        environment: Environment | None = None,
        fetcher: HttpFetcher | None = None,
        cache: ContentCache | None = None,
    ) -> None:
        self.settings = settings or ResolverSettings()
        self.settings.validate()
        self.environment = environment or SystemEnvironment()
        self._fetcher = fetcher or HttpFetcher(
            timeout_seconds=self.settings.request_timeout_seconds,
            max_retries=self.settings.max_retries,
        )
        self._owns_fetcher = fetcher is None
        self.cache = cache if cache is not None else self._create_cache()

    def _create_cache(self) -> ContentCache | None:
        if not self.settings.use_cache:
            return None
        try:
            return create_default_cache(self.environment, self.settings)
        except CacheCreationError as exc:
            logger.warning("Continuing without cache: %s", exc)
            return None

    def _parser(self) -> DocumentParser:
        return DocumentParser(
            remote=RemoteIncludeResolver(self._fetcher, self.cache),
            local=LocalIncludeResolver(
                self.environment.cwd(),
                strict=self.settings.strict_local_includes,
            ),
            max_parallel_fetches=self.settings.max_parallel_fetches,
        )

    def read_content(self, content: bytes | str) -> Config:
        """Resolve a configuration from document text."""

        return self._parser().parse(content)

    def read_file(self, path: str | Path | None = "") -> Config:
        """Resolve a configuration from ``path`` or the default file names."""

        return self._parser().parse(locate_document(path, self.environment))

    def close(self) -> None:
        if self._owns_fetcher:
            self._fetcher.close()

    def __enter__(self) -> ConfigLoader:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


def read_content(
    content: bytes | str,
    *,
    settings: ResolverSettings | None = None,
    environment: Environment | None = None,
) -> Config:
    """Resolve a configuration from document text with a one-off loader.

    Settings default to ``ResolverSettings.from_env()``.
    """

    with ConfigLoader(
        settings=settings or ResolverSettings.from_env(),
        environment=environment,
    ) as loader:
        return loader.read_content(content)


def read_file(
    path: str | Path | None = "",
    *,
    settings: ResolverSettings | None = None,
    environment: Environment | None = None,
) -> Config:
    """Resolve a configuration file with a one-off loader.

    Settings default to ``ResolverSettings.from_env()``.
    """

    with ConfigLoader(
        settings=settings or ResolverSettings.from_env(),
        environment=environment,
    ) as loader:
        return loader.read_file(path)
