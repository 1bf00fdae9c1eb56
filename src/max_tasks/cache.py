"""Directory-backed content cache for remote includes."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from max_tasks.environment import Environment
from max_tasks.errors import CacheCreationError, CacheWriteError
from max_tasks.settings import ResolverSettings

logger = logging.getLogger(__name__)

CACHE_DIR_NAME = ".max"


class ContentCache:
    """Key to bytes store, one flat file per key under ``root_dir``.

    Entries never expire: a key once written is returned as-is on every
    later lookup. No locking is done, so concurrent writers need distinct
    roots or external serialization.
    """

    def __init__(self, root_dir: Path) -> None:
        self.root_dir = Path(root_dir)
        try:
            self.root_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheCreationError(
                message=f"max: can't create cache at {self.root_dir}: {exc}",
            ) from exc
        if not self.root_dir.is_dir():
            raise CacheCreationError(message=f"max: cache root is not a directory: {self.root_dir}")

    def path_for(self, key: str) -> Path:
        digest = hashlib.sha1(key.encode("utf-8"), usedforsecurity=False).hexdigest()  # noqa: S324
        return self.root_dir / digest

    def get(self, key: str) -> bytes | None:
        """Return cached content for ``key`` or ``None`` on a miss."""

        try:
            return self.path_for(key).read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Unreadable cache entry for %s: %s", key, exc)
            return None

    def put(self, key: str, content: bytes) -> None:
        """Persist ``content`` under ``key``, replacing any previous entry."""

        path = self.path_for(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            tmp_path.write_bytes(content)
            tmp_path.replace(path)
        except OSError as exc:
            raise CacheWriteError(message=f"max: can't write cache entry for {key}: {exc}") from exc

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.path_for(key).is_file()


def create_default_cache(
    environment: Environment,
    settings: ResolverSettings | None = None,
) -> ContentCache:
    """Create the per-user cache, ``~/.max`` unless overridden in settings."""

    if settings is not None and settings.cache_dir is not None:
        return ContentCache(settings.cache_dir)
    try:
        home = environment.home_dir()
    except (RuntimeError, KeyError, OSError) as exc:
        raise CacheCreationError(message=f"max: can't resolve home directory: {exc}") from exc
    return ContentCache(home / CACHE_DIR_NAME)
