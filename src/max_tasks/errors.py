"""Error taxonomy for configuration resolution."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class MaxTasksError(Exception):
    """Base resolution error."""

    message: str
    code: str = "max_tasks_error"

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class UnmarshalError(MaxTasksError):
    """A document or task fragment is not structurally valid."""

    message: str = "max: can't unmarshal config value"
    code: str = "unmarshal"


@dataclass(slots=True)
class CacheCreationError(MaxTasksError):
    """Cache root directory can't be created or opened."""

    message: str = "max: can't create cache"
    code: str = "cache_create"


@dataclass(slots=True)
class CacheWriteError(MaxTasksError):
    """Cache entry can't be persisted."""

    code: str = "cache_write"


@dataclass(slots=True)
class RemoteFetchError(MaxTasksError):
    """Remote include could not be fetched."""

    code: str = "remote_fetch"
    url: str = ""
    status_code: int | None = None
