"""Resolve max task-runner documents into task definitions."""

from max_tasks.cache import ContentCache
from max_tasks.document import Config
from max_tasks.errors import (
    CacheCreationError,
    CacheWriteError,
    MaxTasksError,
    RemoteFetchError,
    UnmarshalError,
)
from max_tasks.loader import ConfigLoader, read_content, read_file
from max_tasks.settings import ResolverSettings
from max_tasks.task import Task

__all__ = [
    "CacheCreationError",
    "CacheWriteError",
    "Config",
    "ConfigLoader",
    "ContentCache",
    "MaxTasksError",
    "RemoteFetchError",
    "ResolverSettings",
    "Task",
    "UnmarshalError",
    "read_content",
    "read_file",
]
