"""Runtime settings for the configuration resolver."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0


@dataclass(slots=True)
class ResolverSettings:
    """How documents are resolved: cache location, include strictness, HTTP limits."""

    cache_dir: Path | None = None
    use_cache: bool = True
    strict_local_includes: bool = False
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    max_retries: int = 0
    max_parallel_fetches: int = 1

    @classmethod
    def from_env(cls, cache_dir: Path | None = None) -> ResolverSettings:
        """Load settings from environment, falling back to defaults."""

        raw_cache_dir = os.getenv("MAX_CACHE_DIR", "").strip()
        settings = cls(
            cache_dir=cache_dir or (Path(raw_cache_dir).expanduser() if raw_cache_dir else None),
            use_cache=_env_bool("MAX_USE_CACHE", default=True),
            strict_local_includes=_env_bool("MAX_STRICT_LOCAL_INCLUDES", default=False),
            request_timeout_seconds=_env_float(
                "MAX_HTTP_TIMEOUT_SECONDS",
                default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
            ),
            max_retries=_env_int("MAX_HTTP_MAX_RETRIES", default=0),
            max_parallel_fetches=_env_int("MAX_PARALLEL_FETCHES", default=1),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Raise ``ValueError`` on settings that can't drive a resolution."""

        if self.request_timeout_seconds <= 0:
            raise ValueError("MAX_HTTP_TIMEOUT_SECONDS must be > 0.")
        if self.max_retries < 0:
            raise ValueError("MAX_HTTP_MAX_RETRIES must be >= 0.")
        if self.max_parallel_fetches < 1:
            raise ValueError("MAX_PARALLEL_FETCHES must be >= 1.")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError as error:
        raise ValueError(f"Invalid integer value for {name}: {value!r}") from error


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError as error:
        raise ValueError(f"Invalid number value for {name}: {value!r}") from error
