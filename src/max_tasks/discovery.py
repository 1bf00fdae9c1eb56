"""Locating the configuration document on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from max_tasks.environment import Environment

logger = logging.getLogger(__name__)

GENERIC_FILENAME = "max.yml"


def default_filenames(os_name: str) -> list[str]:
    """Candidate names in search order: OS-specific first, then generic."""

    return [f"max_{os_name}.yml", GENERIC_FILENAME]


def locate_document(path: str | Path | None, environment: Environment) -> bytes:
    """Read the explicit ``path`` if it exists, else the first default file.

    Filesystem errors are raised unchanged; with no readable default the
    error of the last candidate is raised.
    """

    if path:
        explicit = Path(path).expanduser()
        if explicit.exists():
            logger.debug("Reading config document %s", explicit)
            return explicit.read_bytes()
        logger.debug("Config document %s not found, searching defaults", explicit)

    cwd = environment.cwd()
    last_error: OSError | None = None
    for name in default_filenames(environment.os_name()):
        candidate = cwd / name
        try:
            content = candidate.read_bytes()
        except OSError as exc:
            last_error = exc
            continue
        logger.debug("Reading config document %s", candidate)
        return content

    if last_error is None:
        raise FileNotFoundError(f"No config document found in {cwd}")
    raise last_error
