"""Classification of raw task entries by shape."""

from __future__ import annotations

from dataclasses import dataclass

import yaml

from max_tasks.nodes import STR_TAG

REMOTE_MARKER = "http"


@dataclass(frozen=True, slots=True)
class InlineTask:
    """Task written directly in the document."""

    node: yaml.MappingNode


@dataclass(frozen=True, slots=True)
class RemoteInclude:
    """Task document fetched over HTTP(S)."""

    url: str


@dataclass(frozen=True, slots=True)
class LocalInclude:
    """Task document read from the filesystem."""

    path: str


@dataclass(frozen=True, slots=True)
class IgnoredEntry:
    """Entry of any other shape; contributes no task."""

    node: yaml.Node | None


TaskReference = InlineTask | RemoteInclude | LocalInclude | IgnoredEntry


def classify_entry(node: yaml.Node | None) -> TaskReference:
    """Classify one ``tasks`` entry.

    Any string containing ``"http"`` is remote, so a local path such as
    ``tasks/http.yml`` is fetched as a URL.
    """

    if isinstance(node, yaml.ScalarNode) and node.tag == STR_TAG:
        if REMOTE_MARKER in node.value:
            return RemoteInclude(url=node.value)
        return LocalInclude(path=node.value)
    if isinstance(node, yaml.MappingNode):
        return InlineTask(node=node)
    return IgnoredEntry(node=node)


def describe(node: yaml.Node | None) -> str:
    """Short tag name for log messages, e.g. ``int`` or ``seq``."""

    if node is None:
        return "null"
    return node.tag.rsplit(":", 1)[-1]
