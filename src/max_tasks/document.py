"""Top-level document parsing and task dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import yaml

from max_tasks.errors import MaxTasksError, UnmarshalError
from max_tasks.includes import LocalIncludeResolver, RemoteIncludeResolver
from max_tasks.nodes import (
    any_mapping,
    boolean,
    compose,
    is_null,
    mapping_items,
    scalar_text,
    string_mapping,
)
from max_tasks.references import (
    InlineTask,
    LocalInclude,
    RemoteInclude,
    classify_entry,
    describe,
)
from max_tasks.task import Task, parse_task

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Config:
    """Fully resolved configuration document."""

    args: dict[str, Any] = field(default_factory=dict)
    tasks: dict[str, Task] = field(default_factory=dict)
    variables: dict[str, str] = field(default_factory=dict)
    version: str | None = None


@dataclass(slots=True)
class RawDocument:
    """Loose mirror of a document, before task entries are classified.

    ``tasks`` keeps the composed YAML nodes so entries can be classified by
    shape and inline tasks re-serialized without losing scalar text.
    """

    args: dict[str, Any] = field(default_factory=dict)
    tasks: dict[str, yaml.Node] = field(default_factory=dict)
    variables: dict[str, str] = field(default_factory=dict)
    version: str | None = None
    quiet: bool = False

    @classmethod
    def from_yaml(cls, content: bytes | str) -> RawDocument:
        root = compose(content, "config document")
        if is_null(root):
            return cls()
        if not isinstance(root, yaml.MappingNode):
            raise UnmarshalError(message="max: config document must be a mapping")

        sections = dict(mapping_items(root, "config"))
        version = sections.get("version")
        return cls(
            args=any_mapping(sections.get("args"), "args"),
            tasks=dict(mapping_items(sections.get("tasks"), "tasks")),
            variables=string_mapping(sections.get("variables"), "variables"),
            version=None if is_null(version) else scalar_text(version, "version"),
            quiet=boolean(sections.get("quiet"), "quiet"),
        )


class DocumentParser:
    """Turn document bytes into a ``Config``, resolving every task entry.

    Inline mappings are parsed in place, strings are routed to the remote
    or local resolver. Any hard failure aborts the whole parse.
    """

    def __init__(
        self,
        *,
        remote: RemoteIncludeResolver,
        local: LocalIncludeResolver,
        max_parallel_fetches: int = 1,
    ) -> None:
        self.remote = remote
        self.local = local
        self.max_parallel_fetches = max_parallel_fetches

    def parse(self, content: bytes | str) -> Config:
        raw = RawDocument.from_yaml(content)
        references = {name: classify_entry(node) for name, node in raw.tasks.items()}

        remote_refs = {
            name: ref for name, ref in references.items() if isinstance(ref, RemoteInclude)
        }
        try:
            fetched = self.remote.fetch_many(
                [ref.url for ref in remote_refs.values()],
                max_workers=self.max_parallel_fetches,
            )
            remote_tasks = {name: parse_task(fetched[ref.url]) for name, ref in remote_refs.items()}
        except MaxTasksError as exc:
            logger.warning("Remote include failed: %s", exc)
            raise UnmarshalError() from exc

        tasks: dict[str, Task] = {}
        for name, ref in references.items():
            if isinstance(ref, RemoteInclude):
                tasks[name] = remote_tasks[name]
            elif isinstance(ref, LocalInclude):
                task = self.local.resolve(ref.path)
                if task is not None:
                    tasks[name] = task
            elif isinstance(ref, InlineTask):
                tasks[name] = _inline_task(ref.node)
            else:
                logger.warning(
                    "Ignoring task %r: unsupported entry of type %s",
                    name,
                    describe(ref.node),
                )

        return Config(
            args=raw.args,
            tasks=tasks,
            variables=raw.variables,
            version=raw.version,
        )


def _inline_task(node: yaml.MappingNode) -> Task:
    # Re-serialize so inline tasks go through the same path as included ones.
    try:
        buffer = yaml.serialize(node, Dumper=yaml.SafeDumper)
    except yaml.YAMLError as exc:
        raise UnmarshalError(message=f"max: can't serialize inline task: {exc}") from exc
    return parse_task(buffer)
