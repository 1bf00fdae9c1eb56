"""Task records parsed from document fragments."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

import yaml

from max_tasks.errors import UnmarshalError
from max_tasks.nodes import (
    any_mapping,
    boolean,
    compose,
    is_null,
    mapping_items,
    scalar_text,
    string_list,
    string_mapping,
)

_STRING_FIELDS = ("summary", "usage", "dir")
_LIST_FIELDS = ("commands", "deps", "tasks", "status")
_STRING_MAP_FIELDS = ("env", "variables")


@dataclass(slots=True)
class Task:
    """One runnable unit as written in a document.

    Fields are carried as parsed; nothing here interprets or runs them.
    """

    summary: str = ""
    usage: str = ""
    dir: str = ""
    commands: list[str] = field(default_factory=list)
    deps: list[str] = field(default_factory=list)
    tasks: list[str] = field(default_factory=list)
    status: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    variables: dict[str, str] = field(default_factory=dict)
    args: dict[str, Any] = field(default_factory=dict)
    interactive: bool = False

    @classmethod
    def from_node(cls, node: yaml.Node | None) -> Task:
        """Structurally parse a composed fragment; unknown keys are ignored."""

        if is_null(node):
            return cls()
        if not isinstance(node, yaml.MappingNode):
            raise UnmarshalError(message="max: task must be a mapping")

        values: dict[str, Any] = {}
        for key, value in mapping_items(node, "task"):
            if key in _STRING_FIELDS:
                values[key] = scalar_text(value, key)
            elif key in _LIST_FIELDS:
                values[key] = string_list(value, key)
            elif key in _STRING_MAP_FIELDS:
                values[key] = string_mapping(value, key)
            elif key == "args":
                values[key] = any_mapping(value, key)
            elif key == "interactive":
                values[key] = boolean(value, key)
        return cls(**values)

    def to_mapping(self) -> dict[str, Any]:
        """Return the non-empty fields as a plain mapping."""

        result: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value:
                result[item.name] = value
        return result


def parse_task(content: bytes | str) -> Task:
    """Parse a YAML task fragment into a ``Task``."""

    return Task.from_node(compose(content, "task document"))


def dump_task(task: Task) -> str:
    """Serialize a task back to a YAML fragment."""

    return yaml.safe_dump(task.to_mapping(), sort_keys=True, allow_unicode=True)
