"""YAML node helpers that keep scalar source text for string fields.

``safe_load`` resolves plain scalars with YAML 1.1 rules, so ``yes`` turns
into ``True`` and ``010`` into ``8``. String-typed fields are read from the
composed node tree instead, keeping the text as written. Fields holding
arbitrary values are still constructed the ``safe_load`` way.
"""

from __future__ import annotations

from typing import Any

import yaml

from max_tasks.errors import UnmarshalError

NULL_TAG = "tag:yaml.org,2002:null"
STR_TAG = "tag:yaml.org,2002:str"
BOOL_TAG = "tag:yaml.org,2002:bool"


def compose(content: bytes | str, what: str) -> yaml.Node | None:
    """Compose a single YAML document into its node tree."""

    try:
        return yaml.compose(content, Loader=yaml.SafeLoader)
    except yaml.YAMLError as exc:
        raise UnmarshalError(message=f"max: invalid {what}: {exc}") from exc


def is_null(node: yaml.Node | None) -> bool:
    return node is None or (isinstance(node, yaml.ScalarNode) and node.tag == NULL_TAG)


def mapping_items(node: yaml.Node | None, name: str) -> list[tuple[str, yaml.Node]]:
    """Return ``(key, value node)`` pairs of a mapping node, merge keys applied."""

    if is_null(node):
        return []
    if not isinstance(node, yaml.MappingNode):
        raise UnmarshalError(message=f"max: field {name!r} must be a mapping")
    loader = yaml.SafeLoader("")
    try:
        loader.flatten_mapping(node)
    except yaml.YAMLError as exc:
        raise UnmarshalError(message=f"max: invalid mapping in {name!r}: {exc}") from exc
    finally:
        loader.dispose()
    return [(scalar_text(key, f"{name} key"), value) for key, value in node.value]


def scalar_text(node: yaml.Node | None, name: str) -> str:
    """Source text of a scalar; null gives an empty string."""

    if is_null(node):
        return ""
    if not isinstance(node, yaml.ScalarNode):
        raise UnmarshalError(message=f"max: field {name!r} must be a scalar")
    return node.value


def string_mapping(node: yaml.Node | None, name: str) -> dict[str, str]:
    return {key: scalar_text(value, f"{name}.{key}") for key, value in mapping_items(node, name)}


def string_list(node: yaml.Node | None, name: str) -> list[str]:
    if is_null(node):
        return []
    if not isinstance(node, yaml.SequenceNode):
        raise UnmarshalError(message=f"max: field {name!r} must be a list")
    return [scalar_text(item, name) for item in node.value]


def construct_value(node: yaml.Node) -> Any:
    """Build the Python value ``safe_load`` would produce for ``node``."""

    loader = yaml.SafeLoader("")
    try:
        return loader.construct_document(node)
    except yaml.YAMLError as exc:
        raise UnmarshalError(message=f"max: invalid value: {exc}") from exc
    finally:
        loader.dispose()


def any_mapping(node: yaml.Node | None, name: str) -> dict[str, Any]:
    return {key: construct_value(value) for key, value in mapping_items(node, name)}


def boolean(node: yaml.Node | None, name: str) -> bool:
    if is_null(node):
        return False
    if not isinstance(node, yaml.ScalarNode) or node.tag != BOOL_TAG:
        raise UnmarshalError(message=f"max: field {name!r} must be a boolean")
    return bool(construct_value(node))
