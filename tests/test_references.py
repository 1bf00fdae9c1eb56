from __future__ import annotations

import allure
import pytest
import yaml

from max_tasks.references import (
    IgnoredEntry,
    InlineTask,
    LocalInclude,
    RemoteInclude,
    classify_entry,
    describe,
)

pytestmark = [
    allure.epic("Config Resolution"),
    allure.feature("Task Dispatch"),
]


def _node(text: str) -> yaml.Node | None:
    return yaml.compose(text, Loader=yaml.SafeLoader)


@pytest.mark.parametrize(
    "value",
    [
        "https://example.com/tasks/build.yml",
        "http://example.com/tasks/build.yml",
        "tasks/http.yml",
    ],
)
def test_strings_mentioning_http_are_remote(value: str) -> None:
    assert classify_entry(_node(value)) == RemoteInclude(url=value)


def test_other_strings_are_local_paths() -> None:
    assert classify_entry(_node("tasks/build.yml")) == LocalInclude(path="tasks/build.yml")


def test_quoted_numbers_are_local_paths() -> None:
    assert classify_entry(_node("'123'")) == LocalInclude(path="123")


def test_mappings_are_inline() -> None:
    node = _node("commands: [make]")

    ref = classify_entry(node)

    assert isinstance(ref, InlineTask)
    assert ref.node is node


@pytest.mark.parametrize(
    ("text", "kind"),
    [("~", "null"), ("42", "int"), ("1.5", "float"), ("true", "bool"), ("[make]", "seq")],
)
def test_other_shapes_are_ignored(text: str, kind: str) -> None:
    ref = classify_entry(_node(text))

    assert isinstance(ref, IgnoredEntry)
    assert describe(ref.node) == kind


def test_missing_node_is_ignored() -> None:
    assert describe(classify_entry(None).node) == "null"
