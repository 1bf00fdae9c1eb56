from __future__ import annotations

import allure
import pytest
import yaml

from max_tasks.errors import UnmarshalError
from max_tasks.task import Task, dump_task, parse_task

pytestmark = [
    allure.epic("Config Resolution"),
    allure.feature("Task Fragments"),
]


def test_parse_task_reads_known_fields() -> None:
    task = parse_task(
        """
summary: Build the project
usage: build [target]
dir: ./src
commands:
  - go build
  - go test ./...
deps:
  - lint
env:
  CGO_ENABLED: 0
variables:
  name: max
args:
  verbose: true
interactive: true
""",
    )

    assert task.summary == "Build the project"
    assert task.usage == "build [target]"
    assert task.dir == "./src"
    assert task.commands == ["go build", "go test ./..."]
    assert task.deps == ["lint"]
    assert task.env == {"CGO_ENABLED": "0"}
    assert task.variables == {"name": "max"}
    assert task.args == {"verbose": True}
    assert task.interactive is True


def test_parse_task_ignores_unknown_keys() -> None:
    task = parse_task("commands: [echo hi]\nunknown_field: 42\n")

    assert task == Task(commands=["echo hi"])


def test_parse_task_accepts_bytes() -> None:
    assert parse_task(b"summary: from bytes\n").summary == "from bytes"


def test_empty_fragment_is_empty_task() -> None:
    assert parse_task("") == Task()


@pytest.mark.parametrize(
    "fragment",
    [
        "just a string",
        "- a\n- b\n",
        "commands: make\n",
        "commands:\n  - {nested: mapping}\n",
        "env: [A, B]\n",
        "interactive: maybe\n",
        "summary: {a: 1}\n",
        "commands: [unterminated\n",
    ],
)
def test_parse_task_rejects_structurally_invalid_fragments(fragment: str) -> None:
    with pytest.raises(UnmarshalError):
        parse_task(fragment)


def test_dump_task_round_trips() -> None:
    task = Task(
        summary="Deploy",
        commands=["make deploy"],
        deps=["build"],
        env={"STAGE": "prod"},
        args={"force": False, "retries": 3},
    )

    assert parse_task(dump_task(task)) == task


def test_to_mapping_omits_empty_fields() -> None:
    mapping = Task(commands=["make"]).to_mapping()

    assert mapping == {"commands": ["make"]}
    assert yaml.safe_load(dump_task(Task())) == {}


def test_string_fields_keep_scalar_text() -> None:
    task = parse_task(
        "summary: 1.10\ncommands: [yes, 010]\nenv:\n  FLAG: yes\n  MODE: 010\n  VER: 1.10\n",
    )

    assert task.summary == "1.10"
    assert task.commands == ["yes", "010"]
    assert task.env == {"FLAG": "yes", "MODE": "010", "VER": "1.10"}


def test_args_keep_typed_values() -> None:
    task = parse_task("args:\n  force: yes\n  mode: 010\n")

    assert task.args == {"force": True, "mode": 8}


def test_merge_keys_are_applied() -> None:
    task = parse_task("base: &base\n  summary: shared\ncommands: [make]\n<<: *base\n")

    assert task == Task(summary="shared", commands=["make"])
