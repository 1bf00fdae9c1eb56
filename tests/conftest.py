"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import pytest

from max_tasks.http.fetcher import HttpFetcher


@dataclass
class FakeEnvironment:
    home: Path
    workdir: Path
    os: str = "linux"
    home_error: Exception | None = None

    def home_dir(self) -> Path:
        if self.home_error is not None:
            raise self.home_error
        return self.home

    def cwd(self) -> Path:
        return self.workdir

    def os_name(self) -> str:
        return self.os


@dataclass
class FakeRemote:
    """Serves documents by URL and counts every request that reaches it."""

    documents: dict[str, str] = field(default_factory=dict)
    failing: dict[str, int] = field(default_factory=dict)
    broken: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        if url in self.broken:
            raise httpx.ConnectError("connection refused", request=request)
        if url in self.failing:
            return httpx.Response(self.failing[url], text="nope")
        if url in self.documents:
            return httpx.Response(
                200,
                text=self.documents[url],
                headers={"content-type": "application/yaml"},
            )
        return httpx.Response(404, text="not found")

    def fetcher(self) -> HttpFetcher:
        return HttpFetcher(transport=httpx.MockTransport(self.handler))


@pytest.fixture(autouse=True)
def clean_max_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep resolver settings from leaking in from the host environment."""

    for name in (
        "MAX_CACHE_DIR",
        "MAX_USE_CACHE",
        "MAX_STRICT_LOCAL_INCLUDES",
        "MAX_HTTP_TIMEOUT_SECONDS",
        "MAX_HTTP_MAX_RETRIES",
        "MAX_PARALLEL_FETCHES",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def fake_env(tmp_path: Path) -> FakeEnvironment:
    home = tmp_path / "home"
    workdir = tmp_path / "work"
    home.mkdir()
    workdir.mkdir()
    return FakeEnvironment(home=home, workdir=workdir)


@pytest.fixture()
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture()
def write_file(fake_env: FakeEnvironment) -> Callable[[str, str], Path]:
    """Write a file relative to the fake working directory."""

    def _write(name: str, content: str) -> Path:
        path = fake_env.workdir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, "utf-8")
        return path

    return _write
