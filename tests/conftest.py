"""Shared test fixtures and configuration."""

import io
from pathlib import Path
from typing import List, Optional

import pytest
from git import Repo
from rich.console import Console

from git_ai_commit.ai_backends.base import AIBackend, AIResponse
from git_ai_commit.config.settings import RunConfig
from git_ai_commit.ui.console import AICommitConsole
from git_ai_commit.utils.versioning import BumpType


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep user config, cache and Ollama variables out of the tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config-home"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache-home"))
    monkeypatch.delenv("OLLAMA_HOST", raising=False)
    monkeypatch.delenv("OLLAMA_MODEL", raising=False)
    for name in ("GAC_AI__MODEL", "GAC_AI__API_URL", "GAC_COMMIT__LANGUAGE", "GAC_GIT__BUMP"):
        monkeypatch.delenv(name, raising=False)


def make_config(**overrides) -> RunConfig:
    values = dict(
        api_url="http://127.0.0.1:11434",
        model="llama3:latest",
        language="english",
        bump=BumpType.PATCH,
        remote="origin",
    )
    values.update(overrides)
    return RunConfig(**values)


@pytest.fixture
def run_config():
    return make_config()


class FakeBackend(AIBackend):
    """Backend returning queued responses and recording prompts."""

    def __init__(self, responses: Optional[List[AIResponse]] = None, healthy: bool = True,
                 models: Optional[List[str]] = None):
        super().__init__(api_url="http://fake:11434", model="llama3:latest")
        self.responses = list(responses or [])
        self.healthy = healthy
        self.models = ["llama3:latest"] if models is None else models
        self.prompts: List[str] = []

    async def call_api(self, prompt: str) -> AIResponse:
        self.prompts.append(prompt)
        return self.responses.pop(0)

    async def health_check(self) -> bool:
        return self.healthy

    async def list_models(self) -> list[str]:
        return self.models


def ok(content: str) -> AIResponse:
    return AIResponse(status=200, body=f'{{"response": "{content}"}}', content=content)


class FakeRepository:
    """Stands in for GitRepository, recording mutating calls."""

    def __init__(self, staged: str = "", unstaged: str = "", untracked: Optional[dict] = None,
                 tags: Optional[List[str]] = None):
        self.staged = staged
        self.unstaged = unstaged
        self.untracked = untracked or {}
        self.tags = list(tags or [])
        self.calls: List[tuple] = []

    def staged_diff(self):
        return self.staged

    def staged_files(self):
        return ["staged.py"] if self.staged else []

    def unstaged_diff(self):
        return self.unstaged

    def unstaged_files(self):
        return ["unstaged.py"] if self.unstaged else []

    def untracked_files(self):
        return list(self.untracked)

    def read_file(self, name):
        content = self.untracked[name]
        if isinstance(content, Exception):
            raise content
        return content

    def stage_all(self):
        self.calls.append(("stage_all",))

    def commit(self, message):
        self.calls.append(("commit", message))
        return "abcdef1234567890"

    def push(self, remote="origin", branch=None):
        self.calls.append(("push", remote))

    def fetch_tags(self, remote="origin"):
        self.calls.append(("fetch_tags", remote))

    def list_tags(self):
        return list(self.tags)

    def create_tag(self, tag):
        self.calls.append(("create_tag", tag))
        self.tags.append(tag)

    def push_tag(self, tag, remote="origin"):
        self.calls.append(("push_tag", tag, remote))

    @property
    def mutations(self):
        return [call[0] for call in self.calls if call[0] != "fetch_tags"]


@pytest.fixture
def quiet_console():
    """Console writing to a buffer; read it back with ``.console.file.getvalue()``."""
    return AICommitConsole(console=Console(file=io.StringIO(), width=200))


@pytest.fixture
def git_repo(tmp_path) -> Repo:
    """A repository with one commit and a bare ``origin`` remote."""
    work = tmp_path / "work"
    work.mkdir()
    repo = Repo.init(work)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")
        writer.set_value("tag", "gpgsign", "false")

    readme = work / "README.md"
    readme.write_text("# demo\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    remote_path = tmp_path / "remote.git"
    Repo.init(remote_path, bare=True)
    repo.create_remote("origin", str(remote_path))
    return repo


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path
