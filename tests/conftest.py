"""Pytest configuration and fixtures for commit helper tests."""

import subprocess
from pathlib import Path
from typing import Generator

import pytest

from commit_helper import config


@pytest.fixture(autouse=True)
def git_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Pin identity and locale for child git processes and stop repo discovery at tmp_path."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", "/dev/null")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("LC_ALL", "C")
    monkeypatch.delenv("GIT_EXECUTABLE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("MCP_TRANSPORT", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Drop cached settings so each test sees its own environment."""
    config._settings = None
    yield
    config._settings = None


def git(repo: Path, *args: str) -> str:
    """Run git in ``repo`` and return stdout, failing the test on error."""
    return subprocess.run(
        ["git", *args],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    ).stdout


@pytest.fixture
def empty_repo(tmp_path: Path) -> Path:
    """A freshly initialized repository with no commits."""
    repo_path = tmp_path / "empty_repo"
    repo_path.mkdir()
    git(repo_path, "init", "-q")
    return repo_path


@pytest.fixture
def git_repo(empty_repo: Path) -> Path:
    """A repository with a single commit "init" adding README.md."""
    (empty_repo / "README.md").write_text("# Test Repository\n")
    git(empty_repo, "add", "README.md")
    git(empty_repo, "commit", "-q", "-m", "init")
    return empty_repo


@pytest.fixture
def plain_dir(tmp_path: Path) -> Path:
    """A directory that is not inside any repository."""
    path = tmp_path / "plain"
    path.mkdir()
    return path
