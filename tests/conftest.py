from __future__ import annotations

import fnmatch
import shutil
import subprocess
from typing import Dict, List, Optional

import pytest

from clients.git_client import GitCommandError


class FakeGitClient:
    """In-memory git backend; tags are listed oldest first."""

    def __init__(
        self,
        tags: Optional[List[str]] = None,
        logs: Optional[Dict[str, str]] = None,
        remotes: Optional[Dict[str, str]] = None,
        fail_on: Optional[str] = None,
    ) -> None:
        self.tags = list(tags or [])
        self.logs = dict(logs or {})
        self.remotes = dict(remotes or {})
        self.fail_on = fail_on
        self.calls: List[tuple] = []

    def _maybe_fail(self, op: str) -> None:
        if self.fail_on == op:
            raise GitCommandError(f"git {op} failed: boom", args=[op], stderr="boom")

    def describe(self, match: Optional[str] = None) -> Optional[str]:
        self.calls.append(("describe", match))
        for tag in reversed(self.tags):
            if match is None or fnmatch.fnmatchcase(tag, match):
                return tag
        return None

    def log(self, rev: str, pretty: str) -> str:
        self.calls.append(("log", rev))
        return self.logs.get(rev, "")

    def remote_url(self, name: str) -> Optional[str]:
        self.calls.append(("remote_url", name))
        return self.remotes.get(name)

    def add(self, path: str) -> None:
        self.calls.append(("add", path))
        self._maybe_fail("add")

    def commit(self, message: str) -> None:
        self.calls.append(("commit", message))
        self._maybe_fail("commit")

    def tag_annotated(self, name: str, message: str) -> None:
        self.calls.append(("tag", name, message))
        self._maybe_fail("tag")
        self.tags.append(name)

    def mutations(self) -> List[tuple]:
        return [c for c in self.calls if c[0] in ("add", "commit", "tag")]


SAMPLE_LOG = "\n".join(
    [
        "a1 a1full feat: add login",
        "b2 b2full fix(api): handle timeout",
        "c3 c3full random text",
        "d4 d4full feat(api): add health check",
        "e5 e5full docs: update readme",
        "f6 f6full feat: add logout",
    ]
)

REPO_URL = "https://github.com/acme/svc"


@pytest.fixture
def fake_git():
    return FakeGitClient(
        tags=["release-v1.0.0"],
        logs={"release-v1.0.0..release": SAMPLE_LOG},
        remotes={"origin": REPO_URL + ".git"},
    )


def _git(repo, *args: str) -> str:
    proc = subprocess.run(["git", *args], cwd=repo, capture_output=True, text=True, check=True)
    return proc.stdout.strip()


@pytest.fixture
def git():
    return _git


@pytest.fixture
def git_repo(tmp_path):
    """A real repository on branch ``main`` with three commits and no remote."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(repo, "config", "user.name", "Release Bot")
    _git(repo, "config", "user.email", "release@example.com")
    _git(repo, "config", "commit.gpgsign", "false")
    _git(repo, "config", "tag.gpgsign", "false")
    for name, subject in (
        ("a.txt", "feat: add login"),
        ("b.txt", "fix(api): handle timeout"),
        ("c.txt", "random text"),
    ):
        (repo / name).write_text(subject + "\n", encoding="utf-8")
        _git(repo, "add", name)
        _git(repo, "commit", "-q", "-m", subject)
    return repo
