from __future__ import annotations

import datetime as dt
import json
import os
import subprocess
from pathlib import Path

import git
import pytest
import requests

from changewriter.records import CommitRecord

FIXED_DAY = dt.date(2024, 3, 5)

TYPES_FEED = "feat;Features\r\nfix;Bug Fixes\r\ndocs;Documentation\r\nother;Other Changes\r\n"


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the environment doesn't point tests at a real feed."""
    monkeypatch.delenv("CHANGEWRITER_TYPES_URL", raising=False)


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400


class FakeSession:
    """Stands in for ``requests.Session`` and records requested URLs."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response or FakeResponse(TYPES_FEED)
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    def get(self, url: str, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def types_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def failing_session() -> FakeSession:
    return FakeSession(error=requests.ConnectionError("connection refused"))


@pytest.fixture
def taxonomy() -> dict:
    return {
        "feat": "Features",
        "fix": "Bug Fixes",
        "docs": "Documentation",
        "other": "Other Changes",
    }


@pytest.fixture
def make_commit():
    def _make(
        subject: str = "do something",
        *,
        type: str = "feat",
        category: str = "",
        body: str = "",
        hash: str = "0123456789abcdef0123456789abcdef01234567",
    ) -> CommitRecord:
        return CommitRecord(hash=hash, subject=subject, body=body, type=type, category=category)

    return _make


@pytest.fixture
def sample_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    repo_dir = tmp_path / "repo"
    repo = git.Repo.init(repo_dir)
    writer = repo.config_writer()
    writer.set_value("user", "name", "Test User")
    writer.set_value("user", "email", "test@example.com")
    writer.release()

    def commit(message: str, content: str) -> None:
        path = repo_dir / "notes.txt"
        path.write_text(content, encoding="utf-8")
        repo.index.add(["notes.txt"])
        repo.index.commit(message)

    commit("chore: initial commit", "seed")
    repo.create_tag("v0.1.0")

    commit("feat(api): add search endpoint", "feature work")
    commit("fix(api): handle empty query\n\nCloses #12", "fix work")
    commit("docs: update quickstart", "docs work")
    commit("tidy things up", "misc work")

    # Nothing listens on the discard port, so the feed fetch fails fast.
    (repo_dir / "urls.json").write_text(
        json.dumps({"typesUrl": "http://127.0.0.1:9/types.csv"}),
        encoding="utf-8",
    )

    monkeypatch.chdir(repo_dir)
    return repo_dir


@pytest.fixture
def run_cli(sample_repo: Path):
    def _run(*args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        env = os.environ.copy()
        env["PYTHONPATH"] = f"{Path(__file__).resolve().parents[1]}:{env.get('PYTHONPATH', '')}".rstrip(":")
        cmd = [os.sys.executable, "-m", "changewriter.cli", *args]
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=check,
            env=env,
        )

    return _run


@pytest.fixture
def make_session():
    def _make(text: str = TYPES_FEED, status_code: int = 200) -> FakeSession:
        return FakeSession(FakeResponse(text, status_code=status_code))

    return _make
