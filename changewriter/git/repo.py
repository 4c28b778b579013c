"""Git repository helpers that turn history into commit records."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List

import git

from ..records import CommitRecord

logger = logging.getLogger(__name__)

_SEMVER_RE = re.compile(r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:[-+].*)?$")
_SUBJECT_RE = re.compile(r"^(?P<type>\w*)(?:\((?P<category>[\w$.\-* ]*)\))?: (?P<subject>.*)$")


def open_repository(root: Path | None = None) -> git.Repo:
    """Open the git repository at *root* (default: current directory)."""

    return git.Repo(root or Path.cwd(), search_parent_directories=True)


def list_tags(repo: git.Repo) -> list[str]:
    """Return repository tags sorted in descending semantic/lexicographic order."""

    tag_names = [tag.name for tag in repo.tags]
    return sorted(tag_names, key=_tag_sort_key, reverse=True)


def latest_tag(repo: git.Repo) -> str | None:
    tags = list_tags(repo)
    return tags[0] if tags else None


def resolve_rev_range(repo: git.Repo, tag: str | None = None) -> str:
    """Return ``<tag>..HEAD`` for *tag* or the newest tag, else ``HEAD``."""

    start = tag or latest_tag(repo)
    if start:
        return f"{start}..HEAD"
    return "HEAD"


def parse_commit_message(sha: str, message: str) -> CommitRecord:
    """Split a raw commit message into a :class:`CommitRecord`.

    Subjects written as ``type(category): text`` populate the type and
    category; anything else is kept whole with an empty type.
    """

    subject_line, _, body = message.strip().partition("\n")
    subject_line = subject_line.strip()
    match = _SUBJECT_RE.match(subject_line)
    if match is None:
        return CommitRecord(hash=sha, subject=subject_line, body=body.strip())
    return CommitRecord(
        hash=sha,
        subject=match.group("subject"),
        body=body.strip(),
        type=match.group("type"),
        category=match.group("category") or "",
    )


def read_commits(
    repo: git.Repo,
    rev_range: str = "HEAD",
    *,
    exclude: Iterable[str] = (),
) -> List[CommitRecord]:
    """Return commit records for *rev_range*, newest first, like ``git log``."""

    excluded = set(exclude)
    records: List[CommitRecord] = []
    for commit in repo.iter_commits(rev_range):
        message = commit.message
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        record = parse_commit_message(commit.hexsha, message)
        if record.type and record.type in excluded:
            continue
        records.append(record)
    logger.debug("Read %d commit(s) from %s", len(records), rev_range)
    return records


def _tag_sort_key(tag_name: str) -> tuple[int, int, int, str]:
    match = _SEMVER_RE.match(tag_name)
    if not match:
        return (0, 0, 0, tag_name)
    major = int(match.group(1)) if match.group(1) else 0
    minor = int(match.group(2)) if match.group(2) else 0
    patch = int(match.group(3)) if match.group(3) else 0
    return (major, minor, patch, tag_name)
