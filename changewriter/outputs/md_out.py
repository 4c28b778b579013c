"""Markdown writer for classified commits."""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from typing import List, Mapping, Sequence

from ..classify.annotations import extract_annotations
from ..classify.buckets import TypeBuckets, ordered_types
from ..records import CommitRecord
from ..taxonomy.loader import label_for

_PULL_REQUEST_RE = re.compile(r"#(?P<number>\d+)")

SECTION_HEADING = "#####"


@dataclass(slots=True)
class RenderOptions:
    """Heading level, version label and link target for a changelog."""

    version: str | None = None
    major: bool = False
    minor: bool = False
    patch: bool = False
    repo_url: str | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object]) -> "RenderOptions":
        return cls(
            version=_optional_str(payload.get("version")),
            major=bool(payload.get("major", False)),
            minor=bool(payload.get("minor", False)),
            patch=bool(payload.get("patch", False)),
            repo_url=_optional_str(payload.get("repoUrl", payload.get("repo_url"))),
        )


def heading_prefix(options: RenderOptions) -> str:
    if options.major:
        return "##"
    if options.minor:
        return "###"
    return "####"


def build_heading(options: RenderOptions, today: dt.date) -> str:
    date = today.isoformat()
    if options.version:
        return f"{heading_prefix(options)} {options.version} ({date})"
    return f"{heading_prefix(options)} {date}"


def commit_url(base_url: str, commit_hash: str) -> str:
    """Return the provider page for *commit_hash* under *base_url*."""

    segment = "commits" if "bitbucket" in base_url else "commit"
    if "gitlab" in base_url and base_url.endswith(".git"):
        base_url = base_url[: -len(".git")]
    return f"{base_url}/{segment}/{commit_hash}"


def link_pull_requests(subject: str, repo_url: str) -> str:
    """Turn every ``#123`` in *subject* into a pull request link."""

    return _PULL_REQUEST_RE.sub(
        lambda match: f"[{match.group(0)}]({repo_url}/pull/{match.group('number')})",
        subject,
    )


def render_commit_line(prefix: str, commit: CommitRecord, repo_url: str | None = None) -> str:
    annotations = extract_annotations(commit.body)
    shorthash = commit.short_hash
    subject = commit.subject

    if repo_url:
        shorthash = f"[{shorthash}]({commit_url(repo_url, commit.hash)})"
        subject = link_pull_requests(subject, repo_url)

    closes = f"({annotations.closes_issue})" if annotations.closes_issue is not None else ""
    breaking = ""
    if annotations.breaking_change is not None:
        breaking = f"\n\t* breaking changes: {annotations.breaking_change}"

    return f"{prefix} {subject} ({shorthash}) {closes}{breaking}"


def render_category(category: str, commits: Sequence[CommitRecord], repo_url: str | None) -> List[str]:
    lines: List[str] = []
    category_heading = f"* **{category}:**" if category else "*"

    if category and len(commits) > 1:
        lines.append(category_heading)
        prefix = "  *"
    else:
        prefix = category_heading

    for commit in commits:
        lines.append(render_commit_line(prefix, commit, repo_url))
    return lines


def build_markdown(
    buckets: TypeBuckets,
    taxonomy: Mapping[str, str],
    options: RenderOptions,
    *,
    today: dt.date | None = None,
) -> str:
    """Render *buckets* as a newline-joined markdown fragment.

    Sections follow type code order, categories keep first-seen order and
    commits keep arrival order.
    """

    today = today or dt.datetime.now(dt.timezone.utc).date()
    lines: List[str] = [build_heading(options, today), ""]

    for type_code in ordered_types(buckets):
        lines.append(f"{SECTION_HEADING} {label_for(taxonomy, type_code)}")
        lines.append("")
        for category, commits in buckets[type_code].items():
            lines.extend(render_category(category, commits, options.repo_url))
        lines.append("")

    lines.append("")
    return "\n".join(lines)


def _optional_str(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
