"""Extraction of structured annotations embedded in commit bodies."""

from __future__ import annotations

import re
from dataclasses import dataclass

_BREAKING_CHANGE_RE = re.compile(r"BREAKING CHANGE: (?P<text>.*)")
_CLOSES_RE = re.compile(r"Closes #(?P<text>.*)")


@dataclass(frozen=True, slots=True)
class CommitAnnotations:
    """Annotations found in a commit body; ``None`` when absent."""

    breaking_change: str | None = None
    closes_issue: str | None = None


def extract_annotations(body: str | None) -> CommitAnnotations:
    """Return the breaking-change and closes annotations found in *body*.

    Both tokens are case-sensitive literal prefixes and their text runs to
    the end of the line.
    """

    if not body:
        return CommitAnnotations()
    return CommitAnnotations(
        breaking_change=_first_match(_BREAKING_CHANGE_RE, body),
        closes_issue=_first_match(_CLOSES_RE, body),
    )


def _first_match(pattern: re.Pattern[str], body: str) -> str | None:
    match = pattern.search(body)
    if match is None:
        return None
    return match.group("text").rstrip("\r\n")
