"""End-to-end changelog generation: taxonomy, classification, markdown."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Iterable, Mapping

import requests

from .classify.buckets import classify_commits, count_commits
from .outputs.md_out import RenderOptions, build_markdown
from .records import CommitRecord
from .taxonomy.loader import load_taxonomy

logger = logging.getLogger(__name__)


def render_changelog(
    commits: Iterable[CommitRecord | Mapping[str, Any]],
    taxonomy: Mapping[str, str],
    options: RenderOptions | Mapping[str, Any],
    *,
    today: dt.date | None = None,
) -> str:
    """Classify *commits* against an already resolved *taxonomy* and render them."""

    records = [_as_record(commit) for commit in commits]
    render_options = options if isinstance(options, RenderOptions) else RenderOptions.from_mapping(options)
    buckets = classify_commits(records, taxonomy)
    logger.debug("Rendering %d commit(s) across %d type(s)", count_commits(buckets), len(buckets))
    return build_markdown(buckets, taxonomy, render_options, today=today)


def write_markdown(
    commits: Iterable[CommitRecord | Mapping[str, Any]],
    options: RenderOptions | Mapping[str, Any],
    *,
    types_url: str,
    session: requests.Session | None = None,
    strict: bool = False,
    today: dt.date | None = None,
) -> str:
    """Fetch the taxonomy at *types_url*, then render the changelog fragment.

    The fetch completes before any commit is classified.
    """

    taxonomy = load_taxonomy(types_url, session=session, strict=strict)
    return render_changelog(commits, taxonomy, options, today=today)


def _as_record(commit: CommitRecord | Mapping[str, Any]) -> CommitRecord:
    if isinstance(commit, CommitRecord):
        return commit
    return CommitRecord.from_mapping(commit)
