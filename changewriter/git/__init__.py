"""Git helpers that produce commit records."""

from .repo import latest_tag, list_tags, open_repository, parse_commit_message, read_commits, resolve_rev_range

__all__ = [
    "latest_tag",
    "list_tags",
    "open_repository",
    "parse_commit_message",
    "read_commits",
    "resolve_rev_range",
]
