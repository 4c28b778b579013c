"""Commit classification into (type, category) buckets."""

from .annotations import CommitAnnotations, extract_annotations
from .buckets import FALLBACK_TYPE, TypeBuckets, classify_commits, count_commits, ordered_types

__all__ = [
    "CommitAnnotations",
    "extract_annotations",
    "FALLBACK_TYPE",
    "TypeBuckets",
    "classify_commits",
    "count_commits",
    "ordered_types",
]
