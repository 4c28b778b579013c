"""Group commits into type and category buckets."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping

from ..records import CommitRecord

logger = logging.getLogger(__name__)

FALLBACK_TYPE = "other"

# type code -> category (first-seen order) -> commits (arrival order)
TypeBuckets = Dict[str, Dict[str, List[CommitRecord]]]


def classify_commits(
    commits: Iterable[CommitRecord],
    taxonomy: Mapping[str, str],
) -> TypeBuckets:
    """Place every commit in exactly one (type, category) bucket.

    Types missing from *taxonomy* are replaced by :data:`FALLBACK_TYPE`.
    """

    buckets: TypeBuckets = {}
    unknown = 0
    for commit in commits:
        effective_type = commit.type if commit.type in taxonomy else FALLBACK_TYPE
        if effective_type != commit.type:
            unknown += 1
        category = commit.category or ""
        if effective_type not in buckets:
            buckets[effective_type] = {}
        categories = buckets[effective_type]
        if category not in categories:
            categories[category] = []
        categories[category].append(commit)

    if unknown:
        logger.debug("Reassigned %d commit(s) to the %r type", unknown, FALLBACK_TYPE)
    return buckets


def ordered_types(buckets: Mapping[str, object]) -> List[str]:
    """Return the type codes of *buckets* in code-point order."""

    return sorted(buckets)


def count_commits(buckets: TypeBuckets) -> int:
    return sum(
        len(section_commits)
        for categories in buckets.values()
        for section_commits in categories.values()
    )
