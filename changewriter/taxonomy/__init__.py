"""Commit type taxonomy loading."""

from .loader import (
    TAXONOMY_DELIMITER,
    Taxonomy,
    TaxonomyClient,
    TaxonomyUnavailable,
    build_taxonomy,
    label_for,
    load_taxonomy,
)

__all__ = [
    "TAXONOMY_DELIMITER",
    "Taxonomy",
    "TaxonomyClient",
    "TaxonomyUnavailable",
    "build_taxonomy",
    "label_for",
    "load_taxonomy",
]
