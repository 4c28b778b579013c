"""Fetch the commit type taxonomy and turn it into a code -> label map."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Sequence

import requests

from ..parsing.delimited import parse_delimited

logger = logging.getLogger(__name__)

TAXONOMY_DELIMITER = ";"

Taxonomy = Dict[str, str]


class TaxonomyUnavailable(RuntimeError):
    """Raised when the taxonomy feed cannot be retrieved."""


class TaxonomyClient:
    """Blocking HTTP client for the taxonomy feed."""

    def __init__(self, *, session: requests.Session | None = None, timeout: float = 10) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout

    def fetch_text(self, url: str) -> str:
        """Return the raw feed body or raise :class:`TaxonomyUnavailable`."""

        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise TaxonomyUnavailable(f"Failed to fetch taxonomy from {url}: {exc}") from exc
        if not response.ok:
            raise TaxonomyUnavailable(
                f"Taxonomy endpoint {url} answered with HTTP {response.status_code}"
            )
        return response.text

    def load(self, url: str) -> Taxonomy:
        rows = parse_delimited(self.fetch_text(url), TAXONOMY_DELIMITER)
        taxonomy = build_taxonomy(rows)
        logger.debug("Loaded %d commit types from %d rows", len(taxonomy), len(rows))
        return taxonomy


def build_taxonomy(rows: Iterable[Sequence[str]]) -> Taxonomy:
    """Map the first column of each row to the second, skipping empty codes."""

    taxonomy: Taxonomy = {}
    for row in rows:
        if not row or not row[0]:
            continue
        taxonomy[row[0]] = row[1] if len(row) > 1 else ""
    return taxonomy


def load_taxonomy(
    url: str,
    *,
    session: requests.Session | None = None,
    strict: bool = False,
) -> Taxonomy:
    """Fetch and parse the taxonomy at *url*.

    A failed fetch yields an empty taxonomy unless *strict* is set, in which
    case :class:`TaxonomyUnavailable` propagates.
    """

    client = TaxonomyClient(session=session)
    try:
        return client.load(url)
    except TaxonomyUnavailable as exc:
        if strict:
            raise
        logger.warning("%s; every commit will be listed as unrecognised", exc)
        return {}


def label_for(taxonomy: Mapping[str, str], code: str) -> str:
    """Return the display label for *code*, falling back to the code itself."""

    return taxonomy.get(code) or code
