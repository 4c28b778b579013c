"""Parser for delimiter-separated text such as CSV feeds."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List

DEFAULT_DELIMITER = ","

_RESERVED_CHARACTERS = frozenset('"\r\n')


@lru_cache(maxsize=8)
def _field_pattern(delimiter: str) -> re.Pattern[str]:
    escaped = re.escape(delimiter)
    return re.compile(
        # Field or row separator; empty only at the start of input.
        rf"({escaped}|\r?\n|\r|^)"
        # Quoted field, with "" standing for a literal quote.
        r'(?:"([^"]*(?:""[^"]*)*)"|'
        # Bare field.
        rf'([^"{escaped}\r\n]*))'
    )


def parse_delimited(text: str, delimiter: str = DEFAULT_DELIMITER) -> List[List[str]]:
    """Split *text* into rows of string fields.

    Row breaks are ``\\r``, ``\\n`` or ``\\r\\n``. Quoted fields may contain the
    delimiter and row breaks. Malformed *text* never raises; whatever could be
    matched is returned. An unusable *delimiter* (not one character, or a
    quote or row-break character) raises :class:`ValueError`.
    """

    if len(delimiter) != 1 or delimiter in _RESERVED_CHARACTERS:
        raise ValueError(
            f"Delimiter must be a single character other than a quote or row break, got {delimiter!r}"
        )

    rows: List[List[str]] = [[]]
    if not text:
        return rows

    for match in _field_pattern(delimiter).finditer(text):
        marker, quoted, bare = match.groups()
        if marker and marker != delimiter:
            rows.append([])

        if quoted is not None:
            value = quoted.replace('""', '"')
        else:
            value = bare or ""
        rows[-1].append(value)
    return rows
