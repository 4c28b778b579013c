"""Commit record shared by ingestion, classification and rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(slots=True)
class CommitRecord:
    """A parsed commit ready to be classified."""

    hash: str
    subject: str
    body: str = ""
    type: str = ""
    category: str = ""

    def __post_init__(self) -> None:
        # Missing category and body both mean "empty", never an error.
        if self.category is None:
            self.category = ""
        if self.body is None:
            self.body = ""

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "CommitRecord":
        return cls(
            hash=str(payload.get("hash", "")),
            subject=str(payload.get("subject", "")),
            body=payload.get("body") or "",
            type=str(payload.get("type") or ""),
            category=payload.get("category") or "",
        )

    @property
    def short_hash(self) -> str:
        return self.hash[:8]

    def to_dict(self) -> dict:
        return {
            "hash": self.hash,
            "subject": self.subject,
            "body": self.body,
            "type": self.type,
            "category": self.category,
        }
