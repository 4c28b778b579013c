"""Text parsing helpers for changewriter."""

from .delimited import parse_delimited

__all__ = ["parse_delimited"]
