"""Generate changelog fragments from classified commit history."""

__version__ = "0.1.0"
