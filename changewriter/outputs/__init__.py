"""Output renderers for changewriter."""

from .md_out import RenderOptions, build_markdown, commit_url

__all__ = ["RenderOptions", "build_markdown", "commit_url"]
