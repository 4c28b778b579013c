"""Command line interface for changewriter."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import __version__
from .config import ChangewriterConfig, ConfigError, get_config
from .git.repo import open_repository, read_commits, resolve_rev_range
from .outputs.md_out import RenderOptions
from .taxonomy.loader import TaxonomyUnavailable
from .writer import write_markdown

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="changewriter",
        description="Generate a markdown changelog fragment from git history.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"changewriter {__version__}",
        help="Show the version and exit.",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        help="Path to a changewriter.config.yml or urls.json file.",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Set the logging level for diagnostics.",
    )
    parser.add_argument(
        "--repo-root",
        type=Path,
        default=None,
        help="Explicitly set the repository root (defaults to auto-detect).",
    )

    level_group = parser.add_mutually_exclusive_group()
    level_group.add_argument(
        "-p",
        "--patch",
        action="store_true",
        help="Create a patch changelog (deepest heading).",
    )
    level_group.add_argument(
        "-m",
        "--minor",
        action="store_true",
        help="Create a minor changelog.",
    )
    level_group.add_argument(
        "-M",
        "--major",
        action="store_true",
        help="Create a major changelog.",
    )

    parser.add_argument(
        "--release-version",
        dest="release_version",
        help="Version label to put in the changelog heading.",
    )
    parser.add_argument(
        "-t",
        "--tag",
        dest="tag",
        help="Generate the changelog since this tag (defaults to the newest tag).",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        dest="exclude",
        help="Comma separated commit types to leave out.",
    )
    parser.add_argument(
        "-u",
        "--repo-url",
        dest="repo_url",
        help="Repository URL used to link commits and pull requests.",
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="file",
        help="Changelog file to prepend to; use '-' to print to stdout.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Fail when the commit type list cannot be fetched.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the changewriter CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level)

    try:
        config = get_config(
            repo_root=args.repo_root,
            cli_overrides=_collect_cli_overrides(args),
            config_path=args.config_path,
        )
        types_url = config.types_url
    except (FileNotFoundError, ConfigError) as exc:
        parser.error(str(exc))

    try:
        repo = open_repository(config.repo_root)
        rev_range = resolve_rev_range(repo, args.tag)
        commits = read_commits(repo, rev_range, exclude=config.exclude)
    except Exception as exc:  # pragma: no cover - depends on the local repository
        parser.error(f"Failed to read git history: {exc}")

    options = RenderOptions(
        version=args.release_version,
        major=args.major,
        minor=args.minor,
        patch=args.patch,
        repo_url=config.repo_url,
    )
    try:
        fragment = write_markdown(commits, options, types_url=types_url, strict=args.strict)
    except TaxonomyUnavailable as exc:
        parser.error(str(exc))

    _write_output(config, fragment)
    return 0


def _collect_cli_overrides(args: argparse.Namespace) -> dict:
    overrides: dict = {}
    if args.repo_url:
        overrides["repoUrl"] = args.repo_url
    if args.exclude:
        overrides["exclude"] = [item.strip() for item in args.exclude.split(",") if item.strip()]
    if args.file:
        overrides["file"] = args.file
    return overrides


def _write_output(config: ChangewriterConfig, fragment: str) -> None:
    target = str(config.get("file") or "-")
    if target == "-":
        sys.stdout.write(fragment)
        return

    path = Path(target)
    if not path.is_absolute():
        path = config.repo_root / path
    existing = path.read_text(encoding="utf-8") if path.is_file() else ""
    path.write_text(fragment + existing, encoding="utf-8")
    logger.info("Wrote changelog to %s", path)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
