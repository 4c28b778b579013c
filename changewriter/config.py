"""Configuration loading helpers for changewriter."""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

CONFIG_FILE_NAMES = ("changewriter.config.yml", "changewriter.config.yaml", "urls.json")

TYPES_URL_ENV = "CHANGEWRITER_TYPES_URL"

DEFAULT_CONFIG: Dict[str, Any] = {
    "typesUrl": None,
    "repoUrl": None,
    "exclude": [],
    "file": "CHANGELOG.md",
}


class ConfigError(ValueError):
    """Raised when the configuration is missing a required value."""


@dataclass(slots=True)
class ChangewriterConfig:
    """In-memory representation of the effective configuration."""

    repo_root: Path
    data: Dict[str, Any]
    config_path: Path | None = None

    def get(self, key: str, default: Any | None = None) -> Any:
        return self.data.get(key, default)

    @property
    def types_url(self) -> str:
        url = self.data.get("typesUrl")
        if not url:
            raise ConfigError(
                "No taxonomy feed configured. Set 'typesUrl' in the config file "
                f"or the {TYPES_URL_ENV} environment variable."
            )
        return str(url)

    @property
    def repo_url(self) -> str | None:
        url = self.data.get("repoUrl")
        return str(url) if url else None

    @property
    def exclude(self) -> List[str]:
        raw = self.data.get("exclude") or []
        if isinstance(raw, str):
            raw = raw.split(",")
        return [str(item).strip() for item in raw if str(item).strip()]


def get_config(
    repo_root: Path | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> ChangewriterConfig:
    """Return the effective configuration: defaults, file, environment, CLI."""

    resolved_root = repo_root or _discover_repo_root(Path.cwd())

    merged: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
    file_config, config_file = _load_file_config(resolved_root, config_path)
    if file_config:
        merged.update(file_config)

    env_overrides = _environment_overrides()
    if env_overrides:
        merged.update(env_overrides)

    if cli_overrides:
        merged.update(cli_overrides)

    return ChangewriterConfig(repo_root=resolved_root, data=merged, config_path=config_file)


def _discover_repo_root(start: Path) -> Path:
    """Find the repository root by walking up until a `.git` directory appears."""
    current = start.resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return current


def _load_file_config(root: Path, explicit: str | Path | None) -> tuple[Dict[str, Any], Path | None]:
    if explicit:
        location = (Path(explicit) if Path(explicit).is_absolute() else root / explicit).resolve()
        if not location.is_file():
            raise FileNotFoundError(f"Configuration file not found: {location}")
        return _read_config_file(location), location

    for name in CONFIG_FILE_NAMES:
        location = root / name
        if location.is_file():
            return _read_config_file(location), location
    return {}, None


def _read_config_file(location: Path) -> Dict[str, Any]:
    text = location.read_text(encoding="utf-8")
    try:
        if location.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not parse configuration file {location}: {exc}") from exc
    if not isinstance(data, dict):
        return {}
    return data


def _environment_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    types_url = os.environ.get(TYPES_URL_ENV)
    if types_url:
        overrides["typesUrl"] = types_url
    return overrides
