"""Run configuration for mirror-status (flags plus optional .mirror-status.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import MirrorStatusError

CONFIG_FILENAME = ".mirror-status.yml"

DEFAULT_AREAS: Sequence[str] = ("prompts", "workflows", "scripts")
DEFAULT_CROSS_LINK_TRIGGERS: Sequence[str] = ("meta-project", "mirror")
DEFAULT_REQUIRED_CROSS_LINKS: Sequence[str] = (
    "START-HERE.md",
    "../../README.md",
    "SYNC-NOTES.md",
)


class ConfigError(MirrorStatusError):
    """Raised when the configuration file cannot be read or parsed."""


@dataclass
class FileConfig:
    """Settings read from .mirror-status.yml; ``None`` means not set."""

    root: Path
    areas: Optional[List[str]] = None
    since: Optional[str] = None
    drift_root: Optional[Path] = None
    cross_link_triggers: Optional[List[str]] = None
    required_cross_links: Optional[List[str]] = None


@dataclass
class ReporterConfig:
    """Resolved inputs for a single reporter run."""

    repo_root: Path
    areas: List[str] = field(default_factory=lambda: list(DEFAULT_AREAS))
    since: Optional[str] = None
    drift_root: Optional[Path] = None
    # Informational only; the reporter never writes to a repository.
    dry_run: bool = True
    cross_link_triggers: List[str] = field(
        default_factory=lambda: list(DEFAULT_CROSS_LINK_TRIGGERS)
    )
    required_cross_links: List[str] = field(
        default_factory=lambda: list(DEFAULT_REQUIRED_CROSS_LINKS)
    )


def parse_areas(value: str | Sequence[str]) -> List[str]:
    """Split a CSV string (or list) into trimmed, non-empty area names."""
    items = value.split(",") if isinstance(value, str) else [str(item) for item in value]
    return [item.strip() for item in items if item.strip()]


def load_config(config_path: Path, *, required: bool = False) -> FileConfig:
    """Load configuration from disk.

    ``config_path`` may be a directory (the file name is appended) or the
    file itself. A missing file yields an empty :class:`FileConfig` unless
    ``required`` is set.
    """
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.is_file():
        if required:
            raise ConfigError(f"Config file not found: {config_file}")
        return FileConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    areas_value = data.get("areas")
    areas = None
    if isinstance(areas_value, (str, list, tuple)):
        areas = parse_areas(areas_value)

    drift_root_str = _as_str(data.get("drift_root"))
    drift_root = root / drift_root_str if drift_root_str else None

    links = _as_dict(data.get("cross_links"))
    triggers = _as_str_list(links.get("triggers")) if "triggers" in links else None
    required_links = _as_str_list(links.get("required")) if "required" in links else None

    return FileConfig(
        root=root,
        areas=areas,
        since=_as_str(data.get("since")),
        drift_root=drift_root,
        cross_link_triggers=triggers,
        required_cross_links=required_links,
    )


def build_config(
    repo_root: Path,
    *,
    areas: str | None = None,
    since: str | None = None,
    drift_root: str | None = None,
    config_path: Path | None = None,
) -> ReporterConfig:
    """Merge command-line values over file settings over built-in defaults."""
    if config_path is not None:
        file_config = load_config(config_path, required=True)
    else:
        file_config = load_config(repo_root / CONFIG_FILENAME)

    config = ReporterConfig(repo_root=repo_root)
    if areas is not None:
        config.areas = parse_areas(areas)
    elif file_config.areas is not None:
        config.areas = file_config.areas

    config.since = since if since else file_config.since

    if drift_root:
        config.drift_root = Path(drift_root)
    else:
        config.drift_root = file_config.drift_root

    if file_config.cross_link_triggers is not None:
        config.cross_link_triggers = file_config.cross_link_triggers
    if file_config.required_cross_links is not None:
        config.required_cross_links = file_config.required_cross_links
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return config_path / CONFIG_FILENAME
    return config_path


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and str(value) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_AREAS",
    "FileConfig",
    "ReporterConfig",
    "build_config",
    "load_config",
    "parse_areas",
]
