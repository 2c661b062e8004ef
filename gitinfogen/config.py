"""Configuration loading for gitinfogen (.gitinfogen.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .diagnostics import SourceLocation
from .models import TargetDescriptor

CONFIG_FILENAME = ".gitinfogen.yml"
ENV_GIT_EXECUTABLE = "GITINFOGEN_GIT"
DEFAULT_OUTPUT_DIR = Path("obj") / "generated"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GitConfig:
    """How git is invoked."""

    executable: str = "git"


@dataclass
class OutputConfig:
    """Where generated units are written and which templates render them."""

    directory: Path = DEFAULT_OUTPUT_DIR
    templates_dir: Optional[Path] = None


@dataclass
class GitInfoConfig:
    """Represents the settings defined in .gitinfogen.yml."""

    root: Path
    git: GitConfig = field(default_factory=GitConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    targets: List[TargetDescriptor] = field(default_factory=list)


def load_config(config_path: Path) -> GitInfoConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GitInfoConfig(
            root=root,
            git=GitConfig(executable=_default_executable()),
            output=OutputConfig(directory=root / DEFAULT_OUTPUT_DIR),
        )

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    git_data = _as_dict(data.get("git"))
    git = GitConfig(executable=_as_str(git_data.get("executable")) or _default_executable())

    output_data = _as_dict(data.get("output"))
    directory = _as_str(output_data.get("directory"))
    templates_dir = _as_str(output_data.get("templates_dir"))
    output = OutputConfig(
        directory=root / (directory or DEFAULT_OUTPUT_DIR),
        templates_dir=root / templates_dir if templates_dir else None,
    )

    raw_targets = data.get("targets") or []
    if not isinstance(raw_targets, list):
        raise ConfigError("'targets' must be a list")
    targets = [_parse_target(entry, index) for index, entry in enumerate(raw_targets)]

    return GitInfoConfig(root=root, git=git, output=output, targets=targets)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _parse_target(entry: Any, index: int) -> TargetDescriptor:
    if not isinstance(entry, Mapping):
        raise ConfigError(f"targets[{index}] must be a mapping")
    name = _as_str(entry.get("name"))
    if not name:
        raise ConfigError(f"targets[{index}] is missing a name")

    location = None
    location_data = _as_dict(entry.get("location"))
    if location_data:
        path = _as_str(location_data.get("path"))
        if not path:
            raise ConfigError(f"targets[{index}].location is missing a path")
        location = SourceLocation(
            path=path,
            line=_as_int(location_data.get("line"), 1),
            column=_as_int(location_data.get("column"), 1),
        )

    return TargetDescriptor(
        name=name,
        namespace=_as_str(entry.get("namespace")) or "",
        full_name=_as_str(entry.get("full_name")) or "",
        kind=_as_str(entry.get("kind")) or "class",
        type_parameters=tuple(_as_str_list(entry.get("type_parameters"))),
        location=location,
    )


def _default_executable() -> str:
    return os.environ.get(ENV_GIT_EXECUTABLE) or "git"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_int(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Expected an integer, got {value!r}") from exc


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "GitConfig",
    "GitInfoConfig",
    "OutputConfig",
    "load_config",
]
