"""Configuration loading for docly (.docly.yml)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".docly.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class FrameworkConfig:
    """Names of the application and router factories to recognise."""

    factory: str = "express"
    router_factory: str = "Router"


@dataclass
class OutputConfig:
    """File names for the rendered documents."""

    json: str = "output.json"
    html: str = "apidoc.html"


@dataclass
class DoclyConfig:
    """Represents the settings defined in .docly.yml."""

    excluded: List[str] = field(default_factory=lambda: ["node_modules"])
    extensions: List[str] = field(default_factory=lambda: [".js", ".ts"])
    framework: FrameworkConfig = field(default_factory=FrameworkConfig)
    description_marker: str = "--Docly--"
    resolve_mounts: bool = False
    output: OutputConfig = field(default_factory=OutputConfig)
    source: Optional[Path] = None


def load_config(config_path: Path | None = None) -> DoclyConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return DoclyConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    config = DoclyConfig(source=config_file)

    if "excluded" in data:
        config.excluded = _as_str_list(data.get("excluded"))

    extensions = _as_str_list(data.get("extensions"))
    if extensions:
        config.extensions = [ext if ext.startswith(".") else f".{ext}" for ext in extensions]

    framework_data = _as_dict(data.get("framework"))
    if framework_data:
        config.framework = FrameworkConfig(
            factory=_as_str(framework_data.get("factory")) or "express",
            router_factory=_as_str(framework_data.get("router_factory")) or "Router",
        )

    marker = _as_str(data.get("description_marker"))
    if marker:
        config.description_marker = marker

    resolve_mounts = _as_bool(data.get("resolve_mounts"))
    if resolve_mounts is not None:
        config.resolve_mounts = resolve_mounts

    output_data = _as_dict(data.get("output"))
    if output_data:
        config.output = OutputConfig(
            json=_as_str(output_data.get("json")) or "output.json",
            html=_as_str(output_data.get("html")) or "apidoc.html",
        )

    return config


def _resolve_config_path(config_path: Path | None) -> Path:
    if config_path is None:
        return (Path.cwd() / CONFIG_FILENAME).resolve()
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    if path.suffix.lower() == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["ConfigError", "DoclyConfig", "FrameworkConfig", "OutputConfig", "load_config"]
