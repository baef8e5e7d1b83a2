"""Configuration loading for wavegen (.wavegen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .annotations import DEFAULT_VECTOR_TYPES
from .render import DEFAULT_PREFIX_TEMPLATE

CONFIG_FILENAME = ".wavegen.yml"
DEFAULT_INCLUDE = ("*.vhd", "*.vhdl")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SourcesConfig:
    """Which files under the source folder are considered."""

    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))
    exclude_paths: List[str] = field(default_factory=list)


@dataclass
class WavegenConfig:
    """Represents the settings defined in .wavegen.yml."""

    root: Path
    signal_prefix: str = DEFAULT_PREFIX_TEMPLATE
    vector_types: List[str] = field(default_factory=lambda: list(DEFAULT_VECTOR_TYPES))
    zoom_fit: bool = False
    explicit_decimal: bool = True
    encoding: str = "latin-1"
    templates_dir: Optional[Path] = None
    sources: SourcesConfig = field(default_factory=SourcesConfig)


def load_config(config_path: Path) -> WavegenConfig:
    """Load configuration from a folder or an explicit config file."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return WavegenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = WavegenConfig(root=root)

    prefix = _as_str(data.get("signal_prefix"))
    if prefix is not None:
        config.signal_prefix = prefix

    vector_types = _as_str_list(data.get("vector_types"))
    if vector_types:
        config.vector_types = vector_types

    zoom_fit = _as_bool(data.get("zoom_fit"))
    if zoom_fit is not None:
        config.zoom_fit = zoom_fit

    explicit_decimal = _as_bool(data.get("explicit_decimal"))
    if explicit_decimal is not None:
        config.explicit_decimal = explicit_decimal

    encoding = _as_str(data.get("encoding"))
    if encoding:
        config.encoding = encoding

    templates_dir = _as_str(data.get("templates_dir"))
    if templates_dir:
        config.templates_dir = root / templates_dir

    sources_data = _as_dict(data.get("sources"))
    if sources_data:
        include = _as_str_list(sources_data.get("include"))
        if include:
            config.sources.include = include
        config.sources.exclude_paths = _as_str_list(sources_data.get("exclude_paths"))

    return config


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
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


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
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "SourcesConfig", "WavegenConfig", "load_config"]
