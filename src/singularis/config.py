"""Singularis configuration management.

Loads configuration from .singularis/config.yaml with sensible defaults.
All settings can be overridden via environment variables (SINGULARIS_*).

Config locations (in priority order):
1. Explicit path passed to load_config()
2. .singularis/config.yaml (project-local)
3. ~/.singularis/config.yaml (user-global)
4. Built-in defaults
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import Field, asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from singularis.core.errors import config_error

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = 5000
    dev_mode: bool = False
    """Enable CORS for the Vite dev server."""

    cors_origins: list[str] = field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"]
    )


@dataclass
class MonitorConfig:
    """AI monitoring WebSocket settings."""

    auth_required: bool = True
    max_connections: int = 100
    send_timeout: float = 1.0
    """Seconds before a slow consumer is dropped."""
    heartbeat_interval: float = 30.0
    """Seconds between stale-client sweeps. Clients idle for two intervals are closed."""


@dataclass
class RuntimeConfig:
    """Interpreter and simulation settings."""

    seed: int | None = None
    """Seed for the shared random generator. None means nondeterministic."""

    default_qkd_bits: int = 256


@dataclass
class DocsConfig:
    """Documentation generator settings."""

    source_dirs: list[str] = field(default_factory=lambda: ["src"])
    output_dir: str = "docs"
    html: bool = True


@dataclass
class SingularisConfig:
    """Root configuration for Singularis."""

    server: ServerConfig = field(default_factory=ServerConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    docs: DocsConfig = field(default_factory=DocsConfig)
    debug: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


_SECTIONS: dict[str, type] = {
    "server": ServerConfig,
    "monitor": MonitorConfig,
    "runtime": RuntimeConfig,
    "docs": DocsConfig,
}

# Global config instance (lazy-loaded, thread-safe)
_config: SingularisConfig | None = None
_config_lock = threading.Lock()


def _deep_update(base: dict, updates: dict) -> dict:
    """Recursively update a dict with another dict."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def _coerce(value: str) -> Any:
    """Coerce an environment string to bool, int, float, list or str."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    try:
        return float(value)
    except ValueError:
        pass
    if "," in value:
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


def _is_list_field(f: Field[Any]) -> bool:
    return callable(f.default_factory) and isinstance(f.default_factory(), list)


def _apply_env_overrides(config_dict: dict, environ: dict[str, str] | None = None) -> dict:
    """Apply environment variable overrides.

    Environment variables follow pattern: SINGULARIS_<SECTION>_<KEY>

    Examples:
        SINGULARIS_SERVER_PORT=8080
        SINGULARIS_MONITOR_AUTH_REQUIRED=false
        SINGULARIS_DOCS_SOURCE_DIRS=src,scripts
    """
    prefix = "SINGULARIS_"
    environ = os.environ if environ is None else environ

    for key, value in environ.items():
        if not key.startswith(prefix):
            continue

        path_str = key[len(prefix):].lower()
        if path_str == "debug":
            config_dict["debug"] = _coerce(value)
            continue

        for section, section_type in _SECTIONS.items():
            if not path_str.startswith(section + "_"):
                continue
            field_name = path_str[len(section) + 1:]
            known = {f.name: f for f in fields(section_type)}
            if field_name in known:
                coerced = _coerce(value)
                if _is_list_field(known[field_name]) and not isinstance(coerced, list):
                    coerced = [value.strip()]
                config_dict.setdefault(section, {})[field_name] = coerced
            else:
                logger.debug("Ignoring unknown config override %s", key)
            break

    return config_dict


def _dict_to_config(data: dict) -> SingularisConfig:
    """Convert a dict to SingularisConfig."""
    sections: dict[str, Any] = {}
    for section, section_type in _SECTIONS.items():
        raw = data.get(section) or {}
        if not isinstance(raw, dict):
            raise config_error(section, "expected a mapping")
        try:
            sections[section] = section_type(**raw)
        except TypeError as e:
            raise config_error(section, str(e)) from e

    return SingularisConfig(**sections, debug=bool(data.get("debug", False)))


def _candidate_paths(path: str | Path | None) -> list[Path]:
    if path is not None:
        return [Path(path)]
    return [
        Path.cwd() / ".singularis" / "config.yaml",
        Path.home() / ".singularis" / "config.yaml",
    ]


def load_config(path: str | Path | None = None) -> SingularisConfig:
    """Load configuration from file with defaults and env overrides.

    Priority (highest to lowest):
    1. Environment variables (SINGULARIS_*)
    2. Explicit path if provided
    3. .singularis/config.yaml (project-local)
    4. ~/.singularis/config.yaml (user-global)
    5. Built-in defaults

    Args:
        path: Optional explicit config file path.

    Returns:
        Merged SingularisConfig instance.
    """
    global _config

    config_dict: dict[str, Any] = SingularisConfig().to_dict()

    for candidate in _candidate_paths(path):
        if not candidate.exists():
            continue
        try:
            loaded = yaml.safe_load(candidate.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise config_error(str(candidate), str(e)) from e
        if not isinstance(loaded, dict):
            raise config_error(str(candidate), "top level must be a mapping")
        _deep_update(config_dict, loaded)
        logger.debug("Loaded config from %s", candidate)
        break

    _apply_env_overrides(config_dict)

    config = _dict_to_config(config_dict)
    with _config_lock:
        _config = config
    return config


def get_config() -> SingularisConfig:
    """Get the global config, loading it on first use."""
    if _config is None:
        return load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config (mainly for tests)."""
    global _config
    with _config_lock:
        _config = None
