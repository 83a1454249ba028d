"""Layered configuration service for txsync.

Priority (highest to lowest):
1. CLI flags (--locale, --output-dir, --transform), applied by commands
2. Environment variables (TXSYNC_*, TRANSIFEX_TOKEN), including a .env file
3. Project config (.txsync.toml in current directory)
4. Global config (~/.config/txsync/config.toml)
5. Built-in defaults
"""
from __future__ import annotations

import copy
import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import tomli_w
from dotenv import load_dotenv

from txsync.errors import ConfigError

logger = logging.getLogger("txsync.config")

TRANSFORMS = ("none", "po-to-json")

# Default configuration values
DEFAULTS: dict[str, Any] = {
    "transifex": {
        "api_url": "https://rest.api.transifex.com",
        "token": "",
        "organisation": "",
        "project": "",
        "resource": "",
        "poll_attempts": 10,
        "poll_interval": 1.0,
    },
    "output": {
        "directory": "i18n",
        "transform": "none",
        "nest_locale": False,
    },
    "locales": [],
}

# Mapping of env vars to config paths
ENV_VAR_MAP = {
    "TX_TOKEN": "transifex.token",
    "TRANSIFEX_TOKEN": "transifex.token",
    "TXSYNC_API_URL": "transifex.api_url",
    "TXSYNC_ORGANISATION": "transifex.organisation",
    "TXSYNC_PROJECT": "transifex.project",
    "TXSYNC_RESOURCE": "transifex.resource",
    "TXSYNC_POLL_ATTEMPTS": "transifex.poll_attempts",
    "TXSYNC_POLL_INTERVAL": "transifex.poll_interval",
    "TXSYNC_OUTPUT": "output.directory",
    "TXSYNC_TRANSFORM": "output.transform",
    "TXSYNC_NEST_LOCALE": "output.nest_locale",
    "TXSYNC_LOCALES": "locales",
}

SECRET_KEYS = ("transifex.token",)


def _global_config_dir() -> Path:
    """Return the global config directory: ~/.config/txsync/."""
    return Path.home() / ".config" / "txsync"


def _global_config_path() -> Path:
    """Return the global config file path."""
    return _global_config_dir() / "config.toml"


def _project_config_path() -> Path:
    """Return the project config file path (.txsync.toml in cwd)."""
    return Path.cwd() / ".txsync.toml"


def _read_toml(path: Path) -> dict:
    """Read a TOML file, returning empty dict if missing."""
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", context={"file": str(path)}) from e


def _write_toml(data: dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        tomli_w.dump(data, f)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base (override wins)."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _get_nested(data: dict, dotted_key: str, default: Any = None) -> Any:
    """Get a value from a nested dict using dotted key notation."""
    keys = dotted_key.split(".")
    current = data
    for key in keys:
        if not isinstance(current, dict):
            return default
        current = current.get(key)
        if current is None:
            return default
    return current


def _set_nested(data: dict, dotted_key: str, value: Any) -> None:
    """Set a value in a nested dict using dotted key notation."""
    keys = dotted_key.split(".")
    current = data
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


def split_list(value: str | list | None) -> list[str]:
    """Split comma-separated values into stripped, non-empty items."""
    if not value:
        return []
    if isinstance(value, str):
        value = [value]
    items = [part.strip() for item in value for part in str(item).split(",")]
    return [item for item in items if item]


def _coerce(dotted_key: str, raw: str) -> Any:
    """Convert an env var string to the type of the matching default."""
    if dotted_key == "locales":
        return split_list(raw)
    default = _get_nested(DEFAULTS, dotted_key)
    try:
        if isinstance(default, bool):
            return raw.lower() in ("true", "1", "yes")
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except ValueError as e:
        raise ConfigError(
            f"Invalid value for {dotted_key}: {raw!r}",
            context={"key": dotted_key},
        ) from e
    return raw


@dataclass
class ResolvedConfig:
    """Fully resolved configuration after merging all layers."""
    data: dict = field(default_factory=dict)
    global_config_path: Optional[Path] = None
    project_config_path: Optional[Path] = None

    def get(self, dotted_key: str, default: Any = None) -> Any:
        """Get a config value using dotted key notation."""
        return _get_nested(self.data, dotted_key, default)


class ConfigService:
    """Layered configuration service.

    Resolves config from multiple sources with clear precedence:
    1. Environment variables (TXSYNC_*, TRANSIFEX_TOKEN, .env file)
    2. Project config (.txsync.toml)
    3. Global config (~/.config/txsync/config.toml)
    4. Built-in defaults
    """

    def __init__(self):
        self._resolved: Optional[ResolvedConfig] = None

    def resolve(self, force: bool = False) -> ResolvedConfig:
        """Resolve the full config from all layers."""
        if self._resolved is not None and not force:
            return self._resolved

        merged = copy.deepcopy(DEFAULTS)

        global_path = _global_config_path()
        global_data = _read_toml(global_path)
        if global_data:
            merged = _deep_merge(merged, global_data)
            logger.debug("Loaded global config from %s", global_path)

        project_path = _project_config_path()
        project_data = _read_toml(project_path)
        if project_data:
            merged = _deep_merge(merged, project_data)
            logger.debug("Loaded project config from %s", project_path)

        # Existing environment variables win over .env entries
        env_file = Path.cwd() / ".env"
        if env_file.is_file():
            load_dotenv(env_file, override=False)

        for env_var, config_path in ENV_VAR_MAP.items():
            env_value = os.environ.get(env_var)
            if env_value is not None:
                _set_nested(merged, config_path, _coerce(config_path, env_value))

        merged["locales"] = split_list(merged.get("locales"))

        self._resolved = ResolvedConfig(
            data=merged,
            global_config_path=global_path if global_path.is_file() else None,
            project_config_path=project_path if project_path.is_file() else None,
        )
        return self._resolved

    def get(self, dotted_key: str, default: Any = None) -> Any:
        """Get a resolved config value."""
        return self.resolve().get(dotted_key, default)

    def get_locales(self) -> list[str]:
        return list(self.get("locales", []))

    def get_output_dir(self) -> Path:
        return Path(self.get("output.directory", "i18n")).expanduser()

    def get_transform(self) -> str:
        transform = self.get("output.transform", "none")
        if transform not in TRANSFORMS:
            raise ConfigError(
                f"Unknown transform '{transform}'. Choose from: {', '.join(TRANSFORMS)}",
                context={"transform": transform},
            )
        return transform

    def set_global(self, dotted_key: str, value: Any) -> None:
        """Set a value in the global config file."""
        if _get_nested(DEFAULTS, dotted_key) is None:
            raise ConfigError(f"Unknown config key '{dotted_key}'", context={"key": dotted_key})
        if isinstance(value, str):
            value = _coerce(dotted_key, value)
        path = _global_config_path()
        data = _read_toml(path)
        _set_nested(data, dotted_key, value)
        _write_toml(data, path)
        # Invalidate cache
        self._resolved = None
        logger.info("Set %s in %s", dotted_key, path)

    def init_project_config(self) -> Path:
        """Create a .txsync.toml in the current directory with defaults."""
        path = _project_config_path()
        if path.exists():
            raise ConfigError(f"Project config already exists: {path}", context={"file": str(path)})

        data = {
            "transifex": {
                "organisation": "",
                "project": "",
                "resource": "",
            },
            "output": {
                "directory": "i18n",
                "transform": "po-to-json",
            },
            "locales": [],
        }
        _write_toml(data, path)
        logger.info("Created project config: %s", path)
        return path

    def show(self, redact_keys: bool = True) -> dict:
        """Return the resolved config as a dict, optionally redacting secrets."""
        resolved = self.resolve(force=True)
        data = copy.deepcopy(resolved.data)
        if redact_keys:
            for key in SECRET_KEYS:
                if _get_nested(data, key):
                    _set_nested(data, key, "********")
        return {
            "resolved": data,
            "sources": {
                "global_config": str(resolved.global_config_path) if resolved.global_config_path else None,
                "project_config": str(resolved.project_config_path) if resolved.project_config_path else None,
            },
        }

    def config_paths(self) -> dict[str, str]:
        """Return all config file locations and their existence status."""
        global_path = _global_config_path()
        project_path = _project_config_path()
        env_path = Path.cwd() / ".env"
        return {
            "global_config": f"{global_path} ({'exists' if global_path.is_file() else 'not found'})",
            "project_config": f"{project_path} ({'exists' if project_path.is_file() else 'not found'})",
            "env_file": f"{env_path} ({'exists' if env_path.is_file() else 'not found'})",
        }


# Module-level singleton
_config_service: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """Get or create the global ConfigService instance."""
    global _config_service
    if _config_service is None:
        _config_service = ConfigService()
    return _config_service


def reset_config_service() -> None:
    """Reset the global config service (useful for testing)."""
    global _config_service
    _config_service = None
