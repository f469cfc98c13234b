"""Configuration for the greeting and profile services."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import yaml
from dotenv import load_dotenv

from .database import resolve_database_path

DEFAULT_HOST = "0.0.0.0"
DEFAULT_GREETING_PORT = 3001
DEFAULT_PROFILE_PORT = 3002

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "TRACE")

_ENV_KEYS: Dict[str, str] = {
    "host": "USERHUB_HOST",
    "greeting_port": "USERHUB_GREETING_PORT",
    "profile_port": "USERHUB_PROFILE_PORT",
    "database_path": "USERHUB_DB_PATH",
    "cors_origins": "USERHUB_CORS_ORIGINS",
    "log_level": "USERHUB_LOG_LEVEL",
}


@dataclass(frozen=True)
class Settings:
    """Runtime settings shared by both services."""

    database_path: Path
    host: str = DEFAULT_HOST
    greeting_port: int = DEFAULT_GREETING_PORT
    profile_port: int = DEFAULT_PROFILE_PORT
    cors_origins: Tuple[str, ...] = field(default=("*",))
    log_level: str = "INFO"

    def port_for(self, service: str) -> int:
        if service == "greeting":
            return self.greeting_port
        if service == "profile":
            return self.profile_port
        raise ValueError(f"Unknown service '{service}'")


def _parse_port(value: object, key: str) -> int:
    try:
        port = int(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {value!r}") from exc
    if not 0 < port < 65536:
        raise ValueError(f"{key} must be between 1 and 65535, got {port}")
    return port


def _parse_log_level(value: object) -> str:
    level = str(value).strip().upper() or "INFO"
    if level not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
    return level


def _parse_origins(value: object) -> Tuple[str, ...]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    else:
        raise ValueError("cors_origins must be a string or a list of strings")
    origins = tuple(item.strip() for item in items if item.strip())
    return origins or ("*",)


def _apply(settings: Settings, raw: Mapping[str, object], *, base_path: Path | None = None) -> Settings:
    updates: Dict[str, object] = {}
    for key, value in raw.items():
        if value is None:
            continue
        if key == "host":
            updates["host"] = str(value).strip() or DEFAULT_HOST
        elif key in {"greeting_port", "profile_port"}:
            updates[key] = _parse_port(value, key)
        elif key == "database_path":
            candidate = Path(str(value)).expanduser()
            if not candidate.is_absolute() and base_path is not None:
                candidate = base_path / candidate
            updates["database_path"] = resolve_database_path(str(candidate))
        elif key == "cors_origins":
            updates["cors_origins"] = _parse_origins(value)
        elif key == "log_level":
            updates["log_level"] = _parse_log_level(value)
        else:
            raise ValueError(f"Unknown configuration key '{key}'")
    return replace(settings, **updates)


def load_config_file(config_path: Path) -> Dict[str, object]:
    """Read settings overrides from a YAML file."""
    with config_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raise ValueError("Configuration file must contain a mapping at the top level")
    return raw


def load_settings(
    *,
    env_file: Optional[Path] = None,
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build :class:`Settings` from defaults, an optional YAML file and the environment.

    Values already present in the environment take precedence over the
    ``.env`` file, and both take precedence over the YAML file.
    """

    if environ is None:
        load_dotenv(env_file, override=False)
        environ = os.environ

    settings = Settings(database_path=resolve_database_path(None))

    if config_path is None and environ.get("USERHUB_CONFIG"):
        config_path = Path(environ["USERHUB_CONFIG"]).expanduser()
    if config_path is not None:
        settings = _apply(settings, load_config_file(config_path), base_path=config_path.parent)

    env_values = {key: environ.get(name) or None for key, name in _ENV_KEYS.items()}
    return _apply(settings, env_values)


__all__ = [
    "DEFAULT_GREETING_PORT",
    "DEFAULT_HOST",
    "DEFAULT_PROFILE_PORT",
    "LOG_LEVELS",
    "Settings",
    "load_config_file",
    "load_settings",
]
