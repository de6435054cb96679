"""Configuration loaded from the config directory and the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_TIMEZONE = "Asia/Singapore"
DEFAULT_REMINDER_MINUTES = 15
DEFAULT_REDIRECT_PORT = 9999

_CONFIG_FILE_NAMES = ("config.yaml", "config.yml")


class ConfigError(Exception):
    """Raised when the configuration cannot be set up or read."""


@dataclass(frozen=True)
class Config:
    """Settings for the command line tool."""

    config_dir: Path
    app_id: str = ""
    app_secret: str = ""
    timezone: str = DEFAULT_TIMEZONE
    reminder_minutes: int = DEFAULT_REMINDER_MINUTES
    redirect_port: int = DEFAULT_REDIRECT_PORT

    @property
    def root_dir(self) -> Path:
        """The directory that holds the config directory."""
        return self.config_dir.parent

    def tokens_file_path(self) -> Path:
        """Path of the user tokens file."""
        return self.config_dir / "tokens.json"

    def tenant_tokens_file_path(self) -> Path:
        """Path of the tenant tokens file."""
        return self.config_dir / "tenant_tokens.json"


def _lower_keys(value: Any, section: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"failed to unmarshal config: '{section}' must be a mapping")
    return {str(key).lower(): item for key, item in value.items()}


def _read_config_file(config_dir: Path) -> dict[str, Any]:
    for name in _CONFIG_FILE_NAMES:
        path = config_dir / name
        if not path.is_file():
            continue
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"error reading config: {exc}") from exc
        if data is not None and not isinstance(data, Mapping):
            raise ConfigError("error reading config: top level must be a mapping")
        return _lower_keys(data, "config")
    return {}


def _as_int(value: Any, key: str, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"failed to unmarshal config: {key}: {exc}") from exc


def _as_str(value: Any, default: str = "") -> str:
    return default if value is None else str(value)


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Create the config directory if needed and load the configuration.

    The directory comes from LARK_CONFIG_DIR, or LARK_CAL_CONFIG_DIR.
    LARK_APP_ID and LARK_APP_SECRET override values from the file.
    """
    env = os.environ if environ is None else environ
    raw_dir = env.get("LARK_CONFIG_DIR") or env.get("LARK_CAL_CONFIG_DIR")
    if not raw_dir:
        raise ConfigError("LARK_CONFIG_DIR environment variable is not set")

    config_dir = Path(raw_dir)
    try:
        config_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"failed to create config directory: {exc}") from exc

    data = _read_config_file(config_dir)
    defaults = _lower_keys(data.get("defaults"), "defaults")
    oauth = _lower_keys(data.get("oauth"), "oauth")

    return Config(
        config_dir=config_dir,
        app_id=env.get("LARK_APP_ID") or _as_str(data.get("app_id")),
        app_secret=env.get("LARK_APP_SECRET") or _as_str(data.get("app_secret")),
        timezone=_as_str(defaults.get("timezone"), DEFAULT_TIMEZONE),
        reminder_minutes=_as_int(
            defaults.get("reminder_minutes"),
            "defaults.reminder_minutes",
            DEFAULT_REMINDER_MINUTES,
        ),
        redirect_port=_as_int(
            oauth.get("redirect_port"), "oauth.redirect_port", DEFAULT_REDIRECT_PORT
        ),
    )