"""IMAP credentials stored in the config directory."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

_CREDENTIALS_FILE = "mail.json"
_CACHE_FILE = "mail_cache.db"


class CredentialsError(Exception):
    """Raised when credentials cannot be read, parsed, written or removed."""


@dataclass
class Credentials:
    """IMAP connection settings."""

    host: str = ""
    port: int = 0
    username: str = ""
    password: str = field(default="", repr=False)
    use_ssl: bool = False


def credentials_file_path(config_dir: str | os.PathLike) -> Path:
    """Path of the mail credentials file."""
    return Path(config_dir) / _CREDENTIALS_FILE


def cache_file_path(config_dir: str | os.PathLike) -> Path:
    """Path of the mail cache database."""
    return Path(config_dir) / _CACHE_FILE


def _typed(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if kind is int and isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise CredentialsError(
            f"failed to parse mail credentials: field {key} has the wrong type"
        )
    return value


def load_credentials(config_dir: str | os.PathLike) -> Credentials:
    """Read credentials; raise CredentialsError if absent or malformed."""
    path = credentials_file_path(config_dir)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise CredentialsError("mail not configured; run 'lark mail setup' first") from exc
    except OSError as exc:
        raise CredentialsError(f"failed to read mail credentials: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CredentialsError(f"failed to parse mail credentials: {exc}") from exc
    if not isinstance(data, dict):
        raise CredentialsError("failed to parse mail credentials: expected an object")

    return Credentials(
        host=_typed(data, "host", str, ""),
        port=_typed(data, "port", int, 0),
        username=_typed(data, "username", str, ""),
        password=_typed(data, "password", str, ""),
        use_ssl=_typed(data, "use_ssl", bool, False),
    )


def save_credentials(credentials: Credentials, config_dir: str | os.PathLike) -> None:
    """Write credentials as indented JSON, readable only by the owner."""
    payload = json.dumps(asdict(credentials), indent=2)
    path = credentials_file_path(config_dir)
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
    except OSError as exc:
        raise CredentialsError(f"failed to write credentials: {exc}") from exc


def clear_credentials(config_dir: str | os.PathLike) -> None:
    """Remove stored credentials; a missing file is not an error."""
    try:
        credentials_file_path(config_dir).unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise CredentialsError(f"failed to remove credentials: {exc}") from exc


def has_credentials(config_dir: str | os.PathLike) -> bool:
    """Whether a credentials file is present."""
    try:
        credentials_file_path(config_dir).stat()
    except OSError:
        return False
    return True