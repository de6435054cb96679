"""JSON output for commands, and the error type that ends a command."""

from __future__ import annotations

import dataclasses
import enum
import json
import os
import sys
from datetime import datetime
from typing import Any, TextIO

from larktool.timeparse import format_time


class CliError(Exception):
    """A command failure carrying an error code and a message."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def _prepare(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: _prepare(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, dict):
        return {
            str(key): _prepare(item)
            for key, item in sorted(value.items(), key=lambda pair: str(pair[0]))
        }
    if isinstance(value, (list, tuple)):
        return [_prepare(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return [_prepare(item) for item in sorted(value)]
    if isinstance(value, datetime):
        return format_time(value)
    if isinstance(value, enum.Enum):
        return _prepare(value.value)
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _escape(text: str) -> str:
    for raw, escaped in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(raw, escaped)
    return text


def emit_json(value: Any, stream: TextIO | None = None) -> None:
    """Write a value as indented JSON followed by a newline.

    Mappings are written with sorted keys, dataclasses in field order.
    """
    out = sys.stdout if stream is None else stream
    out.write(_escape(json.dumps(_prepare(value), indent=2, ensure_ascii=False)) + "\n")
    out.flush()


def emit_error(code: str, message: str, stream: TextIO | None = None) -> None:
    """Write an error object."""
    emit_json({"error": True, "code": code, "message": message}, stream)


def emit_success(message: str, stream: TextIO | None = None) -> None:
    """Write a success object."""
    emit_json({"success": True, "message": message}, stream)