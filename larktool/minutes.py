"""Summaries of Lark Minutes recordings."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from larktool.timeparse import format_time

_INT64 = re.compile(r"[+-]?\d+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _truncated_divmod(value: int, divisor: int) -> tuple[int, int]:
    quotient = abs(value) // divisor
    if value < 0:
        quotient = -quotient
    return quotient, value - quotient * divisor


def _parse_int64(text: str) -> int | None:
    if not _INT64.fullmatch(text):
        return None
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def format_duration(seconds: int) -> str:
    """Render seconds as ``1h 2m 3s``, ``2m 3s`` or ``3s``."""
    hours, rest = _truncated_divmod(seconds, 3600)
    minutes, _ = _truncated_divmod(rest, 60)
    _, secs = _truncated_divmod(seconds, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def summarize_minute(
    token: str,
    title: str,
    owner_id: str,
    create_time: str,
    duration: str,
    url: str,
) -> dict[str, Any]:
    """Describe a recording from its API fields.

    ``create_time`` and ``duration`` are millisecond counts as strings;
    values that are not integers leave the derived fields empty.
    """
    create_iso = ""
    millis = _parse_int64(create_time) if create_time else None
    if millis is not None:
        whole, rest = divmod(millis, 1000)
        moment = datetime.fromtimestamp(whole, timezone.utc).astimezone()
        create_iso = format_time(moment) if rest >= 0 else ""

    duration_seconds = 0
    duration_display = ""
    length = _parse_int64(duration) if duration else None
    if length is not None:
        duration_seconds, _ = _truncated_divmod(length, 1000)
        duration_display = format_duration(duration_seconds)

    return {
        "token": token,
        "title": title,
        "owner_id": owner_id,
        "create_time": create_iso,
        "duration_seconds": duration_seconds,
        "duration_display": duration_display,
        "url": url,
    }