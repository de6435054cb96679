"""Detection of explicit times in user input and resolution of query ranges."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, tzinfo

from larktool.output import CliError
from larktool.timeparse import end_of_day, parse_time, start_of_day

_T_BEFORE_DIGIT = re.compile(r"t[0-9]")


def contains_time_spec(text: str) -> bool:
    """Whether the text names a time of day, not just a date.

    A colon (``10:00``) or a ``T`` followed by a digit (``2026-01-03T15``)
    counts as a time.
    """
    lowered = text.lower()
    return ":" in lowered or _T_BEFORE_DIGIT.search(lowered) is not None


def resolve_range(
    start_text: str, end_text: str, tz: tzinfo | None, max_days: int
) -> tuple[datetime, datetime]:
    """Parse a ``--from``/``--to`` pair into a time range.

    A bare date for the start means the start of that day, a bare date for
    the end means the end of that day. Raises CliError when either is
    missing or unparsable, when the range is longer than ``max_days`` days,
    or when it ends before it starts.
    """
    if not start_text or not end_text:
        raise CliError("VALIDATION_ERROR", "--from and --to are required")

    try:
        start = parse_time(start_text, tz)
    except ValueError as exc:
        raise CliError("PARSE_ERROR", f"Failed to parse --from: {exc}") from exc
    try:
        end = parse_time(end_text, tz)
    except ValueError as exc:
        raise CliError("PARSE_ERROR", f"Failed to parse --to: {exc}") from exc

    if not contains_time_spec(start_text):
        start = start_of_day(start)
    if not contains_time_spec(end_text):
        end = end_of_day(end)

    if end - start > timedelta(days=max_days):
        raise CliError("VALIDATION_ERROR", f"Time range cannot exceed {max_days} days")
    if end < start:
        raise CliError("VALIDATION_ERROR", "--to must be after --from")

    return start, end