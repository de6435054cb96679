"""Parsing and formatting of times, durations and day/week boundaries."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from decimal import Decimal

_FRACTION = r"(?:\.(?P<frac>\d+))?"
_DATE = r"(?P<y>\d{4})-(?P<mo>\d{2})-(?P<d>\d{2})"
_HM = r"(?P<h>\d{2}):(?P<mi>\d{2})"
_HMS = _HM + r":(?P<s>\d{2})" + _FRACTION

_RFC3339 = re.compile(_DATE + "T" + _HMS + r"(?P<zone>Z|[+-]\d{2}:\d{2})")
_LOCAL_FORMATS = [
    re.compile(_DATE + "T" + _HMS),
    re.compile(_DATE + "T" + _HM),
    re.compile(_DATE + " " + _HMS),
    re.compile(_DATE + " " + _HM),
    re.compile(_DATE),
]

_SIMPLE_DURATION = re.compile(r"(\d+)(h|m|min|hr|hrs|mins|hours?|minutes?)")
_GO_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_UNIT_SECONDS = {
    "ns": Decimal("1e-9"),
    "us": Decimal("1e-6"),
    "µs": Decimal("1e-6"),
    "μs": Decimal("1e-6"),
    "ms": Decimal("1e-3"),
    "s": Decimal(1),
    "m": Decimal(60),
    "h": Decimal(3600),
}


def _naive_from(match: re.Match) -> datetime:
    parts = match.groupdict()
    frac = parts.get("frac") or ""
    return datetime(
        int(parts["y"]),
        int(parts["mo"]),
        int(parts["d"]),
        int(parts.get("h") or 0),
        int(parts.get("mi") or 0),
        int(parts.get("s") or 0),
        int((frac + "000000")[:6]),
    )


def _attach(naive: datetime, tz: tzinfo | None) -> datetime:
    return naive.astimezone() if tz is None else naive.replace(tzinfo=tz)


def _parse_rfc3339(match: re.Match, tz: tzinfo | None) -> datetime:
    zone = match["zone"]
    if zone == "Z":
        offset = timedelta(0)
    else:
        sign = -1 if zone[0] == "-" else 1
        offset = sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6]))
    moment = _naive_from(match).replace(tzinfo=timezone(offset) if offset else timezone.utc)
    if tz is not None:
        local = moment.astimezone(tz)
        if local.utcoffset() == offset:
            return local
    return moment


def parse_time(text: str, tz: tzinfo | None = None) -> datetime:
    """Parse an ISO 8601 time; times without an offset are taken in ``tz``.

    With no ``tz`` the local zone is used. Raises ValueError when nothing fits.
    """
    text = text.strip()
    if not text:
        raise ValueError("empty time string")

    match = _RFC3339.fullmatch(text)
    if match:
        try:
            return _parse_rfc3339(match, tz)
        except ValueError:
            pass

    for pattern in _LOCAL_FORMATS:
        match = pattern.fullmatch(text)
        if match:
            try:
                return _attach(_naive_from(match), tz)
            except ValueError:
                continue

    raise ValueError(
        f"unable to parse time: {text} (use ISO 8601 format, "
        "e.g. 2006-01-02 or 2006-01-02T15:04:05)"
    )


def _parse_unit_duration(text: str) -> timedelta | None:
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        return None
    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _GO_DURATION_PART.match(text, pos)
        if match is None:
            return None
        total += Decimal(match[1]) * _UNIT_SECONDS[match[2]]
        pos = match.end()
    return sign * timedelta(microseconds=int(total * 1_000_000))


def parse_duration(text: str) -> timedelta:
    """Parse durations such as ``30m``, ``1h30m``, ``2hr`` or ``45mins``."""
    text = text.strip().lower()
    if not text:
        raise ValueError("empty duration string")

    parsed = _parse_unit_duration(text)
    if parsed is not None:
        return parsed

    match = _SIMPLE_DURATION.fullmatch(text)
    if match:
        value, unit = int(match[1]), match[2]
        if unit.startswith("h"):
            return timedelta(hours=value)
        return timedelta(minutes=value)

    raise ValueError(f"unable to parse duration: {text}")


def format_time(moment: datetime) -> str:
    """Format as RFC 3339 with whole seconds, using ``Z`` for UTC."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    stamp = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    offset = moment.utcoffset()
    if not offset:
        return stamp + "Z"
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    total = abs(total)
    return f"{stamp}{sign}{total // 3600:02d}:{total % 3600 // 60:02d}"


def start_of_day(moment: datetime) -> datetime:
    """Midnight at the start of the moment's day, in its zone."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    """The last representable instant of the moment's day, in its zone."""
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)


def start_of_week(moment: datetime) -> datetime:
    """Start of the Monday of the moment's week."""
    return start_of_day(moment - timedelta(days=moment.weekday()))


def end_of_week(moment: datetime) -> datetime:
    """End of the Sunday of the moment's week."""
    return end_of_day(moment + timedelta(days=6 - moment.weekday()))