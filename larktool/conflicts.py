"""Detection of overlapping events and of too little buffer between them."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone, tzinfo

_RFC3339 = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})"
)
_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


@dataclass
class EventSummary:
    """An event as shown to the user; times are RFC 3339 or YYYY-MM-DD for all-day."""

    id: str
    start: str
    end: str
    all_day: bool = False
    summary: str = ""
    conflicts_with: list[str] = field(default_factory=list)


@dataclass
class Conflict:
    """A pair of events that overlap or sit too close together."""

    type: str
    event_ids: list[str]
    overlap_minutes: int = 0
    gap_minutes: int = 0
    required_buffer_minutes: int = 0


@dataclass
class EventTimeSlot:
    """Parsed time boundaries of an event."""

    id: str
    start: datetime
    end: datetime
    all_day: bool = False


@dataclass
class DetectionResult:
    """Conflicts found, with a map from each event to the events it conflicts with."""

    conflict_map: dict[str, list[str]] = field(default_factory=dict)
    conflicts: list[Conflict] = field(default_factory=list)
    has_conflicts: bool = False


def _parse_date(text: str, tz: tzinfo | None) -> datetime:
    if not _DATE.fullmatch(text):
        raise ValueError(f"cannot parse {text!r} as YYYY-MM-DD")
    naive = datetime.strptime(text, "%Y-%m-%d")
    return naive.astimezone() if tz is None else naive.replace(tzinfo=tz)


def _parse_rfc3339(text: str, tz: tzinfo | None) -> datetime:
    if not _RFC3339.fullmatch(text):
        raise ValueError(f"cannot parse {text!r} as RFC 3339")
    stamp = text[:-1] + "+00:00" if text.endswith("Z") else text
    main, _, rest = stamp.partition(".")
    if rest:
        digits = re.match(r"\d+", rest)[0]
        stamp = f"{main}.{(digits + '000000')[:6]}{rest[len(digits):]}"
    moment = datetime.fromisoformat(stamp)
    return moment.astimezone(tz) if tz is not None else moment.astimezone()


def parse_event_times(events, tz: tzinfo | None = None) -> list[EventTimeSlot]:
    """Turn events into time slots in ``tz``; raise ValueError on a bad time."""
    slots = []
    for event in events:
        if event.all_day:
            start = _parse_date(event.start, tz)
            end = _parse_date(event.end, tz)
        else:
            start = _parse_rfc3339(event.start, tz)
            end = _parse_rfc3339(event.end, tz)
        slots.append(EventTimeSlot(id=event.id, start=start, end=end, all_day=event.all_day))
    return slots


def _whole_minutes(delta: timedelta) -> int:
    return int(delta.total_seconds() / 60)


def _link(conflict_map: dict[str, list[str]], a: str, b: str) -> None:
    conflict_map.setdefault(a, []).append(b)
    conflict_map.setdefault(b, []).append(a)


def detect(slots, buffer_minutes: int = 0) -> DetectionResult:
    """Find overlapping pairs, and pairs closer than ``buffer_minutes`` apart.

    Events that end exactly when another starts do not overlap.
    """
    result = DetectionResult()
    ordered = sorted(slots, key=lambda slot: (slot.start, slot.end))
    if len(ordered) < 2:
        return result

    buffer = timedelta(minutes=buffer_minutes)
    for index, a in enumerate(ordered):
        for b in ordered[index + 1:]:
            if b.start >= a.end + buffer:
                break
            if a.start < b.end and b.start < a.end:
                overlap = min(a.end, b.end) - max(a.start, b.start)
                result.conflicts.append(
                    Conflict(
                        type="overlap",
                        event_ids=[a.id, b.id],
                        overlap_minutes=_whole_minutes(overlap),
                    )
                )
                _link(result.conflict_map, a.id, b.id)
            elif buffer_minutes > 0:
                gap = b.start - a.end
                if timedelta(0) <= gap < buffer:
                    result.conflicts.append(
                        Conflict(
                            type="insufficient_buffer",
                            event_ids=[a.id, b.id],
                            gap_minutes=_whole_minutes(gap),
                            required_buffer_minutes=buffer_minutes,
                        )
                    )
                    _link(result.conflict_map, a.id, b.id)

    result.has_conflicts = bool(result.conflicts)
    return result


def apply_to_events(events, result: DetectionResult) -> None:
    """Set ``conflicts_with`` on every event that has conflicts."""
    for event in events:
        others = result.conflict_map.get(event.id)
        if others is not None:
            event.conflicts_with = list(others)