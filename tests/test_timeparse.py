from datetime import datetime, timedelta, timezone

import pytest

from larktool import timeparse

PLUS8 = timezone(timedelta(hours=8))


def test_parse_rfc3339_with_offset():
    parsed = timeparse.parse_time("2026-01-03T09:00:00+08:00", None)
    assert parsed == datetime(2026, 1, 3, 9, 0, 0, tzinfo=PLUS8)
    assert parsed.utcoffset() == timedelta(hours=8)


def test_parse_rfc3339_utc():
    parsed = timeparse.parse_time("2026-01-03T09:00:00Z", PLUS8)
    assert parsed == datetime(2026, 1, 3, 9, 0, 0, tzinfo=timezone.utc)


def test_parse_rfc3339_fraction():
    parsed = timeparse.parse_time("2026-01-03T09:00:00.5+08:00", PLUS8)
    assert parsed.microsecond == 500000


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2026-01-03T09:15:30", datetime(2026, 1, 3, 9, 15, 30, tzinfo=PLUS8)),
        ("2026-01-03T09:15", datetime(2026, 1, 3, 9, 15, tzinfo=PLUS8)),
        ("2026-01-03 09:15:30", datetime(2026, 1, 3, 9, 15, 30, tzinfo=PLUS8)),
        ("2026-01-03 09:15", datetime(2026, 1, 3, 9, 15, tzinfo=PLUS8)),
        ("2026-01-03", datetime(2026, 1, 3, tzinfo=PLUS8)),
        ("  2026-01-03  ", datetime(2026, 1, 3, tzinfo=PLUS8)),
    ],
)
def test_parse_local_formats(text, expected):
    parsed = timeparse.parse_time(text, PLUS8)
    assert parsed == expected
    assert parsed.tzinfo is PLUS8


def test_parse_without_zone_uses_local():
    parsed = timeparse.parse_time("2026-01-03 09:15", None)
    assert parsed.tzinfo is not None
    assert (parsed.hour, parsed.minute) == (9, 15)


@pytest.mark.parametrize("text", ["2026-1-3", "tomorrow", "2026-13-01", "2026-01-03T9:00"])
def test_parse_rejects_bad_input(text):
    with pytest.raises(ValueError, match="unable to parse time"):
        timeparse.parse_time(text, PLUS8)


@pytest.mark.parametrize("text", ["", "   "])
def test_parse_rejects_empty(text):
    with pytest.raises(ValueError, match="empty time string"):
        timeparse.parse_time(text, PLUS8)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("30m", timedelta(minutes=30)),
        ("1h", timedelta(hours=1)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1.5h", timedelta(hours=1.5)),
        ("2hr", timedelta(hours=2)),
        ("2hrs", timedelta(hours=2)),
        ("45mins", timedelta(minutes=45)),
        ("90minutes", timedelta(minutes=90)),
        ("3hours", timedelta(hours=3)),
        ("1hour", timedelta(hours=1)),
        (" 30M ", timedelta(minutes=30)),
        ("0", timedelta(0)),
    ],
)
def test_parse_duration(text, expected):
    assert timeparse.parse_duration(text) == expected


@pytest.mark.parametrize("text", ["abc", "30", "30 minutes", "h"])
def test_parse_duration_rejects(text):
    with pytest.raises(ValueError, match="unable to parse duration"):
        timeparse.parse_duration(text)


def test_parse_duration_empty():
    with pytest.raises(ValueError, match="empty duration string"):
        timeparse.parse_duration("  ")


def test_format_time_offset():
    moment = datetime(2026, 1, 3, 9, 0, 0, 123, tzinfo=PLUS8)
    assert timeparse.format_time(moment) == "2026-01-03T09:00:00+08:00"


def test_format_time_utc_uses_z():
    moment = datetime(2026, 1, 3, 9, 0, 0, tzinfo=timezone.utc)
    assert timeparse.format_time(moment).endswith("Z")


def test_format_parse_round_trip():
    moment = datetime(2025, 7, 14, 18, 45, 12, tzinfo=timezone(timedelta(hours=-5, minutes=-30)))
    assert timeparse.parse_time(timeparse.format_time(moment), None) == moment


def test_day_bounds():
    moment = datetime(2026, 1, 3, 9, 15, 30, tzinfo=PLUS8)
    start = timeparse.start_of_day(moment)
    end = timeparse.end_of_day(moment)
    assert start.date() == end.date() == moment.date()
    assert start <= moment <= end
    assert (start.hour, start.minute, start.second, start.microsecond) == (0, 0, 0, 0)
    assert end + timedelta(microseconds=1) == timeparse.start_of_day(moment + timedelta(days=1))


@pytest.mark.parametrize("offset_days", range(7))
def test_week_bounds(offset_days):
    moment = datetime(2026, 1, 3, 12, tzinfo=PLUS8) + timedelta(days=offset_days)
    start = timeparse.start_of_week(moment)
    end = timeparse.end_of_week(moment)
    assert start.weekday() == 0
    assert end.weekday() == 6
    assert start <= moment <= end
    assert end - start < timedelta(days=7)
    assert start == timeparse.start_of_day(start)
    assert end == timeparse.end_of_day(end)


def test_week_of_sunday_starts_previous_monday():
    sunday = datetime(2026, 1, 4, 10, tzinfo=PLUS8)
    assert sunday.weekday() == 6
    assert timeparse.start_of_week(sunday).date() == sunday.date() - timedelta(days=6)
    assert timeparse.end_of_week(sunday).date() == sunday.date()