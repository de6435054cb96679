import io
import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from larktool import output


@dataclass
class _Record:
    zeta: str
    alpha: int


def _emit(value):
    stream = io.StringIO()
    output.emit_json(value, stream)
    return stream.getvalue()


def test_emit_json_round_trip():
    value = {"count": 2, "items": ["a", "b"], "flag": False, "none": None}
    assert json.loads(_emit(value)) == value


def test_emit_json_indents_and_ends_with_newline():
    text = _emit({"key": "value"})
    assert text.startswith('{\n  "key"')
    assert text.endswith("}\n")


def test_mapping_keys_are_sorted():
    text = _emit({"zulu": 1, "alpha": 2, "mike": 3})
    assert list(json.loads(text)) == ["alpha", "mike", "zulu"]


def test_dataclass_keeps_field_order():
    text = _emit(_Record(zeta="z", alpha=1))
    assert list(json.loads(text)) == ["zeta", "alpha"]


def test_html_characters_are_escaped():
    text = _emit({"html": "<a & b>"})
    assert "<" not in text and ">" not in text and "&" not in text
    assert "\\u003c" in text
    assert json.loads(text) == {"html": "<a & b>"}


def test_non_ascii_passes_through():
    text = _emit({"name": "日本"})
    assert "日本" in text


def test_datetime_is_rfc3339():
    moment = datetime(2026, 1, 3, 9, 0, 0, tzinfo=timezone(timedelta(hours=8)))
    assert json.loads(_emit({"when": moment})) == {"when": "2026-01-03T09:00:00+08:00"}


def test_emit_error():
    stream = io.StringIO()
    output.emit_error("AUTH_ERROR", "Not authenticated. Run: lark auth login", stream)
    assert json.loads(stream.getvalue()) == {
        "error": True,
        "code": "AUTH_ERROR",
        "message": "Not authenticated. Run: lark auth login",
    }


def test_emit_success():
    stream = io.StringIO()
    output.emit_success("Successfully logged out", stream)
    assert json.loads(stream.getvalue()) == {
        "success": True,
        "message": "Successfully logged out",
    }


def test_cli_error_carries_code_and_message():
    error = output.CliError("VALIDATION_ERROR", "--uid is required")
    assert error.code == "VALIDATION_ERROR"
    assert error.message == "--uid is required"
    assert str(error) == "--uid is required"