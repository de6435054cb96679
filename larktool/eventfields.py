"""Parsing and validation of event fields given on the command line."""

from __future__ import annotations

import re
from dataclasses import dataclass

VISIBILITIES = ("default", "public", "private")
ATTENDEE_ABILITIES = ("none", "can_see_others", "can_invite_others", "can_modify_event")
DEFAULT_ATTENDEE_ABILITY = "can_invite_others"

_HEX = re.compile(r"[+-]?[0-9a-fA-F]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


@dataclass
class Attendee:
    """An event attendee: a Lark user or a third party by e-mail."""

    type: str
    user_id: str = ""
    third_party_email: str = ""
    is_optional: bool = False


def parse_attendees(values) -> list[Attendee]:
    """Turn ``email:addr`` or bare e-mail strings into third-party attendees.

    Raises ValueError on anything else.
    """
    attendees = []
    for value in values:
        if value.startswith("email:"):
            email = value[len("email:"):]
        elif "@" in value:
            email = value
        else:
            raise ValueError(
                f"unknown attendee format: {value} "
                "(use email address like user@example.com)"
            )
        attendees.append(Attendee(type="third_party", third_party_email=email))
    return attendees


def parse_hex_color(text: str) -> int:
    """Parse a colour such as ``#9CA2A9`` into a signed 32-bit integer."""
    digits = text[1:] if text.startswith("#") else text
    if not _HEX.fullmatch(digits):
        raise ValueError(f"invalid hex color: {digits}")
    value = int(digits, 16)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"invalid hex color: {digits}")
    return value


def validate_visibility(value: str) -> str:
    """Return the visibility if it is allowed; raise ValueError otherwise."""
    if value not in VISIBILITIES:
        raise ValueError(
            f"Invalid visibility: {value} (must be default, public, or private)"
        )
    return value


def validate_attendee_ability(value: str) -> str:
    """Return the guest permission, defaulting to can_invite_others when empty."""
    ability = value or DEFAULT_ATTENDEE_ABILITY
    if ability not in ATTENDEE_ABILITIES:
        raise ValueError(
            f"Invalid attendee-ability: {ability} (must be none, can_see_others, "
            "can_invite_others, or can_modify_event)"
        )
    return ability