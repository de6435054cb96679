"""OAuth scope groups and checks of granted scopes against them."""

from __future__ import annotations

from dataclasses import dataclass

BASE_SCOPE = "offline_access"


@dataclass(frozen=True)
class ScopeGroup:
    """A named set of OAuth scopes needed by a set of commands."""

    name: str
    description: str
    scopes: tuple[str, ...]
    commands: tuple[str, ...]


GROUPS: dict[str, ScopeGroup] = {
    "calendar": ScopeGroup(
        name="calendar",
        description="Calendar events and scheduling",
        scopes=("calendar:calendar", "calendar:calendar:readonly"),
        commands=("cal",),
    ),
    "contacts": ScopeGroup(
        name="contacts",
        description="Company directory lookup",
        scopes=(
            "contact:contact.base:readonly",
            "contact:department.base:readonly",
            "contact:department.organize:readonly",
            "contact:user:search",
        ),
        commands=("contact",),
    ),
    "documents": ScopeGroup(
        name="documents",
        description="Lark Docs and Drive access",
        scopes=(
            "docx:document:readonly",
            "docs:doc:readonly",
            "docs:document.content:read",
            "docs:document.comment:read",
            "drive:drive:readonly",
            "wiki:wiki:readonly",
            "space:document:retrieve",
        ),
        commands=("doc",),
    ),
    "messages": ScopeGroup(
        name="messages",
        description="Chat and messaging",
        scopes=("im:message:readonly", "im:message", "im:message:send_as_bot"),
        commands=("msg", "chat"),
    ),
    "mail": ScopeGroup(
        name="mail",
        description="Email via IMAP",
        scopes=(
            "mail:user_mailbox.message.address:read",
            "mail:user_mailbox.message.body:read",
            "mail:user_mailbox.message.subject:read",
            "mail:user_mailbox.message:readonly",
        ),
        commands=("mail",),
    ),
    "minutes": ScopeGroup(
        name="minutes",
        description="Meeting recordings and transcripts",
        scopes=("minutes:minutes:readonly", "minutes:minute:download"),
        commands=("minutes",),
    ),
}

_GROUP_ORDER = ("calendar", "contacts", "documents", "messages", "mail", "minutes")


class ScopeValidationError(Exception):
    """Raised when granted scopes do not cover a scope group."""

    def __init__(self, group: str, missing: list[str]):
        super().__init__(f"missing required scopes for {group}")
        self.group = group
        self.missing = list(missing)


def all_group_names() -> list[str]:
    """All scope group names in their fixed order."""
    return list(_GROUP_ORDER)


def scopes_for_groups(group_names) -> list[str]:
    """Combined, de-duplicated scopes for the named groups, base scope first."""
    combined = {BASE_SCOPE: None}
    for name in group_names:
        group = GROUPS.get(name)
        if group is not None:
            combined.update(dict.fromkeys(group.scopes))
    return list(combined)


def all_scopes() -> list[str]:
    """Every scope of every group."""
    return scopes_for_groups(all_group_names())


def scope_string(group_names) -> str:
    """Scopes for the groups as a space-separated OAuth scope string."""
    return " ".join(scopes_for_groups(group_names))


def all_scope_string() -> str:
    """All scopes as a space-separated OAuth scope string."""
    return scope_string(all_group_names())


def group_for_command(command: str) -> ScopeGroup | None:
    """The scope group a command needs, or None if it needs none."""
    return next(
        (group for group in GROUPS.values() if command in group.commands), None
    )


def parse_groups(text: str) -> tuple[list[str], list[str]]:
    """Split a comma-separated list into known and unknown group names."""
    valid: list[str] = []
    invalid: list[str] = []
    for part in text.split(",") if text else ():
        name = part.strip()
        if not name:
            continue
        (valid if name in GROUPS else invalid).append(name)
    return valid, invalid


def check_scope(required: str, granted: str) -> bool:
    """Whether a scope appears in a space-separated granted string."""
    return required in granted.split(" ")


def check_scope_group(group_name: str, granted: str) -> tuple[bool, list[str]]:
    """Whether a group is fully granted, and which of its scopes are missing."""
    group = GROUPS.get(group_name)
    if group is None:
        return False, []
    missing = [scope for scope in group.scopes if not check_scope(scope, granted)]
    return not missing, missing


def granted_groups(granted: str) -> dict[str, bool]:
    """Map of every group name to whether it is fully granted."""
    return {name: check_scope_group(name, granted)[0] for name in GROUPS}


def granted_groups_list(granted: str) -> list[str]:
    """Names of fully granted groups, in the fixed group order."""
    return [name for name in all_group_names() if check_scope_group(name, granted)[0]]


def validate_for_group(group_name: str, granted: str) -> None:
    """Raise ScopeValidationError unless the group is fully granted."""
    ok, missing = check_scope_group(group_name, granted)
    if not ok:
        raise ScopeValidationError(group_name, missing)