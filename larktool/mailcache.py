"""SQLite cache of e-mail envelope metadata."""

from __future__ import annotations

import os
import sqlite3
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
DEFAULT_SEARCH_LIMIT = 50

_SCHEMA = """
CREATE TABLE IF NOT EXISTS mailboxes (
    name TEXT PRIMARY KEY,
    uidvalidity INTEGER NOT NULL,
    last_uid INTEGER NOT NULL DEFAULT 0,
    last_sync INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS envelopes (
    mailbox TEXT NOT NULL,
    uid INTEGER NOT NULL,
    message_id TEXT,
    date INTEGER,
    from_addr TEXT,
    from_name TEXT,
    subject TEXT,
    PRIMARY KEY (mailbox, uid)
);

CREATE INDEX IF NOT EXISTS idx_envelopes_date ON envelopes(mailbox, date DESC);
CREATE INDEX IF NOT EXISTS idx_envelopes_from ON envelopes(mailbox, from_addr);
CREATE INDEX IF NOT EXISTS idx_envelopes_subject ON envelopes(mailbox, subject);
"""

_ENVELOPE_COLUMNS = "uid, message_id, date, from_addr, from_name, subject"


def _from_unix(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, timezone.utc).astimezone()


@dataclass
class Envelope:
    """Envelope metadata of one message as fetched from the server."""

    uid: int
    message_id: str = ""
    date: int = 0
    from_addr: str = ""
    from_name: str = ""
    subject: str = ""


@dataclass
class MailboxState:
    """Sync state of a mailbox."""

    name: str
    uid_validity: int
    last_uid: int
    last_sync: datetime


@dataclass
class CachedEnvelope:
    """Envelope metadata read back from the cache."""

    uid: int
    message_id: str
    date: datetime
    from_addr: str
    from_name: str
    subject: str


@dataclass
class SearchOptions:
    """Filters for a cache search."""

    sender: str = ""
    subject: str = ""
    since: datetime | None = None
    before: datetime | None = None
    limit: int = 0


@dataclass
class SearchResult:
    """Search results together with cache freshness."""

    mailbox: str
    last_sync: datetime = ZERO_TIME
    freshness: str = ""
    total_cached: int = 0
    results: list[CachedEnvelope] = field(default_factory=list)
    count: int = 0


def format_freshness(when: datetime | None, now: datetime | None = None) -> str:
    """Describe how long ago ``when`` was, e.g. ``5 minutes ago``."""
    if when is None or when == ZERO_TIME:
        return "never synced"
    if now is None:
        now = datetime.now(timezone.utc)
    elapsed = now - when

    if elapsed < timedelta(minutes=1):
        return "just now"
    seconds = elapsed.total_seconds()
    if elapsed < timedelta(hours=1):
        minutes = int(seconds / 60)
        return "1 minute ago" if minutes == 1 else f"{minutes} minutes ago"
    if elapsed < timedelta(hours=24):
        hours = int(seconds / 3600)
        return "1 hour ago" if hours == 1 else f"{hours} hours ago"
    days = int(seconds / 86400)
    return "1 day ago" if days == 1 else f"{days} days ago"


def _row_to_envelope(row: tuple) -> CachedEnvelope:
    uid, message_id, date, from_addr, from_name, subject = row
    return CachedEnvelope(
        uid=uid,
        message_id=message_id or "",
        date=_from_unix(date or 0),
        from_addr=from_addr or "",
        from_name=from_name or "",
        subject=subject or "",
    )


class MailCache:
    """Envelope metadata and per-mailbox sync state in an SQLite file."""

    def __init__(self, path: str | os.PathLike):
        self._db = sqlite3.connect(os.fspath(path))
        try:
            self._db.executescript(_SCHEMA)
        except sqlite3.Error:
            self._db.close()
            raise

    def close(self) -> None:
        """Close the database."""
        self._db.close()

    def __enter__(self) -> MailCache:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def mailbox_state(self, mailbox: str) -> MailboxState | None:
        """Cached state of a mailbox, or None if it was never synced."""
        row = self._db.execute(
            "SELECT name, uidvalidity, last_uid, last_sync FROM mailboxes WHERE name = ?",
            (mailbox,),
        ).fetchone()
        if row is None:
            return None
        name, uid_validity, last_uid, last_sync = row
        return MailboxState(name, uid_validity, last_uid, _from_unix(last_sync))

    def update_mailbox_state(self, mailbox: str, uid_validity: int, last_uid: int) -> None:
        """Record the sync state of a mailbox, stamped with the current time."""
        with self._db:
            self._db.execute(
                """INSERT INTO mailboxes (name, uidvalidity, last_uid, last_sync)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(name) DO UPDATE SET
                       uidvalidity = excluded.uidvalidity,
                       last_uid = excluded.last_uid,
                       last_sync = excluded.last_sync""",
                (mailbox, uid_validity, last_uid, int(time.time())),
            )

    def count_envelopes(self, mailbox: str) -> int:
        """Number of cached envelopes in a mailbox."""
        (count,) = self._db.execute(
            "SELECT COUNT(*) FROM envelopes WHERE mailbox = ?", (mailbox,)
        ).fetchone()
        return count

    def cached_uids(self, mailbox: str) -> set[int]:
        """All cached UIDs of a mailbox."""
        rows = self._db.execute("SELECT uid FROM envelopes WHERE mailbox = ?", (mailbox,))
        return {uid for (uid,) in rows}

    def clear_mailbox(self, mailbox: str) -> None:
        """Drop every cached envelope and the state of a mailbox."""
        with self._db:
            self._db.execute("DELETE FROM envelopes WHERE mailbox = ?", (mailbox,))
            self._db.execute("DELETE FROM mailboxes WHERE name = ?", (mailbox,))

    def insert_envelopes(self, mailbox: str, envelopes) -> None:
        """Insert or replace envelopes in one transaction."""
        rows = [
            (mailbox, env.uid, env.message_id, env.date, env.from_addr, env.from_name, env.subject)
            for env in envelopes
        ]
        if not rows:
            return
        with self._db:
            self._db.executemany(
                """INSERT OR REPLACE INTO envelopes
                   (mailbox, uid, message_id, date, from_addr, from_name, subject)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                rows,
            )

    def search(self, mailbox: str, options: SearchOptions | None = None) -> SearchResult:
        """Envelopes matching the filters, newest first."""
        state = self.mailbox_state(mailbox)
        result = SearchResult(mailbox=mailbox)
        if state is not None:
            result.last_sync = state.last_sync
            result.freshness = format_freshness(state.last_sync)
        else:
            result.freshness = "never synced"

        result.total_cached = self.count_envelopes(mailbox)

        query = f"SELECT {_ENVELOPE_COLUMNS} FROM envelopes WHERE mailbox = ?"
        params: list = [mailbox]
        if options is not None:
            if options.sender:
                query += " AND from_addr LIKE ?"
                params.append(f"%{options.sender}%")
            if options.subject:
                query += " AND subject LIKE ?"
                params.append(f"%{options.subject}%")
            if options.since is not None:
                query += " AND date >= ?"
                params.append(int(options.since.timestamp()))
            if options.before is not None:
                query += " AND date < ?"
                params.append(int(options.before.timestamp()))

        limit = DEFAULT_SEARCH_LIMIT
        if options is not None and options.limit > 0:
            limit = options.limit
        query += " ORDER BY date DESC LIMIT ?"
        params.append(limit)

        result.results = [_row_to_envelope(row) for row in self._db.execute(query, params)]
        result.count = len(result.results)
        return result

    def get_envelope(self, mailbox: str, uid: int) -> CachedEnvelope | None:
        """A single cached envelope, or None if it is not cached."""
        row = self._db.execute(
            f"SELECT {_ENVELOPE_COLUMNS} FROM envelopes WHERE mailbox = ? AND uid = ?",
            (mailbox, uid),
        ).fetchone()
        return None if row is None else _row_to_envelope(row)