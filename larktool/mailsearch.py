"""Local search of the mail cache."""

from __future__ import annotations

import os
import re
from datetime import datetime, timezone

from larktool.mailcache import MailCache, SearchOptions, SearchResult

_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _parse_date(text: str) -> datetime:
    if not _DATE.fullmatch(text):
        raise ValueError(f"cannot parse {text!r} as YYYY-MM-DD")
    return datetime.strptime(text, "%Y-%m-%d").replace(tzinfo=timezone.utc)


def search_cache(
    cache_path: str | os.PathLike, mailbox: str, options: SearchOptions | None = None
) -> SearchResult:
    """Open the cache at ``cache_path`` and search one mailbox."""
    with MailCache(cache_path) as cache:
        return cache.search(mailbox, options)


def parse_search_options(
    sender: str, subject: str, since: str, before: str, limit: int
) -> SearchOptions:
    """Build SearchOptions; dates are YYYY-MM-DD in UTC. Raises ValueError."""
    return SearchOptions(
        sender=sender,
        subject=subject,
        since=_parse_date(since) if since else None,
        before=_parse_date(before) if before else None,
        limit=limit,
    )