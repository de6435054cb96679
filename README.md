# larktool

A library of helpers for working with Lark: OAuth scope groups, parsing of times
and durations, detection of clashing calendar events, a local SQLite cache of
e-mail headers with offline search, stored IMAP credentials, and summaries of
Minutes recordings. Results are plain Python values, and `larktool.output` can
print them as indented JSON.

## Installation

```
pip install .
```

## Configuration

`larktool.config.load_config()` reads the directory named by `LARK_CONFIG_DIR`
(or `LARK_CAL_CONFIG_DIR`), creating it if needed, and raises `ConfigError` when
neither is set. An optional `config.yaml` (or `config.yml`) there may hold:

```yaml
app_id: cli_example
defaults:
  timezone: Asia/Singapore
  reminder_minutes: 15
oauth:
  redirect_port: 9999
```

The values shown are also the defaults, except `app_id`. `LARK_APP_ID` and
`LARK_APP_SECRET` in the environment take precedence over the file. The returned
`Config` gives `tokens_file_path()`, `tenant_tokens_file_path()` and `root_dir`.

## Modules

- `larktool.scopes` — the scope groups (`calendar`, `contacts`, `documents`,
  `messages`, `mail`, `minutes`) with `parse_groups`, `scope_string`,
  `all_scope_string`, `group_for_command`, `granted_groups`,
  `granted_groups_list` and `validate_for_group`, which raises
  `ScopeValidationError` listing the missing scopes.
- `larktool.timeparse` — `parse_time` (ISO 8601 dates and times, taken in a given
  zone when they carry no offset), `parse_duration` (`30m`, `1h30m`, `2hr`,
  `45mins`), `format_time`, and `start_of_day`, `end_of_day`, `start_of_week`,
  `end_of_week` (weeks run Monday to Sunday).
- `larktool.timespec` — `contains_time_spec` and `resolve_range`, which turns a
  from/to pair into a range, widening bare dates to whole days and raising
  `CliError` on bad input or a range longer than the given number of days.
- `larktool.conflicts` — `parse_event_times`, `detect` and `apply_to_events` for
  overlapping events and gaps shorter than a required buffer.
- `larktool.eventfields` — `parse_attendees`, `parse_hex_color`,
  `validate_visibility` and `validate_attendee_ability`.
- `larktool.mailcreds` — `Credentials` with `load_credentials`,
  `save_credentials` (written readable only by the owner), `clear_credentials`
  and `has_credentials`, stored as `mail.json` in the config directory;
  `cache_file_path` names `mail_cache.db` beside it.
- `larktool.mailcache` — `MailCache`, an SQLite store of `Envelope` records and
  per-mailbox sync state, with `search` returning newest first (50 results by
  default) together with how fresh the cache is.
- `larktool.mailsearch` — `parse_search_options` (dates as `YYYY-MM-DD`, UTC) and
  `search_cache`.
- `larktool.minutes` — `format_duration` and `summarize_minute`.
- `larktool.output` — `emit_json`, `emit_error`, `emit_success` and the
  `CliError` exception carrying a code and a message.

## Example

```python
from larktool.mailcache import Envelope, MailCache
from larktool.mailsearch import parse_search_options

with MailCache("mail_cache.db") as cache:
    cache.insert_envelopes("INBOX", [
        Envelope(uid=1, date=1735689600, from_addr="alice@example.com", subject="Q4 Report"),
    ])
    options = parse_search_options("alice", "", "2025-01-01", "", 20)
    result = cache.search("INBOX", options)
    print(result.count, result.freshness)
```

```python
from larktool.conflicts import EventSummary, apply_to_events, detect, parse_event_times

events = [
    EventSummary(id="a", start="2026-01-05T09:00:00+08:00", end="2026-01-05T10:00:00+08:00"),
    EventSummary(id="b", start="2026-01-05T09:30:00+08:00", end="2026-01-05T10:30:00+08:00"),
]
result = detect(parse_event_times(events), buffer_minutes=10)
apply_to_events(events, result)
```

## What it does not do

The package has no command-line program and does not talk to a mail server: it
does not connect over IMAP, list mailboxes, fetch messages or fill the cache from
a server. Envelopes reach the cache only through `MailCache.insert_envelopes`.
It also makes no calls to Lark's web APIs and performs no OAuth login.