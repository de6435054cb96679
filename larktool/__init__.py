"""Lark helpers: scope groups, time parsing, event conflicts, a mail header cache and Minutes summaries."""

__version__ = "0.1.0"