"""Shared constants for the Textual UI."""

from __future__ import annotations

from adapters.rich_render import ACCENT

BACKGROUND = "#1a1614"
FOREGROUND = "#ece6e2"
MAX_SEARCH_HITS = 200
