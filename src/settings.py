"""Static configuration for sessionscope.

All user-editable settings (snapshot location, highlight colour, chart sizes,
logging) live in a single JSON file for quick edits without touching Python.
"""

import json
import os

from core.config import DashboardConfig

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# config.json sits next to the source tree; SESSIONSCOPE_CONFIG overrides it.
CONFIG_PATH = os.environ.get("SESSIONSCOPE_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    path = os.path.expanduser(path)
    if not os.path.isabs(path):
        path = os.path.join(PROJECT_ROOT, path)
    return path


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Snapshot of typed session records exported by the host application.
_data = _CONFIG.get("data", {})
SESSIONS_PATH = _resolve_path(_data.get("sessions_path", "sessions.sample.json"))

# Search highlighting.
# - HIGHLIGHT_COLOR: background of the matched run (any rich colour)
# - HIGHLIGHT_ALL_MATCHES: highlight every occurrence instead of the first
_search = _CONFIG.get("search", {})
HIGHLIGHT_COLOR = _search.get("highlight_color", "yellow")
HIGHLIGHT_ALL_MATCHES = bool(_search.get("all_matches", False))

# Chart sizes. The aggregators never truncate; these limits apply at render time.
_statistics = _CONFIG.get("statistics", {})
ACTIVITY_WINDOW_DAYS = int(_statistics.get("activity_window_days", 30))
TOP_PROJECTS = int(_statistics.get("top_projects", 10))
TOP_TAGS = int(_statistics.get("top_tags", 12))

DASHBOARD = DashboardConfig(
    highlight_color=HIGHLIGHT_COLOR,
    activity_window_days=ACTIVITY_WINDOW_DAYS,
    top_projects=TOP_PROJECTS,
    top_tags=TOP_TAGS,
    all_matches=HIGHLIGHT_ALL_MATCHES,
)

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
