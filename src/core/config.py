"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the dashboard expects so the CLI and the Textual app build it the same
way.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.activity import ACTIVITY_WINDOW_DAYS
from core.highlight import DEFAULT_HIGHLIGHT_COLOR


@dataclass(frozen=True)
class DashboardConfig:
    """Presentation knobs consumed by report and dashboard renderers."""

    highlight_color: str = DEFAULT_HIGHLIGHT_COLOR
    activity_window_days: int = ACTIVITY_WINDOW_DAYS
    top_projects: int = 10
    top_tags: int = 12
    all_matches: bool = False
