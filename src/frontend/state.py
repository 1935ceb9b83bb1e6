"""State container for the dashboard refresh cycle.

Aggregations run once per refresh over the whole collection; widgets read the
cached results instead of recomputing on every repaint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from core.activity import aggregate
from core.config import DashboardConfig
from core.distribution import project_stats, tag_counts, tag_legend
from core.models import DailyActivity, OverviewStats, ProjectStat, TagCount
from core.overview import compute_overview
from core.ports import SessionSource


@dataclass
class DashboardState:
    overview: Optional[OverviewStats] = None
    activity: list[DailyActivity] = field(default_factory=list)
    projects: list[ProjectStat] = field(default_factory=list)
    tags: list[TagCount] = field(default_factory=list)
    refreshed_at: Optional[datetime] = None
    search_query: str = ""


def refresh_state(
    state: DashboardState,
    source: SessionSource,
    config: DashboardConfig,
    now: datetime,
) -> DashboardState:
    sessions = source.sessions()
    registry = source.tag_registry()
    state.overview = compute_overview(sessions, registry, now)
    state.activity = aggregate(sessions, now, config.activity_window_days)
    state.projects = project_stats(sessions)
    state.tags = tag_legend(tag_counts(source.session_metadata()), registry)
    state.refreshed_at = now
    return state
