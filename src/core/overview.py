"""Dashboard overview totals (core domain)."""

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Sequence

from core.activity import sessions_on_day
from core.models import OverviewStats, Session, TagInfo


def compute_overview(
    sessions: Sequence[Session],
    tag_registry: Mapping[str, TagInfo],
    now: datetime,
) -> OverviewStats:
    """Return the totals shown above the charts."""

    return OverviewStats(
        total_sessions=len(sessions),
        total_messages=sum(session.message_count for session in sessions),
        projects=len({session.project_name for session in sessions}),
        tags_used=len(tag_registry),
        sessions_today=sessions_on_day(sessions, now),
    )
