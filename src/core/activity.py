"""Rolling daily activity histogram (core domain).

Every timestamp is bucketed on the host's local calendar. Timezone-aware
datetimes are converted with ``astimezone()``; naive datetimes are taken to be
local already. Callers must not mix naive values from another zone into the
same call: the core cannot detect it and the buckets would silently shift.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List

from core.models import DailyActivity, Session

LOGGER = logging.getLogger(__name__)

ACTIVITY_WINDOW_DAYS = 30


def day_of(instant: datetime) -> date:
    """Return the local calendar day of ``instant``."""

    if instant.tzinfo is not None:
        instant = instant.astimezone()
    return instant.date()


def aggregate(
    sessions: Iterable[Session],
    reference_instant: datetime,
    days: int = ACTIVITY_WINDOW_DAYS,
) -> List[DailyActivity]:
    """Count sessions per day over the ``days`` days ending at the reference day.

    The result always has exactly ``days`` entries in ascending order, zero
    days included. Sessions outside the window are ignored, not clipped into
    the boundary days.
    """

    if days < 1:
        raise ValueError(f"Activity window must cover at least one day, got {days}")

    end_day = day_of(reference_instant)
    start_day = end_day - timedelta(days=days - 1)

    counts: Dict[date, int] = {start_day + timedelta(days=offset): 0 for offset in range(days)}

    ignored = 0
    for session in sessions:
        bucket = day_of(session.last_activity)
        if bucket in counts:
            counts[bucket] += 1
        else:
            ignored += 1

    LOGGER.debug(
        "Activity window %s..%s: %s sessions bucketed, %s outside",
        start_day,
        end_day,
        sum(counts.values()),
        ignored,
    )
    return [DailyActivity(day=day, count=counts[day]) for day in sorted(counts)]


def sessions_on_day(sessions: Iterable[Session], reference_instant: datetime) -> int:
    """Return how many sessions were last active on the reference day."""

    target = day_of(reference_instant)
    return sum(1 for session in sessions if day_of(session.last_activity) == target)
