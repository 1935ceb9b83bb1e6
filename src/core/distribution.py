"""Frequency tables for projects and tags (core domain).

Counts are sorted by descending count with Python's stable sort, so keys with
equal counts keep the order in which they were first seen. Nothing here
truncates; picking the top N is up to the presentation layer.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Tuple

from core.models import ProjectStat, Session, SessionMetadata, TagCount, TagInfo

LOGGER = logging.getLogger(__name__)


def _by_count_desc(counts: Dict[str, int]) -> List[Tuple[str, int]]:
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


def project_counts(sessions: Iterable[Session]) -> List[Tuple[str, int]]:
    """Return (project_name, session_count) pairs, most used first."""

    counts: Dict[str, int] = {}
    for session in sessions:
        name = session.project_name
        counts[name] = counts.get(name, 0) + 1
    return _by_count_desc(counts)


def tag_counts(session_metadata: Mapping[str, SessionMetadata]) -> List[Tuple[str, int]]:
    """Return (tag_name, session_count) pairs across all sessions, most used first."""

    counts: Dict[str, int] = {}
    for meta in session_metadata.values():
        # Tag sets have no order of their own; sort so ties do not follow hash order.
        for tag in sorted(meta.tags):
            counts[tag] = counts.get(tag, 0) + 1
    LOGGER.debug("Counted %s distinct tags over %s sessions", len(counts), len(session_metadata))
    return _by_count_desc(counts)


def project_stats(sessions: Iterable[Session]) -> List[ProjectStat]:
    """Return per-project session and message totals, most sessions first."""

    session_totals: Dict[str, int] = {}
    message_totals: Dict[str, int] = {}
    for session in sessions:
        name = session.project_name
        session_totals[name] = session_totals.get(name, 0) + 1
        message_totals[name] = message_totals.get(name, 0) + session.message_count
    return [
        ProjectStat(project=name, sessions=count, messages=message_totals[name])
        for name, count in _by_count_desc(session_totals)
    ]


def tag_legend(
    counts: Iterable[Tuple[str, int]],
    registry: Mapping[str, TagInfo],
) -> List[TagCount]:
    """Attach registry colours to tag counts; unknown tags get no colour."""

    legend: List[TagCount] = []
    for name, count in counts:
        info = registry.get(name)
        legend.append(TagCount(name=name, count=count, color=info.color if info else None))
    return legend
