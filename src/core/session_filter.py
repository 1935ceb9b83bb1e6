"""Session list filtering and the search query mini-language (core domain).

Supported query forms:
- ``title:term``     title or custom name contains term
- ``tag:term``       any tag contains term
- ``project:term``   project path or name contains term
- ``content:term``   preview contains term
- ``date:value``     today, yesterday, week, month, YYYY-MM-DD or YYYY-MM-DD..YYYY-MM-DD
- ``regex:pattern``  case-insensitive regex over title, project, preview and custom name
- ``messages:value`` N, =N, >N, >=N, <N, <=N or N..M on the message count
- anything else      plain term over all of the above, returned for highlighting

Prefixes are lowercase and case-sensitive; ``TITLE:x`` is a plain term.
Only plain terms produce a ``search_term``; prefixed filters do not highlight.
"""

from __future__ import annotations

import calendar
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, List, Mapping, Optional

from core.activity import day_of
from core.models import Session, SessionMetadata

LOGGER = logging.getLogger(__name__)

_EMPTY_METADATA = SessionMetadata()


@dataclass(frozen=True)
class FilterResult:
    sessions: List[Session]
    search_term: Optional[str]


def _parse_day(value: str) -> Optional[date]:
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def _split_range(value: str) -> Optional[tuple[str, str]]:
    if ".." not in value:
        return None
    parts = [part for part in value.split(".") if part]
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def _month_before(day: date) -> date:
    year, month = (day.year - 1, 12) if day.month == 1 else (day.year, day.month - 1)
    # Clamp to the end of the shorter month, e.g. Mar 31 -> Feb 28.
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def matches_date_filter(session: Session, value: str, now: datetime) -> bool:
    """Return True when the session's last activity satisfies a ``date:`` value."""

    day = day_of(session.last_activity)
    today = day_of(now)
    keyword = value.lower()

    if keyword == "today":
        return day == today
    if keyword == "yesterday":
        return day == today - timedelta(days=1)
    if keyword == "week":
        return day >= today - timedelta(days=7)
    if keyword == "month":
        return day >= _month_before(today)

    bounds = _split_range(value)
    if bounds is not None:
        first, last = _parse_day(bounds[0]), _parse_day(bounds[1])
        if first is not None and last is not None:
            return first <= day <= last

    specific = _parse_day(value)
    if specific is not None:
        return day == specific
    return False


def matches_message_count_filter(session: Session, value: str) -> bool:
    """Return True when the session's message count satisfies a ``messages:`` value."""

    count = session.message_count

    bounds = _split_range(value)
    if bounds is not None:
        try:
            low, high = int(bounds[0]), int(bounds[1])
        except ValueError:
            pass
        else:
            return low <= count <= high

    comparisons: List[tuple[str, Callable[[int, int], bool]]] = [
        (">=", lambda a, b: a >= b),
        ("<=", lambda a, b: a <= b),
        (">", lambda a, b: a > b),
        ("<", lambda a, b: a < b),
        ("=", lambda a, b: a == b),
        ("", lambda a, b: a == b),
    ]
    for prefix, compare in comparisons:
        if not value.startswith(prefix):
            continue
        try:
            target = int(value[len(prefix):])
        except ValueError:
            return False
        return compare(count, target)
    return False


def _tags_contain(meta: SessionMetadata, term: str) -> bool:
    return any(term in tag.lower() for tag in meta.tags)


def _custom_name(session: Session, meta: SessionMetadata) -> str:
    return meta.custom_name or session.custom_name or ""


def filter_sessions(
    sessions: Iterable[Session],
    search_text: str,
    session_metadata: Mapping[str, SessionMetadata],
    selected_tag: Optional[str] = None,
    show_archived: bool = False,
    favorites_only: bool = False,
    now: Optional[datetime] = None,
) -> FilterResult:
    """Filter and order sessions for the session list.

    Results are pinned-first, then most recently active first.
    """

    now = now or datetime.now().astimezone()

    def meta_for(session: Session) -> SessionMetadata:
        return session_metadata.get(session.session_id, _EMPTY_METADATA)

    result = list(sessions)
    if not show_archived:
        result = [s for s in result if not meta_for(s).is_archived]
    if favorites_only:
        result = [s for s in result if meta_for(s).is_favorite]
    if selected_tag is not None:
        result = [s for s in result if selected_tag in meta_for(s).tags]

    search_term: Optional[str] = None
    query = search_text.strip()
    if query:
        keyword, sep, rest = query.partition(":")
        term = rest.strip()
        lowered = term.lower()
        if not sep:
            keyword = ""

        if keyword == "title":
            result = [
                s
                for s in result
                if lowered in s.title.lower() or lowered in _custom_name(s, meta_for(s)).lower()
            ]
        elif keyword == "tag":
            result = [s for s in result if _tags_contain(meta_for(s), lowered)]
        elif keyword == "project":
            result = [
                s for s in result if lowered in s.project.lower() or lowered in s.project_name.lower()
            ]
        elif keyword == "content":
            result = [s for s in result if lowered in s.preview.lower()]
        elif keyword == "date":
            result = [s for s in result if matches_date_filter(s, term, now)]
        elif keyword == "regex":
            try:
                pattern = re.compile(term, re.IGNORECASE)
            except re.error as exc:
                LOGGER.debug("Ignoring invalid regex filter %r: %s", term, exc)
            else:
                result = [
                    s
                    for s in result
                    if any(
                        pattern.search(target)
                        for target in (s.title, s.project, s.preview, _custom_name(s, meta_for(s)))
                    )
                ]
        elif keyword == "messages":
            result = [s for s in result if matches_message_count_filter(s, term)]
        else:
            search_term = query.lower()
            result = [s for s in result if _matches_plain(s, meta_for(s), search_term)]

    # Naive timestamps are local time, as in day_of.
    result.sort(key=lambda s: s.last_activity.astimezone(), reverse=True)
    result.sort(key=lambda s: not meta_for(s).is_pinned)
    return FilterResult(sessions=result, search_term=search_term)


def _matches_plain(session: Session, meta: SessionMetadata, term: str) -> bool:
    return (
        term in session.title.lower()
        or term in session.project.lower()
        or term in session.preview.lower()
        or term in _custom_name(session, meta).lower()
        or _tags_contain(meta, term)
    )
