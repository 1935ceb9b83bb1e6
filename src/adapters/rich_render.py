"""Rich renderables shared by the console report and the Textual dashboard.

Keeping rendering here prevents drift between the two surfaces: both show the
same numbers, truncated to the same top-N limits, in the same colours.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Iterator, List, Optional, Sequence

from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text

from core.activity import aggregate
from core.config import DashboardConfig
from core.distribution import project_stats, tag_counts, tag_legend
from core.formatting import date_group, format_duration, format_number
from core.highlight import render
from core.models import DailyActivity, Message, OverviewStats, ProjectStat, Session, StyledRun, TagCount
from core.overview import compute_overview
from core.ports import SessionSource
from core.session_filter import filter_sessions
from core.text_locator import locate

SPARK_LEVELS = " ▁▂▃▄▅▆▇█"
ACCENT = "#D97757"


def to_rich_text(runs: Iterable[StyledRun]) -> Text:
    """Assemble styled runs into a single rich Text."""

    return Text.assemble(*((run.text, run.rich_style) for run in runs))


def highlight_text(text: str, query: Optional[str], config: DashboardConfig) -> Text:
    return to_rich_text(
        render(text, query or "", config.highlight_color, all_matches=config.all_matches)
    )


def sparkline(activity: Sequence[DailyActivity]) -> Text:
    """Return one block character per day, scaled to the busiest day."""

    peak = max((entry.count for entry in activity), default=0)
    chars = []
    for entry in activity:
        if entry.count == 0 or peak == 0:
            level = 0
        else:
            level = max(1, round(entry.count / peak * (len(SPARK_LEVELS) - 1)))
        chars.append(SPARK_LEVELS[level])
    return Text("".join(chars), style=ACCENT)


def activity_panel(activity: Sequence[DailyActivity]) -> Text:
    if not activity:
        return Text("No activity")
    first, last = activity[0].day, activity[-1].day
    total = sum(entry.count for entry in activity)
    return Text.assemble(
        (f"Activity (last {len(activity)} days)\n", "bold"),
        sparkline(activity),
        "\n",
        (f"{first:%m/%d} … {last:%m/%d}  ", "dim"),
        (f"{format_number(total)} sessions", "dim"),
    )


def overview_table(stats: OverviewStats) -> Table:
    table = Table(title="Overview", show_header=True, header_style="bold")
    for column in ("Total Sessions", "Total Messages", "Projects", "Tags Used", "Today"):
        table.add_column(column, justify="right")
    table.add_row(
        format_number(stats.total_sessions),
        format_number(stats.total_messages),
        format_number(stats.projects),
        format_number(stats.tags_used),
        format_number(stats.sessions_today),
    )
    return table


def projects_table(stats: Sequence[ProjectStat], limit: int) -> Table:
    table = Table(title="Sessions by Project", header_style="bold")
    table.add_column("Project")
    table.add_column("Sessions", justify="right")
    table.add_column("Messages", justify="right")
    for stat in stats[:limit]:
        table.add_row(stat.project, str(stat.sessions), format_number(stat.messages))
    if not stats:
        table.add_row("No project data", "", "")
    return table


def tags_text(legend: Sequence[TagCount], limit: int) -> Text:
    if not legend:
        return Text("No tags used yet", style="dim")
    parts: List[tuple[str, str] | str] = [("Most Used Tags\n", "bold")]
    for entry in legend[:limit]:
        parts.append(("● ", entry.color or "dim"))
        parts.append(f"{entry.name} ")
        parts.append((f"{entry.count}  ", "dim"))
    return Text.assemble(*parts)


def build_stats_report(source: SessionSource, config: DashboardConfig, now: datetime) -> Group:
    """Aggregate the whole collection once and return the console report."""

    sessions = source.sessions()
    registry = source.tag_registry()
    activity = aggregate(sessions, now, config.activity_window_days)
    legend = tag_legend(tag_counts(source.session_metadata()), registry)
    return Group(
        overview_table(compute_overview(sessions, registry, now)),
        activity_panel(activity),
        projects_table(project_stats(sessions), config.top_projects),
        tags_text(legend, config.top_tags),
    )


def session_heading(session: Session) -> Text:
    """Session title, project and, when the start is known, how long it ran."""

    heading = Text.assemble(
        (session.display_title or session.session_id, "bold"),
        ("  ", ""),
        (session.project_name, ACCENT),
    )
    duration = format_duration(session.first_timestamp, session.last_activity)
    if duration:
        heading.append(f"  ({duration})", style="dim")
    return heading


def message_header(session: Session, message: Message, now: datetime) -> Text:
    author = "You" if message.is_user else (message.model_info or message.role.value)
    when = message.timestamp or session.last_activity
    return Text.assemble(
        session_heading(session),
        (f"  {date_group(when, now)} {when.astimezone():%H:%M}  ", "dim"),
        (author, "italic"),
    )


def search_hits(
    source: SessionSource,
    query: str,
    config: DashboardConfig,
    now: datetime,
) -> Iterator[RenderableType]:
    """Yield a header and highlighted body for every message matching ``query``.

    Sessions whose transcript is not loaded contribute their preview instead.
    """

    result = filter_sessions(source.sessions(), query, source.session_metadata(), now=now)
    term = result.search_term
    for session in result.sessions:
        if not session.messages_loaded:
            yield session_heading(session)
            yield highlight_text(session.preview, term, config)
            continue
        for message in session.messages:
            if term and locate(message.content, term) is None:
                continue
            yield message_header(session, message, now)
            yield highlight_text(message.content, term, config)
