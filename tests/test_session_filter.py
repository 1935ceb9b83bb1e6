from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from core.models import Session, SessionMetadata
from core.session_filter import filter_sessions, matches_date_filter, matches_message_count_filter

NOW = datetime(2024, 3, 15, 12, 0)


def _session(
    session_id: str,
    *,
    project: str = "/work/api",
    title: str = "",
    preview: str = "",
    last_activity: Optional[datetime] = None,
    message_count: int = 5,
) -> Session:
    return Session(
        session_id=session_id,
        project=project,
        last_activity=last_activity or datetime(2024, 3, 15, 9, 0),
        message_count=message_count,
        title=title,
        preview=preview,
    )


def _ids(result) -> list[str]:
    return [session.session_id for session in result.sessions]


def test_plain_query_matches_several_fields_and_sets_search_term() -> None:
    sessions = [
        _session("title", title="Refactor Parser"),
        _session("preview", preview="the parser crashed"),
        _session("project", project="/work/parser-lib"),
        _session("tagged"),
        _session("other", title="unrelated"),
    ]
    metadata = {"tagged": SessionMetadata(tags=frozenset({"Parser-bugs"}))}
    result = filter_sessions(sessions, "  PARSER ", metadata, now=NOW)

    assert result.search_term == "parser"
    assert set(_ids(result)) == {"title", "preview", "project", "tagged"}


def test_prefixed_filters_do_not_set_search_term() -> None:
    sessions = [_session("a", project="/work/api"), _session("b", project="/work/web")]
    result = filter_sessions(sessions, "project:web", {}, now=NOW)
    assert result.search_term is None
    assert _ids(result) == ["b"]


def test_title_filter_includes_custom_name() -> None:
    sessions = [_session("a", title="Setup"), _session("b", title="Other")]
    metadata = {"b": SessionMetadata(custom_name="Database setup")}
    result = filter_sessions(sessions, "title:setup", metadata, now=NOW)
    assert set(_ids(result)) == {"a", "b"}


def test_tag_and_content_filters() -> None:
    sessions = [_session("a", preview="deploy failed"), _session("b", preview="all green")]
    metadata = {"b": SessionMetadata(tags=frozenset({"release"}))}
    assert _ids(filter_sessions(sessions, "tag:rel", metadata, now=NOW)) == ["b"]
    assert _ids(filter_sessions(sessions, "content:DEPLOY", metadata, now=NOW)) == ["a"]


def test_regex_filter_and_invalid_pattern() -> None:
    sessions = [_session("a", title="issue #123"), _session("b", title="no number")]
    assert _ids(filter_sessions(sessions, r"regex:#\d+", {}, now=NOW)) == ["a"]
    # An invalid pattern leaves the list unfiltered.
    assert set(_ids(filter_sessions(sessions, "regex:(", {}, now=NOW))) == {"a", "b"}


def test_archived_favorites_and_selected_tag() -> None:
    sessions = [_session("archived"), _session("fav"), _session("plain")]
    metadata = {
        "archived": SessionMetadata(is_archived=True),
        "fav": SessionMetadata(is_favorite=True, tags=frozenset({"keep"})),
    }
    assert set(_ids(filter_sessions(sessions, "", metadata, now=NOW))) == {"fav", "plain"}
    assert len(filter_sessions(sessions, "", metadata, show_archived=True, now=NOW).sessions) == 3
    assert _ids(filter_sessions(sessions, "", metadata, favorites_only=True, now=NOW)) == ["fav"]
    assert _ids(filter_sessions(sessions, "", metadata, selected_tag="keep", now=NOW)) == ["fav"]


def test_pinned_first_then_most_recent() -> None:
    sessions = [
        _session("old", last_activity=datetime(2024, 3, 1)),
        _session("new", last_activity=datetime(2024, 3, 14)),
        _session("pinned-old", last_activity=datetime(2024, 2, 1)),
    ]
    metadata = {"pinned-old": SessionMetadata(is_pinned=True)}
    assert _ids(filter_sessions(sessions, "", metadata, now=NOW)) == ["pinned-old", "new", "old"]


def test_date_filter_keywords_and_ranges() -> None:
    today = _session("t", last_activity=datetime(2024, 3, 15, 1))
    yesterday = _session("y", last_activity=datetime(2024, 3, 14, 23))
    last_month = _session("m", last_activity=datetime(2024, 2, 20))

    assert matches_date_filter(today, "today", NOW)
    assert matches_date_filter(yesterday, "yesterday", NOW)
    assert matches_date_filter(yesterday, "week", NOW)
    assert not matches_date_filter(last_month, "week", NOW)
    assert matches_date_filter(last_month, "month", NOW)
    assert matches_date_filter(last_month, "2024-02-20", NOW)
    assert matches_date_filter(last_month, "2024-02-01..2024-02-29", NOW)
    assert not matches_date_filter(today, "2024-02-01..2024-02-29", NOW)
    assert not matches_date_filter(today, "not-a-date", NOW)


def test_message_count_filter_forms() -> None:
    session = _session("a", message_count=12)
    assert matches_message_count_filter(session, "12")
    assert matches_message_count_filter(session, "=12")
    assert matches_message_count_filter(session, ">10")
    assert matches_message_count_filter(session, ">=12")
    assert matches_message_count_filter(session, "<20")
    assert matches_message_count_filter(session, "<=12")
    assert matches_message_count_filter(session, "10..15")
    assert not matches_message_count_filter(session, "13..15")
    assert not matches_message_count_filter(session, ">12")
    assert not matches_message_count_filter(session, "lots")


def test_messages_prefix_in_query() -> None:
    sessions = [_session("small", message_count=2), _session("big", message_count=40)]
    assert _ids(filter_sessions(sessions, "messages:>10", {}, now=NOW)) == ["big"]


def test_mixed_naive_and_aware_timestamps_sort_together() -> None:
    sessions = [
        _session("naive", title="fix login", last_activity=datetime(2024, 1, 5, 9)),
        _session("aware", title="fix logout", last_activity=datetime(2024, 1, 6, 9, tzinfo=timezone.utc)),
    ]
    assert _ids(filter_sessions(sessions, "fix", {}, now=NOW)) == ["aware", "naive"]


def test_prefixes_are_case_sensitive() -> None:
    sessions = [
        _session("prefixed", title="parser"),
        _session("literal", preview="see TITLE:parser in the notes"),
    ]
    assert _ids(filter_sessions(sessions, "title:parser", {}, now=NOW)) == ["prefixed"]

    result = filter_sessions(sessions, "TITLE:parser", {}, now=NOW)
    assert _ids(result) == ["literal"]
    assert result.search_term == "title:parser"
