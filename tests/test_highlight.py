from __future__ import annotations

from core.highlight import DEFAULT_HIGHLIGHT_COLOR, HIGHLIGHT_FOREGROUND, render


def _joined(runs) -> str:
    return "".join(run.text for run in runs)


def test_no_query_yields_single_plain_run() -> None:
    runs = render("plain text", "")
    assert len(runs) == 1
    assert runs[0].text == "plain text"
    assert not runs[0].highlighted


def test_no_match_yields_full_original_text() -> None:
    runs = render("Some Message", "absent")
    assert [(run.text, run.highlighted) for run in runs] == [("Some Message", False)]


def test_empty_text_yields_single_empty_run() -> None:
    runs = render("", "query")
    assert len(runs) == 1
    assert runs[0].text == ""


def test_match_in_middle_yields_three_runs() -> None:
    runs = render("Run the Tests now", "tests", "#fde68a")
    assert [(run.text, run.highlighted) for run in runs] == [
        ("Run the ", False),
        ("Tests", True),
        (" now", False),
    ]
    marked = runs[1]
    assert marked.background == "#fde68a"
    assert marked.foreground == HIGHLIGHT_FOREGROUND
    assert marked.rich_style == f"{HIGHLIGHT_FOREGROUND} on #fde68a"


def test_empty_prefix_and_suffix_runs_are_dropped() -> None:
    runs = render("Deploy", "deploy")
    assert len(runs) == 1
    assert runs[0].highlighted
    assert runs[0].background == DEFAULT_HIGHLIGHT_COLOR


def test_runs_reconstruct_original_text() -> None:
    for text, query in [
        ("İstanbul Kebap", "kebap"),
        ("abc", "zzz"),
        ("Error: ERROR: error", "error"),
        ("", ""),
    ]:
        assert _joined(render(text, query)) == text
        assert _joined(render(text, query, all_matches=True)) == text


def test_only_first_occurrence_is_highlighted_by_default() -> None:
    runs = render("bug and bug", "bug")
    assert [run.highlighted for run in runs] == [True, False]


def test_all_matches_alternates_runs() -> None:
    runs = render("bug and BUG!", "bug", all_matches=True)
    assert [(run.text, run.highlighted) for run in runs] == [
        ("bug", True),
        (" and ", False),
        ("BUG", True),
        ("!", False),
    ]
