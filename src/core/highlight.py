"""Search highlight rendering (core domain).

Turns a located match into styled runs. Runs never carry empty text, so
consumers can map them one-to-one onto widgets or rich spans.
"""

from __future__ import annotations

from typing import List

from core.models import StyledRun
from core.text_locator import locate, locate_all

DEFAULT_HIGHLIGHT_COLOR = "yellow"
HIGHLIGHT_FOREGROUND = "black"


def _plain(text: str) -> StyledRun:
    return StyledRun(text=text)


def _marked(text: str, highlight_color: str) -> StyledRun:
    return StyledRun(
        text=text,
        highlighted=True,
        background=highlight_color,
        foreground=HIGHLIGHT_FOREGROUND,
    )


def render(
    text: str,
    query: str,
    highlight_color: str = DEFAULT_HIGHLIGHT_COLOR,
    *,
    all_matches: bool = False,
) -> List[StyledRun]:
    """Split ``text`` into plain and highlighted runs for ``query``.

    Only the first occurrence is highlighted unless ``all_matches`` is set.
    Without a match (or without a query) the result is a single plain run,
    which for empty text is an empty run.
    """

    if all_matches:
        return _render_ranges(text, locate_all(text, query), highlight_color)

    highlight = locate(text, query)
    if highlight is None:
        return [_plain(text)]

    runs = []
    if highlight.prefix:
        runs.append(_plain(highlight.prefix))
    runs.append(_marked(highlight.match, highlight_color))
    if highlight.suffix:
        runs.append(_plain(highlight.suffix))
    return runs


def _render_ranges(text: str, ranges: List[tuple[int, int]], highlight_color: str) -> List[StyledRun]:
    if not ranges:
        return [_plain(text)]

    runs: List[StyledRun] = []
    cursor = 0
    for start, end in ranges:
        if start > cursor:
            runs.append(_plain(text[cursor:start]))
        runs.append(_marked(text[start:end], highlight_color))
        cursor = end
    if cursor < len(text):
        runs.append(_plain(text[cursor:]))
    return runs

