"""Case-insensitive substring location (core domain).

Lowercasing is not length preserving: ``"İ".lower()`` is two code points and
the German ``"ẞ".lower()`` stays one. Offsets found in the lowered copy are
therefore never used to slice the original string directly; ``FoldedText``
keeps the map between both index spaces.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import List, Optional, Tuple

from core.models import Highlight


def fold(value: str) -> str:
    """Lowercase one character at a time.

    Unlike ``str.lower()`` on a whole string this ignores context rules such as
    the Greek final sigma, so the text and the query always fold the same way.
    """

    return "".join(char.lower() for char in value)


class FoldedText:
    """Lowercased view of a string with a map back to original positions."""

    def __init__(self, original: str) -> None:
        self.original = original
        pieces: List[str] = []
        # boundaries[i] is where original character i starts in the folded text.
        boundaries: List[int] = []
        offset = 0
        for char in original:
            boundaries.append(offset)
            lowered = fold(char)
            pieces.append(lowered)
            offset += len(lowered)
        boundaries.append(offset)
        self.folded = "".join(pieces)
        self._boundaries = boundaries

    def find(self, needle: str, start: int = 0) -> int:
        return self.folded.find(needle, start)

    def to_original(self, folded_start: int, folded_end: int) -> Tuple[int, int]:
        """Translate a folded range into the smallest covering original range.

        A range that starts or stops inside the expansion of a single
        character is widened to include that whole character.
        """

        start = bisect_right(self._boundaries, folded_start) - 1
        end = start
        while self._boundaries[end] < folded_end:
            end += 1
        return start, end


def locate(text: str, query: str) -> Optional[Highlight]:
    """Return the first case-insensitive occurrence of ``query`` in ``text``.

    Returns None when the query is empty or does not occur; callers render the
    full text unhighlighted in that case.
    """

    if not query:
        return None

    folded = FoldedText(text)
    needle = fold(query)
    position = folded.find(needle)
    if position < 0:
        return None

    start, end = folded.to_original(position, position + len(needle))
    return Highlight(prefix=text[:start], match=text[start:end], suffix=text[end:])


def locate_all(text: str, query: str) -> List[Tuple[int, int]]:
    """Return every non-overlapping occurrence as (start, end) character offsets."""

    if not query:
        return []

    folded = FoldedText(text)
    needle = fold(query)
    ranges: List[Tuple[int, int]] = []
    position = folded.find(needle)
    while position >= 0:
        start, end = folded.to_original(position, position + len(needle))
        # Widening can make two neighbouring hits share a character.
        if ranges and start < ranges[-1][1]:
            ranges[-1] = (ranges[-1][0], max(end, ranges[-1][1]))
        else:
            ranges.append((start, end))
        position = folded.find(needle, position + len(needle))
    return ranges
