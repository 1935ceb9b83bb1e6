"""Ports (interfaces) used by the presentation layer.

The core never loads records itself. Whatever owns the sessions (the desktop
app, a snapshot file, a test) implements this port and hands typed records
over.
"""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from core.models import Session, SessionMetadata, TagInfo


class SessionSource(Protocol):
    """Read access to the externally owned session collection."""

    def sessions(self) -> Sequence[Session]:
        ...

    def session_metadata(self) -> Mapping[str, SessionMetadata]:
        ...

    def tag_registry(self) -> Mapping[str, TagInfo]:
        ...
