"""Core domain models.

These dataclasses are shared across the core, adapters and the dashboard so
that none of them depend on where the session records were loaded from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional

DEFAULT_TAG_COLOR = "#3B82F6"


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True)
class Message:
    """One turn within a session."""

    role: MessageRole
    content: str
    timestamp: Optional[datetime] = None
    agent_display_name: Optional[str] = None
    model_display_name: Optional[str] = None
    is_tool_use: bool = False

    @property
    def is_user(self) -> bool:
        return self.role is MessageRole.USER

    @property
    def model_info(self) -> Optional[str]:
        """Return "agent · model" for assistant turns, or None."""

        if self.is_user:
            return None
        parts = [part for part in (self.agent_display_name, self.model_display_name) if part]
        if not parts:
            return None
        return " · ".join(parts)


@dataclass(frozen=True)
class Session:
    """One recorded transcript, read-only to the core.

    ``messages`` is empty when the transcript body has not been loaded; once
    loaded, ``message_count`` equals ``len(messages)``.
    """

    session_id: str
    project: str
    last_activity: datetime
    message_count: int
    messages: tuple[Message, ...] = ()
    title: str = ""
    preview: str = ""
    first_timestamp: Optional[datetime] = None
    custom_name: Optional[str] = None

    @property
    def project_name(self) -> str:
        """Last path component of the project, e.g. '/work/api' -> 'api'."""

        return self.project.rstrip("/").rsplit("/", 1)[-1] or self.project

    @property
    def display_title(self) -> str:
        return self.custom_name or self.preview[:50]

    @property
    def messages_loaded(self) -> bool:
        return bool(self.messages)


@dataclass(frozen=True)
class TagInfo:
    """Entry of the tag registry, keyed by name."""

    name: str
    color: str = DEFAULT_TAG_COLOR
    is_important: bool = False
    parent_tag: Optional[str] = None


@dataclass(frozen=True)
class SessionMetadata:
    """User-maintained flags and tags for one session."""

    tags: frozenset[str] = field(default_factory=frozenset)
    is_favorite: bool = False
    is_pinned: bool = False
    is_archived: bool = False
    custom_name: Optional[str] = None


@dataclass(frozen=True)
class Highlight:
    """Partition of a text around the located query.

    ``prefix + match + suffix`` is always the original text, with the
    original casing.
    """

    prefix: str
    match: str
    suffix: str

    @property
    def start(self) -> int:
        return len(self.prefix)

    @property
    def end(self) -> int:
        return len(self.prefix) + len(self.match)


@dataclass(frozen=True)
class StyledRun:
    """Contiguous span of text sharing one rendering style."""

    text: str
    highlighted: bool = False
    background: Optional[str] = None
    foreground: Optional[str] = None

    @property
    def rich_style(self) -> str:
        """Style string understood by rich, empty for plain runs."""

        if not self.highlighted:
            return ""
        parts = []
        if self.foreground:
            parts.append(self.foreground)
        if self.background:
            parts.append(f"on {self.background}")
        return " ".join(parts)


@dataclass(frozen=True)
class DailyActivity:
    """Session count for one calendar day."""

    day: date
    count: int


@dataclass(frozen=True)
class ProjectStat:
    project: str
    sessions: int
    messages: int


@dataclass(frozen=True)
class TagCount:
    name: str
    count: int
    color: Optional[str] = None


@dataclass(frozen=True)
class OverviewStats:
    """Totals shown on the dashboard cards."""

    total_sessions: int
    total_messages: int
    projects: int
    tags_used: int
    sessions_today: int
