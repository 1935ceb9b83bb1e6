"""JSON snapshot adapter.

Implements the core SessionSource port over a JSON export of already-typed
records written by the host application. The snapshot is read once; callers
construct a new source to pick up a fresh export.

Expected layout::

    {
      "sessions": [{"sessionId": "...", "project": "...", "lastTimestamp": "...", ...}],
      "tags": {"bug": {"color": "#EF4444", "isImportant": true}},
      "metadata": {"<sessionId>": {"tags": ["bug"], "isPinned": true}}
    }
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from core.models import Message, MessageRole, Session, SessionMetadata, TagInfo

LOGGER = logging.getLogger(__name__)


class SnapshotError(RuntimeError):
    """Raised when the snapshot file cannot be read as a whole."""


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp into an aware datetime, accepting a trailing 'Z'."""

    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    # Naive values are local time; make them aware so they sort with the rest.
    return parsed if parsed.tzinfo is not None else parsed.astimezone()


def _parse_role(value: Any) -> MessageRole:
    try:
        return MessageRole(str(value).lower())
    except ValueError:
        # Anything that is not the user is rendered as an assistant turn.
        return MessageRole.ASSISTANT


def parse_message(raw: dict) -> Message:
    return Message(
        role=_parse_role(raw.get("role", "assistant")),
        content=str(raw.get("content", "")),
        timestamp=parse_timestamp(raw.get("timestamp")),
        agent_display_name=raw.get("agentDisplayName"),
        model_display_name=raw.get("modelDisplayName"),
        is_tool_use=bool(raw.get("isToolUse", False)),
    )


def parse_session(raw: dict) -> Session:
    """Build a Session from one snapshot entry.

    Raises KeyError or ValueError for entries missing the id or the
    last-activity timestamp.
    """

    last_activity = parse_timestamp(raw["lastTimestamp"])
    if last_activity is None:
        raise ValueError("lastTimestamp is empty")

    messages = tuple(parse_message(item) for item in raw.get("messages") or [])
    message_count = len(messages) if messages else int(raw.get("messageCount", 0))

    return Session(
        session_id=str(raw["sessionId"]),
        project=str(raw.get("project", "")),
        last_activity=last_activity,
        message_count=message_count,
        messages=messages,
        title=str(raw.get("title", "")),
        preview=str(raw.get("preview", "")),
        first_timestamp=parse_timestamp(raw.get("firstTimestamp")),
        custom_name=raw.get("customName"),
    )


def parse_tag(name: str, raw: dict) -> TagInfo:
    kwargs = {}
    if raw.get("color"):
        kwargs["color"] = str(raw["color"])
    return TagInfo(
        name=name,
        is_important=bool(raw.get("isImportant", False)),
        parent_tag=raw.get("parentTag"),
        **kwargs,
    )


def parse_metadata(raw: dict) -> SessionMetadata:
    return SessionMetadata(
        tags=frozenset(str(tag) for tag in raw.get("tags") or []),
        is_favorite=bool(raw.get("isFavorite", False)),
        is_pinned=bool(raw.get("isPinned", False)),
        is_archived=bool(raw.get("isArchived", False)),
        custom_name=raw.get("customName"),
    )


class JsonSnapshotSource:
    """Session source backed by a single JSON snapshot file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._sessions: list[Session] = []
        self._metadata: dict[str, SessionMetadata] = {}
        self._tags: dict[str, TagInfo] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def sessions(self) -> Sequence[Session]:
        return self._sessions

    def session_metadata(self) -> Mapping[str, SessionMetadata]:
        return self._metadata

    def tag_registry(self) -> Mapping[str, TagInfo]:
        return self._tags

    def _load(self) -> None:
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except FileNotFoundError as exc:
            raise SnapshotError(f"Snapshot not found: {self._path}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise SnapshotError(f"Cannot read snapshot {self._path}: {exc}") from exc

        if not isinstance(data, dict):
            raise SnapshotError(f"Snapshot {self._path} must contain a JSON object")

        for index, raw in enumerate(data.get("sessions") or []):
            try:
                self._sessions.append(parse_session(raw))
            except (KeyError, TypeError, ValueError) as exc:
                LOGGER.warning("Skipping malformed session #%s in %s: %s", index, self._path, exc)

        for name, raw in (data.get("tags") or {}).items():
            self._tags[name] = parse_tag(name, raw if isinstance(raw, dict) else {})

        for session_id, raw in (data.get("metadata") or {}).items():
            if not isinstance(raw, dict):
                LOGGER.warning("Skipping malformed metadata for %s in %s", session_id, self._path)
                continue
            self._metadata[session_id] = parse_metadata(raw)

        LOGGER.info(
            "Loaded %s sessions, %s tags and %s metadata entries from %s",
            len(self._sessions),
            len(self._tags),
            len(self._metadata),
            self._path,
        )
