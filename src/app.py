"""Application entry point for sessionscope."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv
from rich.console import Console

import settings
from adapters.json_snapshot import JsonSnapshotSource, SnapshotError
from adapters.rich_render import build_stats_report, search_hits

NAME = "SESSIONSCOPE"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        # stderr keeps log lines out of piped report output.
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/sessionscope.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _load_source(path: Optional[str]) -> JsonSnapshotSource:
    snapshot_path = path or settings.SESSIONS_PATH
    try:
        return JsonSnapshotSource(snapshot_path)
    except SnapshotError:
        logging.getLogger(__name__).exception("Unable to load sessions")
        raise SystemExit(1)


def _stats(sessions_path: Optional[str]) -> None:
    source = _load_source(sessions_path)
    now = datetime.now().astimezone()
    Console().print(build_stats_report(source, settings.DASHBOARD, now))


def _search(query: str, sessions_path: Optional[str]) -> None:
    source = _load_source(sessions_path)
    now = datetime.now().astimezone()
    console = Console()
    hits = 0
    for renderable in search_hits(source, query, settings.DASHBOARD, now):
        console.print(renderable)
        hits += 1
    if not hits:
        console.print(f"No sessions match {query!r}.", style="dim")


def _dashboard(sessions_path: Optional[str]) -> None:
    _print_banner()
    from frontend.app import DashboardApp

    source = _load_source(sessions_path)
    DashboardApp(source, settings.DASHBOARD).run()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="sessionscope")
    parser.add_argument(
        "--sessions",
        help="Path to the session snapshot JSON (defaults to data.sessions_path in config.json)",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("stats", help="Print overview, activity, project and tag statistics")
    search_parser = subparsers.add_parser("search", help="Print messages matching a query, highlighted")
    search_parser.add_argument("query", help="Plain term or a prefixed filter such as project:api")
    subparsers.add_parser("dashboard", help="Launch the dashboard TUI")

    args = parser.parse_args(argv)
    _configure_logging()
    logging.getLogger(__name__).debug("Running command %s", args.command or "dashboard")

    if args.command == "stats":
        _stats(args.sessions)
        return
    if args.command == "search":
        _search(args.query, args.sessions)
        return
    _dashboard(args.sessions)


if __name__ == "__main__":
    main()
