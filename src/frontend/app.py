"""Main Textual app for the sessionscope dashboard."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Center, Container, Horizontal, Vertical
from textual.widgets import ContentSwitcher, Footer, Static, Tab, Tabs

from core.config import DashboardConfig
from core.ports import SessionSource

from .constants import ACCENT, BACKGROUND, FOREGROUND
from .state import DashboardState, refresh_state
from .tabs.search import SearchTab
from .tabs.statistics import StatisticsTab

LOGGER = logging.getLogger(__name__)


class DashboardApp(App):
    """Dashboard with a statistics tab and a highlighted search tab."""

    BINDINGS = [
        ("ctrl+r", "refresh", "Refresh"),
        ("/", "focus_search", "Search"),
        ("q", "quit", "Quit"),
    ]

    CSS = f"""
    Screen {{
        background: {BACKGROUND};
        color: {FOREGROUND};
    }}

    #header {{
        height: 5;
        padding: 1 4;
        border-bottom: solid #3a302b;
    }}

    #header-left, #header-right {{
        width: 1fr;
    }}

    #header-right {{
        content-align: right top;
        text-align: right;
    }}

    .subtle {{
        color: #b8aca5;
    }}

    #tabs-center {{
        width: 100%;
        height: 3;
        align: center middle;
    }}

    #tabs {{
        width: auto;
    }}

    .card {{
        margin: 1 0;
        padding: 1 2;
        background: #241e1b;
    }}

    #stats-actions {{
        height: 3;
    }}

    .hit {{
        margin-bottom: 1;
    }}
    """

    def __init__(self, source: SessionSource, config: DashboardConfig, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.session_source = source
        self.dashboard_config = config
        self.dashboard_state = DashboardState()

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                with Vertical(id="header-right"):
                    yield Static(f"{len(self.session_source.sessions())} sessions", classes="subtle")

        with Center(id="tabs-center"):
            yield Tabs(
                Tab("Statistics", id="statistics"),
                Tab("Search", id="search"),
                id="tabs",
            )

        with ContentSwitcher(id="content", initial="statistics"):
            yield StatisticsTab(id="statistics")
            yield SearchTab(id="search")
        yield Footer()

    def on_load(self) -> None:
        self._recompute()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        self.query_one("#content", ContentSwitcher).current = event.tab.id

    def action_refresh(self) -> None:
        self.refresh_statistics()

    def action_focus_search(self) -> None:
        self.query_one("#tabs", Tabs).active = "search"
        self.query_one("#content", ContentSwitcher).current = "search"
        self.query_one("#search-input").focus()

    def refresh_statistics(self) -> None:
        self._recompute()
        self.query_one(StatisticsTab).reload_from_state()

    def _recompute(self) -> None:
        now = datetime.now().astimezone()
        refresh_state(self.dashboard_state, self.session_source, self.dashboard_config, now)
        LOGGER.info("Dashboard statistics refreshed over %s sessions", len(self.session_source.sessions()))

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("SESSION", ACCENT),
            ("SCOPE > Dashboard", "bold"),
        )
