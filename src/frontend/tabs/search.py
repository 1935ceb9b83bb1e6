"""Search tab: filter sessions and show highlighted matching messages."""

from __future__ import annotations

from datetime import datetime

from textual import on
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Input, Static

from adapters.rich_render import search_hits

from ..constants import MAX_SEARCH_HITS


class SearchTab(Vertical):
    """Query input plus a scrolling list of highlighted hits."""

    def compose(self):
        yield Input(
            value=self.app.dashboard_state.search_query,
            placeholder="term, project:api, tag:bug, date:week, messages:>10",
            id="search-input",
        )
        yield Static("", id="search-output", classes="subtle")
        yield VerticalScroll(id="search-results")

    @on(Input.Changed, "#search-input")
    def _on_query(self, event: Input.Changed) -> None:
        self.app.dashboard_state.search_query = event.value
        self._show_hits(event.value.strip())

    def _show_hits(self, query: str) -> None:
        results = self.query_one("#search-results", VerticalScroll)
        results.remove_children()
        if not query:
            self._set_output("")
            return

        now = datetime.now().astimezone()
        widgets = []
        for renderable in search_hits(self.app.session_source, query, self.app.dashboard_config, now):
            if len(widgets) >= MAX_SEARCH_HITS:
                break
            widgets.append(Static(renderable, classes="hit"))
        if widgets:
            results.mount(*widgets)
        self._set_output(f"{len(widgets)} results for {query!r}")

    def _set_output(self, message: str) -> None:
        self.query_one("#search-output", Static).update(message)
