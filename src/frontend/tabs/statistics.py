"""Statistics tab: overview cards, activity sparkline, project and tag charts."""

from __future__ import annotations

from textual import on
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Static

from adapters.rich_render import activity_panel, overview_table, projects_table, tags_text


class StatisticsTab(Vertical):
    """Renders the cached aggregation results held in the app state."""

    def compose(self):
        with VerticalScroll(id="stats-body"):
            yield Static("", id="stats-overview")
            yield Static("", id="stats-activity", classes="card")
            yield Static("", id="stats-projects", classes="card")
            yield Static("", id="stats-tags", classes="card")
        with Horizontal(id="stats-actions"):
            yield Button("Refresh", id="stats-refresh", variant="primary")
            yield Static("", id="stats-output", classes="subtle")

    def on_mount(self) -> None:
        self.reload_from_state()

    @on(Button.Pressed, "#stats-refresh")
    def _on_refresh(self) -> None:
        self.app.refresh_statistics()

    def reload_from_state(self) -> None:
        state = self.app.dashboard_state
        config = self.app.dashboard_config
        if state.overview is None:
            self._set_output("no data loaded")
            return
        self.query_one("#stats-overview", Static).update(overview_table(state.overview))
        self.query_one("#stats-activity", Static).update(activity_panel(state.activity))
        self.query_one("#stats-projects", Static).update(projects_table(state.projects, config.top_projects))
        self.query_one("#stats-tags", Static).update(tags_text(state.tags, config.top_tags))
        if state.refreshed_at is not None:
            self._set_output(f"refreshed {state.refreshed_at:%H:%M:%S}")

    def _set_output(self, message: str) -> None:
        self.query_one("#stats-output", Static).update(message)
