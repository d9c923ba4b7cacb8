"""The vibeguide TUI: a scrolling channel grid with a featured stream panel.

Arrow keys move a focus cell through the grid, Enter features the focused
stream, Escape drops focus. While idle the grid scrolls itself one row at a
time and the featured panel rotates through each channel's top stream until
a stream is picked by hand.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer
from textual.css.query import NoMatches
from textual.widgets import Footer, Header, Static

from ..config import settings, ui_config
from ..config.constants import (
    AUTO_SCROLL_INTERVAL_SECONDS,
    CHANNEL_LABEL_WIDTH,
    FEATURED_ROTATE_INTERVAL_SECONDS,
    ROW_HEIGHT,
    UNIT_WIDTH,
)
from ..guide.controller import GuideConfig, GuideController
from ..guide.featured import FeaturedSelection
from ..guide.grid_index import Direction
from ..guide.viewport import GridGeometry, next_auto_scroll_top
from ..services.twitch_client import TwitchClient
from ..utils.logging import setup_tui_logging
from .guide_grid import GuideGrid, ProgramCell
from .scroll_viewport import ScrollViewport
from .themes import get_theme_names, register_all_themes, resolve_theme

logger = logging.getLogger(__name__)

IDLE_HINT = "↑↓←→ browse · Enter watch · Esc clear"


def featured_text(featured: FeaturedSelection) -> Text:
    """Render the featured panel contents."""
    if not featured.has_selection:
        return Text("Nothing featured yet", style="dim")

    stream = featured.stream
    text = Text(f"CH {featured.rank} · {featured.category.name}\n", style="bold")
    text.append(stream.display_name, style="bold green")
    if stream.is_mature:
        text.append("  18+", style="red")
    text.append(f"  {stream.viewer_count:,} viewers\n")
    if stream.title:
        text.append(f"{stream.title}\n", style="italic")
    text.append(f"https://twitch.tv/{stream.user_login}", style="underline dim")
    return text


class GuideApp(App[None]):
    """Channel guide application."""

    TITLE = "vibeguide"
    SUB_TITLE = "Live on Twitch"

    CSS = """
    #featured {
        height: 5;
        padding: 0 2;
        background: $panel;
        border-bottom: solid $accent;
    }

    #guide-scroll {
        height: 1fr;
        overflow-x: auto;
        overflow-y: auto;
    }

    #status {
        height: 1;
        padding: 0 1;
        background: $boost;
    }
    """

    BINDINGS = [
        Binding("up", "navigate('up')", "Up", show=False, priority=True),
        Binding("down", "navigate('down')", "Down", show=False, priority=True),
        Binding("left", "navigate('left')", "Left", show=False, priority=True),
        Binding("right", "navigate('right')", "Right", show=False, priority=True),
        Binding("enter", "activate", "Watch", priority=True),
        Binding("escape", "clear_focus", "Clear"),
        Binding("b", "toggle_blank_rows", "Blank rows"),
        Binding("w", "toggle_size_by_name", "Widths"),
        Binding("t", "cycle_theme", "Theme"),
        Binding("a", "toggle_auto_scroll", "Auto-scroll"),
        Binding("r", "reload", "Reload"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        controller: GuideController,
        *,
        theme_name: Optional[str] = None,
        auto_scroll: bool = True,
    ) -> None:
        super().__init__()
        self.controller = controller
        self.auto_scroll = auto_scroll
        self.viewport: Optional[ScrollViewport] = None
        self._theme_name = resolve_theme(theme_name)
        controller.on_rebuild = self._on_rebuild
        controller.featured.on_change = self._on_featured_change

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(featured_text(self.controller.featured), id="featured")
        with ScrollableContainer(id="guide-scroll"):
            yield GuideGrid(id="guide-grid")
        yield Static(IDLE_HINT, id="status")
        yield Footer()

    def on_mount(self) -> None:
        register_all_themes(self)
        self.theme = self._theme_name

        self.viewport = ScrollViewport(self.query_one("#guide-scroll", ScrollableContainer))
        navigator = self.controller.navigator
        navigator.viewport = self.viewport
        navigator.geometry = GridGeometry(ROW_HEIGHT, UNIT_WIDTH, CHANNEL_LABEL_WIDTH)

        self.set_interval(AUTO_SCROLL_INTERVAL_SECONDS, self._auto_scroll_tick)
        self.set_interval(FEATURED_ROTATE_INTERVAL_SECONDS, self.controller.rotate_featured)
        self.load_guide()

    @work(exclusive=True)
    async def load_guide(self) -> None:
        self._set_status("Loading channels...")
        loaded = await self.controller.load()
        if not loaded:
            return
        if not self.controller.categories:
            self._set_status("No channels available. Press r to retry.")
            return
        self.controller.rotate_featured()
        self._set_status(IDLE_HINT)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _on_rebuild(self, controller: GuideController) -> None:
        self.call_later(self._render_grid)

    async def _render_grid(self) -> None:
        grid = self.query_one("#guide-grid", GuideGrid)
        await grid.populate(self.controller.layout, self.controller.index)
        grid.show_focus(self.controller.navigator.focus)

    def _on_featured_change(self, featured: FeaturedSelection) -> None:
        try:
            self.query_one("#featured", Static).update(featured_text(featured))
        except NoMatches:
            pass

    def _set_status(self, message: str) -> None:
        try:
            self.query_one("#status", Static).update(message)
        except NoMatches:
            pass

    def _show_focus(self) -> None:
        navigator = self.controller.navigator
        self.query_one("#guide-grid", GuideGrid).show_focus(navigator.focus)
        cell = navigator.focused_cell
        if cell is None:
            self._set_status(IDLE_HINT)
        elif cell.has_stream:
            self._set_status(f"CH {cell.rank} · {cell.category.name} · {cell.stream.display_name}")
        else:
            self._set_status(f"CH {cell.rank} · {cell.category.name} · No Stream")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_navigate(self, direction: str) -> None:
        self.controller.navigator.navigate(Direction(direction))
        self._show_focus()

    def action_activate(self) -> None:
        if self.controller.navigator.activate():
            logger.info(f"Featured {self.controller.featured.stream.user_login}")

    def action_clear_focus(self) -> None:
        self.controller.navigator.clear_focus()
        self._show_focus()

    def on_program_cell_selected(self, message: ProgramCell.Selected) -> None:
        self.controller.navigator.click(message.row_index, message.block_index)
        self._show_focus()

    def action_toggle_blank_rows(self) -> None:
        enabled = not self.controller.config.include_leading_blank_rows
        ui_config.set_include_leading_blank_rows(enabled)
        self.controller.set_include_leading_blank_rows(enabled)
        self.notify(f"Leading blank rows {'on' if enabled else 'off'}")

    def action_toggle_size_by_name(self) -> None:
        enabled = not self.controller.config.size_by_name
        ui_config.set_size_by_name(enabled)
        self.controller.set_size_by_name(enabled)
        self.notify(f"Cell widths {'by streamer name' if enabled else 'random'}")

    def action_cycle_theme(self) -> None:
        names = get_theme_names()
        current = names.index(self.theme) if self.theme in names else -1
        self.theme = names[(current + 1) % len(names)]
        ui_config.set_theme(self.theme)

    def action_toggle_auto_scroll(self) -> None:
        self.auto_scroll = not self.auto_scroll
        self.notify(f"Auto-scroll {'on' if self.auto_scroll else 'off'}")

    def action_reload(self) -> None:
        self.load_guide()

    def _auto_scroll_tick(self) -> None:
        if not self.auto_scroll or self.viewport is None:
            return
        metrics = self.viewport.metrics()
        top = next_auto_scroll_top(metrics, self.controller.navigator.geometry, self.controller.layout)
        if top != metrics.scroll_top:
            self.viewport.scroll_to(top=top, smooth=True)

    async def on_unmount(self) -> None:
        if self.controller.client is not None:
            await self.controller.client.aclose()


def run_guide(
    *,
    theme: Optional[str] = None,
    include_leading_blank_rows: Optional[bool] = None,
    size_by_name: Optional[bool] = None,
    auto_scroll: Optional[bool] = None,
    seed: Optional[int] = None,
    verbose: bool = False,
) -> None:
    """Build the controller from saved settings and run the TUI.

    Raises:
        ConfigurationError: If an environment variable holds an invalid value.
    """
    log_file = setup_tui_logging(verbose=verbose)
    logger.info(f"Starting vibeguide, logging to {log_file}")

    config = GuideConfig.from_settings(
        include_leading_blank_rows=include_leading_blank_rows,
        size_by_name=size_by_name,
        seed=seed,
    )
    controller = GuideController(TwitchClient(settings.get_api_url()), config)
    if auto_scroll is None:
        auto_scroll = settings.is_auto_scroll_enabled()

    GuideApp(
        controller,
        theme_name=theme or ui_config.get_theme(),
        auto_scroll=auto_scroll,
    ).run()
