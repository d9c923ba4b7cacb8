"""Adapter from a Textual scroll container to the guide's Viewport protocol."""

from typing import Optional

from textual.widget import Widget

from ..guide.viewport import ViewportMetrics


class ScrollViewport:
    """Reads and drives the scroll offsets of ``container``."""

    def __init__(self, container: Widget) -> None:
        self.container = container

    def metrics(self) -> ViewportMetrics:
        region = self.container.scrollable_content_region
        return ViewportMetrics(
            scroll_top=self.container.scroll_y,
            scroll_left=self.container.scroll_x,
            viewport_height=region.height,
            viewport_width=region.width,
        )

    def scroll_to(
        self,
        top: Optional[float] = None,
        left: Optional[float] = None,
        smooth: bool = True,
    ) -> None:
        self.container.scroll_to(x=left, y=top, animate=smooth)
