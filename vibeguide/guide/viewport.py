"""Viewport abstraction and scroll-into-view math.

The navigator never touches widgets directly. It reads scroll offsets and
sizes through the ``Viewport`` protocol and asks it to scroll; the TUI adapts
a Textual scroll container to this protocol and tests use ``StaticViewport``.
The auto-scroll timer moves the same viewport independently, so every
decision here reads fresh metrics.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple, runtime_checkable

from ..config.constants import ROW_HEIGHT, SCROLL_SNAP_COLUMNS, SCROLL_SNAP_ROWS, UNIT_WIDTH
from ..models.guide import Layout
from .grid_index import GridCell


@dataclass(frozen=True)
class ViewportMetrics:
    scroll_top: float
    scroll_left: float
    viewport_height: float
    viewport_width: float

    @property
    def scroll_bottom(self) -> float:
        return self.scroll_top + self.viewport_height

    @property
    def scroll_right(self) -> float:
        return self.scroll_left + self.viewport_width


@dataclass(frozen=True)
class ScrollCommand:
    """A scroll request; None leaves that axis where it is."""

    top: Optional[float] = None
    left: Optional[float] = None
    smooth: bool = True


@runtime_checkable
class Viewport(Protocol):
    """Protocol for anything that can report and change a scroll position."""

    def metrics(self) -> ViewportMetrics:
        ...

    def scroll_to(
        self,
        top: Optional[float] = None,
        left: Optional[float] = None,
        smooth: bool = True,
    ) -> None:
        ...


@dataclass(frozen=True)
class GridGeometry:
    """Converts layout rows and grid units to scroll coordinates.

    ``origin_x`` is the width of the channel label that precedes the cells
    of every row. The label scrolls with its row, so cell ``x`` coordinates
    are measured from the left edge of the strip, label included.
    """

    row_height: float = ROW_HEIGHT
    unit_width: float = UNIT_WIDTH
    origin_x: float = 0

    def row_span(self, actual_row_index: int) -> Tuple[float, float]:
        top = actual_row_index * self.row_height
        return top, top + self.row_height

    def column_span(self, position: float, width: float) -> Tuple[float, float]:
        left = self.origin_x + position * self.unit_width
        return left, left + width * self.unit_width

    def content_height(self, layout: Layout) -> float:
        return len(layout.rows) * self.row_height


@dataclass
class StaticViewport:
    """In-memory viewport. Applies scroll requests and keeps a history."""

    scroll_top: float = 0
    scroll_left: float = 0
    viewport_height: float = 24
    viewport_width: float = 80
    history: List[ScrollCommand] = field(default_factory=list)

    def metrics(self) -> ViewportMetrics:
        return ViewportMetrics(
            scroll_top=self.scroll_top,
            scroll_left=self.scroll_left,
            viewport_height=self.viewport_height,
            viewport_width=self.viewport_width,
        )

    def scroll_to(
        self,
        top: Optional[float] = None,
        left: Optional[float] = None,
        smooth: bool = True,
    ) -> None:
        self.history.append(ScrollCommand(top=top, left=left, smooth=smooth))
        if top is not None:
            self.scroll_top = top
        if left is not None:
            self.scroll_left = left


def is_row_fully_visible(actual_row_index: int, metrics: ViewportMetrics, geometry: GridGeometry) -> bool:
    top, bottom = geometry.row_span(actual_row_index)
    return top >= metrics.scroll_top and bottom <= metrics.scroll_bottom


def is_row_out_of_view(actual_row_index: int, metrics: ViewportMetrics, geometry: GridGeometry) -> bool:
    """True if no part of the row is inside the vertical viewport."""
    top, bottom = geometry.row_span(actual_row_index)
    return bottom <= metrics.scroll_top or top >= metrics.scroll_bottom


def snap_into_view(
    start: float,
    end: float,
    offset: float,
    size: float,
    block: float,
    origin: float = 0,
) -> Optional[float]:
    """Scroll offset on a ``block`` boundary that shows ``[start, end)``.

    Boundaries sit at ``origin + k * block``; the first one (k == 0) maps to
    offset 0 so anything before ``origin`` stays visible. Returns None when
    the span is already fully visible.
    """
    if start >= offset and end <= offset + size:
        return None

    if start < offset:
        k = math.floor((start - origin) / block)
    else:
        k = math.ceil((end - size - origin) / block)
        if origin + k * block > start:
            # Viewport narrower than the distance between boundaries
            k = math.floor((start - origin) / block)
    if k <= 0 and end <= size:
        return 0
    return origin + max(k, 0) * block


def scroll_command_for(
    cell: GridCell,
    metrics: ViewportMetrics,
    geometry: GridGeometry,
    snap_rows: int = SCROLL_SNAP_ROWS,
    snap_columns: int = SCROLL_SNAP_COLUMNS,
) -> Optional[ScrollCommand]:
    """Scroll needed to bring ``cell`` fully into view, or None."""
    row_top, row_bottom = geometry.row_span(cell.actual_row_index)
    col_left, col_right = geometry.column_span(cell.position, cell.width)

    top = snap_into_view(
        row_top,
        row_bottom,
        metrics.scroll_top,
        metrics.viewport_height,
        snap_rows * geometry.row_height,
    )
    left = snap_into_view(
        col_left,
        col_right,
        metrics.scroll_left,
        metrics.viewport_width,
        snap_columns * geometry.unit_width,
        origin=geometry.origin_x,
    )
    if top is None and left is None:
        return None
    return ScrollCommand(top=top, left=left, smooth=True)


def next_auto_scroll_top(metrics: ViewportMetrics, geometry: GridGeometry, layout: Layout) -> float:
    """Next vertical offset for the idle auto-scroll.

    Steps down one row at a time. Once the trailing blank rows reach the top
    edge the guide wraps back to its first content row.
    """
    content_rows = len(layout.content_rows)
    if content_rows == 0 or geometry.content_height(layout) <= metrics.viewport_height:
        return metrics.scroll_top

    first_content_top, _ = geometry.row_span(layout.leading_blank_rows)
    trailing_top, _ = geometry.row_span(layout.leading_blank_rows + content_rows)

    next_top = metrics.scroll_top + geometry.row_height
    if next_top >= trailing_top:
        return first_content_top
    return next_top
