"""Keyboard and pointer navigation over the grid index.

The navigator owns the focused cell. It resolves moves through the index,
asks the viewport to scroll the new cell into view, and forwards activations
to the featured-selection sink.
"""

from __future__ import annotations

import logging
from typing import Optional

from .featured import FeaturedSink
from .grid_index import Direction, FocusedCell, GridCell, GridIndex
from .viewport import (
    GridGeometry,
    ScrollCommand,
    Viewport,
    is_row_fully_visible,
    is_row_out_of_view,
    scroll_command_for,
)

logger = logging.getLogger(__name__)


class Navigator:
    """Focus state machine for the channel grid."""

    def __init__(
        self,
        index: Optional[GridIndex] = None,
        viewport: Optional[Viewport] = None,
        geometry: Optional[GridGeometry] = None,
        sink: Optional[FeaturedSink] = None,
    ) -> None:
        self.index = index if index is not None else GridIndex()
        self.viewport = viewport
        self.geometry = geometry if geometry is not None else GridGeometry()
        self.sink = sink
        self.focus: Optional[FocusedCell] = None
        self.last_scroll: Optional[ScrollCommand] = None

    @property
    def focused_cell(self) -> Optional[GridCell]:
        return self.index.cell(self.focus)

    def rebuild(self, index: GridIndex) -> None:
        """Swap in a freshly built index; a focus it cannot resolve is dropped."""
        self.index = index
        if self.focus is not None and not index.is_valid(self.focus):
            logger.debug(f"Dropping stale focus {self.focus} after rebuild")
            self.focus = None

    def clear_focus(self) -> None:
        self.focus = None

    def navigate(self, direction: Direction) -> Optional[FocusedCell]:
        """Handle one arrow key.

        Without a usable focus (none yet, stale after a reload, or scrolled
        out of view by auto-scroll) the key re-anchors focus on the top-left
        visible cell instead of moving.
        """
        if self.index.is_empty:
            return self.focus

        if self._needs_anchor():
            self.focus = self.anchor_to_visible()
            logger.debug(f"Re-anchored focus to {self.focus}")
        else:
            self.focus = self.index.move(self.focus, direction)

        self.scroll_focus_into_view()
        return self.focus

    def anchor_to_visible(self) -> Optional[FocusedCell]:
        """Top-left non-blank cell inside the viewport, or the first cell."""
        if self.viewport is None:
            return self.index.first_cell()

        metrics = self.viewport.metrics()
        row_index = None
        for n, cells in enumerate(self.index.rows):
            if cells and is_row_fully_visible(cells[0].actual_row_index, metrics, self.geometry):
                row_index = n
                break
        if row_index is None:
            for n, cells in enumerate(self.index.rows):
                if cells and not is_row_out_of_view(cells[0].actual_row_index, metrics, self.geometry):
                    row_index = n
                    break
        if row_index is None:
            return self.index.first_cell()

        cells = self.index.rows[row_index]
        block_index = 0
        for n, cell in enumerate(cells):
            left, _ = self.geometry.column_span(cell.position, cell.width)
            if metrics.scroll_left <= left < metrics.scroll_right:
                block_index = n
                break
        else:
            for n, cell in enumerate(cells):
                _, right = self.geometry.column_span(cell.position, cell.width)
                if right > metrics.scroll_left:
                    block_index = n
                    break
        return FocusedCell(row_index, block_index)

    def scroll_focus_into_view(self) -> Optional[ScrollCommand]:
        """Issue a scroll command if the focused cell is not fully visible."""
        cell = self.focused_cell
        if cell is None or self.viewport is None:
            return None
        command = scroll_command_for(cell, self.viewport.metrics(), self.geometry)
        if command is not None:
            self.viewport.scroll_to(top=command.top, left=command.left, smooth=command.smooth)
            self.last_scroll = command
        return command

    def activate(self) -> bool:
        """Feature the focused cell's stream. No-op for empty cells."""
        return self._activate_cell(self.focused_cell)

    def click(self, row_index: int, block_index: int) -> bool:
        """Pointer selection: feature the clicked cell and drop keyboard focus."""
        activated = self._activate_cell(self.index.cell(FocusedCell(row_index, block_index)))
        self.focus = None
        return activated

    def _activate_cell(self, cell: Optional[GridCell]) -> bool:
        if cell is None or not cell.has_stream or self.sink is None:
            return False
        self.sink.set_featured_selection(cell.stream, cell.category, cell.rank)
        self.sink.set_auto_rotate_enabled(False)
        return True

    def _needs_anchor(self) -> bool:
        cell = self.focused_cell
        if cell is None:
            return True
        if self.viewport is None:
            return False
        return is_row_out_of_view(cell.actual_row_index, self.viewport.metrics(), self.geometry)
