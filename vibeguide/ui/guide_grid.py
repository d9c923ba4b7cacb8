"""Channel grid widgets.

``GuideGrid`` renders a ``Layout`` as one horizontal strip per row: a
channel label followed by program cells sized in grid units. Blank rows render
as empty strips of the same size.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from rich.text import Text
from textual import events
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Static

from ..config.constants import CHANNEL_LABEL_WIDTH, ROW_HEIGHT, UNIT_WIDTH
from ..guide.grid_index import FocusedCell, GridCell, GridIndex
from ..models.guide import Category, Layout

logger = logging.getLogger(__name__)

NO_STREAM_LABEL = "No Stream"


def cell_label(cell: GridCell, columns: int) -> Text:
    """Text shown inside a program cell, trimmed to ``columns``."""
    width = max(1, columns - 1)
    if not cell.has_stream:
        lines = [Text(NO_STREAM_LABEL, style="dim italic")]
    else:
        name = Text(cell.stream.display_name, style="bold")
        if cell.stream.is_mature:
            name.append(" 18+", style="red")
        lines = [name]
        if cell.stream.title:
            lines.append(Text(cell.stream.title, style="dim"))
    for line in lines:
        line.truncate(width, overflow="ellipsis")
    return Text("\n").join(lines)


class ProgramCell(Static):
    """One stream slot in the grid."""

    class Selected(Message):
        """Posted when a cell is clicked."""

        def __init__(self, row_index: int, block_index: int) -> None:
            self.row_index = row_index
            self.block_index = block_index
            super().__init__()

    def __init__(self, cell: GridCell, row_index: int, block_index: int, unit_width: int = UNIT_WIDTH) -> None:
        columns = max(1, round(cell.width * unit_width))
        super().__init__(cell_label(cell, columns), classes="program-cell")
        self.cell = cell
        self.row_index = row_index
        self.block_index = block_index
        self.styles.width = columns
        if not cell.has_stream:
            self.add_class("-empty")

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(self.Selected(self.row_index, self.block_index))


class ChannelLabel(Static):
    """Channel number and category name at the start of a row.

    The label lives in the row strip, so it scrolls sideways with the cells.
    """

    def __init__(self, category: Category, rank: int) -> None:
        text = Text(f"CH {rank}\n", style="dim")
        text.append(category.name, style="bold")
        super().__init__(text, classes="channel-label")


class GuideGrid(Vertical):
    """All rows of the guide; rebuilt wholesale from a layout and index."""

    DEFAULT_CSS = f"""
    GuideGrid {{
        width: auto;
        height: auto;
    }}

    GuideGrid .guide-row {{
        width: auto;
        height: {ROW_HEIGHT};
    }}

    GuideGrid .channel-label {{
        width: {CHANNEL_LABEL_WIDTH};
        height: {ROW_HEIGHT};
        background: $primary;
        padding: 0 1;
    }}

    GuideGrid .program-cell {{
        height: {ROW_HEIGHT};
        background: $secondary;
        border-left: vkey $background;
        padding: 0 0 0 1;
    }}

    GuideGrid .program-cell.-empty {{
        color: $text-muted;
    }}

    GuideGrid .program-cell.-focused {{
        background: $accent;
        color: $background;
    }}

    GuideGrid .blank-row {{
        height: {ROW_HEIGHT};
    }}
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._cells: Dict[Tuple[int, int], ProgramCell] = {}
        self._focused: Optional[FocusedCell] = None

    @property
    def cell_widgets(self) -> Dict[Tuple[int, int], ProgramCell]:
        return self._cells

    async def populate(self, layout: Layout, index: GridIndex) -> None:
        """Replace every row with widgets for ``layout``."""
        await self.remove_children()
        self._cells = {}
        self._focused = None

        row_width = CHANNEL_LABEL_WIDTH + round(layout.max_width * UNIT_WIDTH)
        strips = []
        for actual_row_index, row in enumerate(layout.rows):
            row_index = index.index_row_for_actual(actual_row_index)
            if row.is_blank or row_index is None:
                blank = Static("", classes="blank-row")
                blank.styles.width = row_width
                strips.append(blank)
                continue

            cells = index.rows[row_index]
            widgets = [ChannelLabel(cells[0].category, cells[0].rank)]
            for block_index, cell in enumerate(cells):
                widget = ProgramCell(cell, row_index, block_index)
                self._cells[(row_index, block_index)] = widget
                widgets.append(widget)
            strips.append(Horizontal(*widgets, classes="guide-row"))

        await self.mount_all(strips)
        logger.debug(f"Rendered {len(strips)} rows, {len(self._cells)} cells")

    def show_focus(self, focus: Optional[FocusedCell]) -> None:
        """Move the focus highlight."""
        if self._focused is not None:
            previous = self._cells.get((self._focused.row_index, self._focused.block_index))
            if previous is not None:
                previous.remove_class("-focused")
        self._focused = focus
        if focus is not None:
            current = self._cells.get((focus.row_index, focus.block_index))
            if current is not None:
                current.add_class("-focused")
