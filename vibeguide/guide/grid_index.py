"""Navigable index over the non-blank cells of a layout.

The index keeps one list of cells per content row, in layout order, and
skips blank rows entirely. Index-space coordinates (``FocusedCell``) are what
keyboard navigation works with; ``GridCell.actual_row_index`` maps back to the
layout row for scrolling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence

from ..models.guide import Category, Layout, Stream


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class FocusedCell:
    """Keyboard focus in index space."""

    row_index: int
    block_index: int


@dataclass(frozen=True)
class GridCell:
    """One navigable cell with everything needed to render and activate it."""

    actual_row_index: int
    block_index: int
    position: float
    width: float
    stream_index: int
    category_index: int
    has_stream: bool
    stream: Optional[Stream]
    category: Category

    @property
    def end(self) -> float:
        return self.position + self.width

    @property
    def rank(self) -> int:
        """Channel number shown for the category (1-based)."""
        return self.category_index + 1

    def contains(self, position: float) -> bool:
        return self.position <= position < self.end


@dataclass
class GridIndex:
    """Rows of navigable cells, blank layout rows omitted."""

    rows: List[List[GridCell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._index_by_actual: Dict[int, int] = {
            cells[0].actual_row_index: n for n, cells in enumerate(self.rows) if cells
        }

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not any(self.rows)

    def cell_count(self) -> int:
        return sum(len(cells) for cells in self.rows)

    def actual_row_index(self, row_index: int) -> Optional[int]:
        """Layout row for an index row, or None if out of range."""
        if 0 <= row_index < len(self.rows) and self.rows[row_index]:
            return self.rows[row_index][0].actual_row_index
        return None

    def index_row_for_actual(self, actual_row_index: int) -> Optional[int]:
        """Index row for a layout row, or None for blank/unknown rows."""
        return self._index_by_actual.get(actual_row_index)

    def is_valid(self, focus: Optional[FocusedCell]) -> bool:
        return (
            focus is not None
            and 0 <= focus.row_index < len(self.rows)
            and 0 <= focus.block_index < len(self.rows[focus.row_index])
        )

    def cell(self, focus: Optional[FocusedCell]) -> Optional[GridCell]:
        """Resolve a focus to its cell; stale or missing focus gives None."""
        if not self.is_valid(focus):
            return None
        return self.rows[focus.row_index][focus.block_index]

    def move(self, focus: Optional[FocusedCell], direction: Direction) -> Optional[FocusedCell]:
        """Resolve a directional move. Pure: same inputs, same output.

        Horizontal moves stay in the row and clamp at its ends. Vertical moves
        go to the adjacent index row and pick the block whose span contains
        the current block's left edge, else the block whose span lies nearest
        to it with ties going to the leftmost block. Vertical moves at the
        first or last row and moves from an invalid focus return the focus unchanged.
        """
        current = self.cell(focus)
        if current is None:
            return focus

        row = self.rows[focus.row_index]
        if direction == Direction.LEFT:
            return FocusedCell(focus.row_index, max(0, focus.block_index - 1))
        if direction == Direction.RIGHT:
            return FocusedCell(focus.row_index, min(len(row) - 1, focus.block_index + 1))

        step = -1 if direction == Direction.UP else 1
        target_row = focus.row_index + step
        if not 0 <= target_row < len(self.rows) or not self.rows[target_row]:
            return focus

        return FocusedCell(target_row, closest_block(self.rows[target_row], current.position))

    def first_cell(self) -> Optional[FocusedCell]:
        for row_index, cells in enumerate(self.rows):
            if cells:
                return FocusedCell(row_index, 0)
        return None


def span_distance(cell: GridCell, position: float) -> float:
    """Distance from ``position`` to the cell's ``[position, end)`` span; 0 inside it."""
    if position < cell.position:
        return cell.position - position
    if position >= cell.end:
        return position - cell.end
    return 0


def closest_block(cells: Sequence[GridCell], position: float) -> int:
    """Pick the block in ``cells`` to land on from a block starting at ``position``."""
    for block_index, cell in enumerate(cells):
        if cell.contains(position):
            return block_index

    best_index = 0
    best_distance = None
    for block_index, cell in enumerate(cells):
        distance = span_distance(cell, position)
        # Strict comparison keeps the leftmost block on ties
        if best_distance is None or distance < best_distance:
            best_index = block_index
            best_distance = distance
    return best_index


def build_grid_index(
    layout: Layout,
    categories: Sequence[Category],
    streams_by_category: Optional[Mapping[str, Sequence[Stream]]] = None,
) -> GridIndex:
    """Build the navigable index for a layout and its bound data.

    Blank rows are skipped. A row whose category index has no matching
    category (data shrank since the layout was built) is skipped as well.
    Cells whose stream index has no stream get ``has_stream=False``.
    """
    streams_by_category = streams_by_category or {}
    rows: List[List[GridCell]] = []

    for actual_row_index, row in enumerate(layout.rows):
        if row.is_blank:
            continue
        category_index = row.category_index
        if not 0 <= category_index < len(categories):
            continue

        category = categories[category_index]
        streams = streams_by_category.get(category.id) or ()
        cells = []
        for block_index, block in enumerate(row.blocks):
            if block.is_blank:
                continue
            stream = streams[block.stream_index] if 0 <= block.stream_index < len(streams) else None
            cells.append(
                GridCell(
                    actual_row_index=actual_row_index,
                    block_index=block_index,
                    position=block.position,
                    width=block.width,
                    stream_index=block.stream_index,
                    category_index=category_index,
                    has_stream=stream is not None,
                    stream=stream,
                    category=category,
                )
            )
        if cells:
            rows.append(cells)

    return GridIndex(rows=rows)
