"""Tests for the navigable grid index."""

from typing import List

import pytest

from conftest import make_categories, make_streams
from vibeguide.guide.grid_index import (
    Direction,
    FocusedCell,
    GridCell,
    build_grid_index,
    closest_block,
    span_distance,
)
from vibeguide.guide.layout import blank_row
from vibeguide.models.guide import Block, Category, Layout, Row


def make_row(row_id: str, widths: List[float], category_index: int) -> Row:
    blocks = []
    position = 0
    for n, width in enumerate(widths):
        blocks.append(Block(id=f"{row_id}-{n}", width=width, position=position, stream_index=n))
        position += width
    return Row(id=row_id, blocks=tuple(blocks), category_index=category_index)


@pytest.fixture
def small_layout() -> Layout:
    return Layout(
        rows=[
            blank_row("blank-top-0", 12),
            make_row("row-0", [4, 4, 4], 0),
            blank_row("blank-mid-0", 12),
            make_row("row-1", [2, 1, 6, 3], 1),
            blank_row("blank-bottom-0", 12),
        ],
        leading_blank_rows=1,
        max_width=12,
    )


@pytest.fixture
def small_categories() -> List[Category]:
    return make_categories(2)


@pytest.fixture
def small_streams(small_categories):
    return {
        "cat0": make_streams(small_categories[0], 3),
        "cat1": make_streams(small_categories[1], 2),
    }


@pytest.fixture
def index(small_layout, small_categories, small_streams):
    return build_grid_index(small_layout, small_categories, small_streams)


def make_cell(position: float, width: float) -> GridCell:
    return GridCell(
        actual_row_index=0,
        block_index=0,
        position=position,
        width=width,
        stream_index=0,
        category_index=0,
        has_stream=False,
        stream=None,
        category=Category(id="c", name="C"),
    )


class TestBuildGridIndex:
    def test_blank_rows_skipped(self, index):
        assert len(index) == 2
        assert index.cell_count() == 7

    def test_actual_row_mapping(self, index):
        assert index.actual_row_index(0) == 1
        assert index.actual_row_index(1) == 3
        assert index.actual_row_index(2) is None
        assert index.index_row_for_actual(3) == 1
        assert index.index_row_for_actual(2) is None

    def test_cells_resolve_streams(self, index, small_streams, small_categories):
        cell = index.rows[1][1]

        assert cell.has_stream
        assert cell.stream == small_streams["cat1"][1]
        assert cell.category == small_categories[1]
        assert cell.rank == 2

    def test_missing_stream_marks_cell_empty(self, index):
        cell = index.rows[1][2]

        assert not cell.has_stream
        assert cell.stream is None

    def test_rows_for_missing_categories_skipped(self, small_layout, small_categories, small_streams):
        index = build_grid_index(small_layout, small_categories[:1], small_streams)
        assert len(index) == 1

    def test_rebuild_is_idempotent(self, small_layout, small_categories, small_streams):
        first = build_grid_index(small_layout, small_categories, small_streams)
        second = build_grid_index(small_layout, small_categories, small_streams)
        assert first == second

    def test_empty_layout(self):
        index = build_grid_index(Layout(), [])

        assert index.is_empty
        assert index.first_cell() is None


class TestMove:
    def test_right_and_left(self, index):
        assert index.move(FocusedCell(0, 0), Direction.RIGHT) == FocusedCell(0, 1)
        assert index.move(FocusedCell(0, 1), Direction.LEFT) == FocusedCell(0, 0)

    def test_horizontal_clamps(self, index):
        assert index.move(FocusedCell(0, 0), Direction.LEFT) == FocusedCell(0, 0)
        assert index.move(FocusedCell(0, 2), Direction.RIGHT) == FocusedCell(0, 2)

    def test_down_prefers_overlapping_block(self, index):
        # Left edge 4 falls inside the 6-wide block spanning 3..9
        assert index.move(FocusedCell(0, 1), Direction.DOWN) == FocusedCell(1, 2)

    def test_up_prefers_overlapping_block(self, index):
        assert index.move(FocusedCell(1, 1), Direction.UP) == FocusedCell(0, 0)
        assert index.move(FocusedCell(1, 3), Direction.UP) == FocusedCell(0, 2)

    def test_vertical_clamps(self, index):
        assert index.move(FocusedCell(0, 1), Direction.UP) == FocusedCell(0, 1)
        assert index.move(FocusedCell(1, 1), Direction.DOWN) == FocusedCell(1, 1)

    def test_invalid_focus_unchanged(self, index):
        assert index.move(FocusedCell(5, 0), Direction.DOWN) == FocusedCell(5, 0)
        assert index.move(None, Direction.RIGHT) is None

    def test_move_is_deterministic(self, index):
        focus = FocusedCell(0, 2)
        assert index.move(focus, Direction.DOWN) == index.move(focus, Direction.DOWN)

    def test_down_containment_beats_nearer_left_edge(self, small_categories):
        layout = Layout(
            rows=[make_row("row-0", [4, 4], 0), make_row("row-1", [5, 3], 1)],
            max_width=8,
        )
        index = build_grid_index(layout, small_categories)

        # Left edge 4 sits inside 0..5 although the block at 5 starts closer
        assert index.move(FocusedCell(0, 1), Direction.DOWN) == FocusedCell(1, 0)


class TestClosestBlock:
    def test_containing_block_wins(self):
        cells = [make_cell(0, 3), make_cell(3, 3)]
        assert closest_block(cells, 4) == 1

    def test_nearest_span(self):
        cells = [make_cell(0, 2), make_cell(4, 2)]
        assert closest_block(cells, 3.5) == 1

    def test_touching_left_block(self):
        cells = [make_cell(0, 2), make_cell(4, 2)]
        assert closest_block(cells, 2) == 0

    def test_containment_beats_nearer_left_edge(self):
        cells = [make_cell(0, 5), make_cell(5, 3)]
        assert closest_block(cells, 4) == 0

    def test_equidistant_tie_goes_to_leftmost(self):
        # 3 is one unit past 0..2 and one unit before 4..6
        cells = [make_cell(0, 2), make_cell(4, 2)]
        assert closest_block(cells, 3) == 0

    def test_span_distance(self):
        cell = make_cell(4, 2)
        assert span_distance(cell, 3) == 1
        assert span_distance(cell, 5) == 0
        assert span_distance(cell, 7.5) == 1.5


class TestFocusHelpers:
    def test_is_valid(self, index):
        assert index.is_valid(FocusedCell(1, 3))
        assert not index.is_valid(FocusedCell(1, 4))
        assert not index.is_valid(FocusedCell(-1, 0))
        assert not index.is_valid(None)

    def test_cell_lookup(self, index):
        assert index.cell(FocusedCell(0, 2)).position == 8
        assert index.cell(FocusedCell(3, 0)) is None

    def test_first_cell(self, index):
        assert index.first_cell() == FocusedCell(0, 0)
