"""Tests for keyboard/pointer navigation and activation."""

import random
from unittest.mock import MagicMock

import pytest

from conftest import make_categories
from vibeguide.guide.featured import FeaturedSelection
from vibeguide.guide.grid_index import Direction, FocusedCell, GridIndex, build_grid_index
from vibeguide.guide.layout import generate_layout
from vibeguide.guide.navigator import Navigator
from vibeguide.guide.viewport import GridGeometry, StaticViewport


@pytest.fixture
def index(categories, streams_by_category) -> GridIndex:
    layout = generate_layout(categories, streams_by_category, rng=random.Random(0))
    return build_grid_index(layout, categories, streams_by_category)


@pytest.fixture
def viewport() -> StaticViewport:
    return StaticViewport(viewport_height=24, viewport_width=80)


@pytest.fixture
def sink() -> MagicMock:
    return MagicMock()


@pytest.fixture
def navigator(index, viewport, sink) -> Navigator:
    return Navigator(index, viewport, GridGeometry(row_height=3, unit_width=4, origin_x=18), sink)


class TestNavigate:
    def test_first_key_anchors_without_moving(self, navigator):
        assert navigator.navigate(Direction.DOWN) == FocusedCell(0, 0)

    def test_moves_after_anchor(self, navigator):
        navigator.navigate(Direction.DOWN)
        assert navigator.navigate(Direction.DOWN) == FocusedCell(1, 0)
        assert navigator.navigate(Direction.RIGHT) == FocusedCell(1, 1)

    def test_scrolls_focus_into_view(self, navigator, viewport):
        navigator.navigate(Direction.DOWN)
        for _ in range(3):
            navigator.navigate(Direction.DOWN)
        assert viewport.history == []

        # Fifth content row sits at layout row 8, offsets 24..27
        navigator.navigate(Direction.DOWN)
        assert navigator.focus == FocusedCell(4, 0)
        assert viewport.scroll_top == 12
        assert navigator.last_scroll.top == 12

    def test_reanchors_after_drift(self, navigator, viewport):
        navigator.focus = FocusedCell(0, 0)
        viewport.scroll_top = 30

        # Layout row 10 is the first fully visible row; it holds content row 6
        assert navigator.navigate(Direction.RIGHT) == FocusedCell(6, 0)

    def test_anchor_uses_leftmost_visible_block(self, navigator, viewport, index):
        viewport.scroll_left = 50
        expected = next(
            n for n, cell in enumerate(index.rows[0]) if 50 <= 18 + cell.position * 4 < 130
        )

        assert navigator.navigate(Direction.LEFT) == FocusedCell(0, expected)

    def test_empty_index(self, viewport):
        navigator = Navigator(GridIndex(), viewport)

        assert navigator.navigate(Direction.DOWN) is None
        assert viewport.history == []

    def test_without_viewport_anchors_to_first_cell(self, index):
        navigator = Navigator(index)
        assert navigator.navigate(Direction.UP) == FocusedCell(0, 0)

    def test_clear_focus(self, navigator):
        navigator.navigate(Direction.DOWN)
        navigator.clear_focus()

        assert navigator.focus is None
        assert navigator.focused_cell is None


class TestRebuild:
    def test_stale_focus_dropped(self, navigator):
        navigator.focus = FocusedCell(11, 0)
        categories = make_categories(3)
        layout = generate_layout(categories, rng=random.Random(0))

        navigator.rebuild(build_grid_index(layout, categories))
        assert navigator.focus is None

    def test_valid_focus_kept(self, navigator, index):
        navigator.focus = FocusedCell(2, 1)
        navigator.rebuild(index)
        assert navigator.focus == FocusedCell(2, 1)


class TestActivation:
    def test_activate_features_stream(self, navigator, sink, categories, streams_by_category):
        navigator.focus = FocusedCell(0, 0)

        assert navigator.activate()
        sink.set_featured_selection.assert_called_once_with(
            streams_by_category["cat0"][0], categories[0], 1
        )
        sink.set_auto_rotate_enabled.assert_called_once_with(False)

    def test_activate_empty_cell_is_noop(self, navigator, sink):
        # Only three streams per channel; slot 5 is a "No Stream" cell
        navigator.focus = FocusedCell(0, 5)

        assert not navigator.activate()
        sink.set_featured_selection.assert_not_called()
        sink.set_auto_rotate_enabled.assert_not_called()

    def test_activate_without_focus(self, navigator, sink):
        assert not navigator.activate()
        sink.set_featured_selection.assert_not_called()

    def test_click_activates_and_clears_focus(self, navigator, sink, categories, streams_by_category):
        navigator.focus = FocusedCell(0, 0)

        assert navigator.click(1, 0)
        assert navigator.focus is None
        sink.set_featured_selection.assert_called_once_with(
            streams_by_category["cat1"][0], categories[1], 2
        )

    def test_click_outside_grid(self, navigator, sink):
        assert not navigator.click(50, 0)
        sink.set_featured_selection.assert_not_called()

    def test_activation_stops_rotation(self, index):
        featured = FeaturedSelection()
        navigator = Navigator(index, sink=featured)
        navigator.focus = FocusedCell(3, 1)

        navigator.activate()
        assert featured.rank == 4
        assert featured.auto_rotate_enabled is False
