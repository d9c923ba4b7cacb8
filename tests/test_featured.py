"""Tests for featured stream selection and rotation."""

from unittest.mock import MagicMock

from conftest import make_categories, make_streams
from vibeguide.guide.featured import FeaturedSelection, featured_candidates


class TestFeaturedCandidates:
    def test_first_safe_stream_per_channel(self):
        categories = make_categories(3)
        streams = {
            "cat0": make_streams(categories[0], 3, mature={0}),
            "cat2": make_streams(categories[2], 2),
        }

        candidates = featured_candidates(categories, streams)

        assert [c.rank for c in candidates] == [1, 3]
        assert candidates[0].stream == streams["cat0"][1]
        assert candidates[1].category == categories[2]

    def test_all_mature_channel_skipped(self):
        categories = make_categories(1)
        streams = {"cat0": make_streams(categories[0], 2, mature={0, 1})}

        assert featured_candidates(categories, streams) == []


class TestFeaturedSelection:
    def test_starts_empty(self):
        featured = FeaturedSelection()

        assert not featured.has_selection
        assert featured.auto_rotate_enabled

    def test_rotate_cycles_candidates(self):
        categories = make_categories(2)
        streams = {c.id: make_streams(c, 1) for c in categories}
        candidates = featured_candidates(categories, streams)
        featured = FeaturedSelection()

        ranks = []
        for _ in range(3):
            assert featured.rotate(candidates)
            ranks.append(featured.rank)
        assert ranks == [1, 2, 1]

    def test_rotate_without_candidates(self):
        featured = FeaturedSelection()

        assert not featured.rotate([])
        assert not featured.has_selection

    def test_rotation_disabled_after_manual_pick(self):
        categories = make_categories(2)
        streams = {c.id: make_streams(c, 1) for c in categories}
        candidates = featured_candidates(categories, streams)
        featured = FeaturedSelection()

        featured.set_featured_selection(streams["cat1"][0], categories[1], 2)
        featured.set_auto_rotate_enabled(False)

        assert not featured.rotate(candidates)
        assert featured.rank == 2
        assert featured.stream == streams["cat1"][0]

    def test_on_change_notified(self):
        listener = MagicMock()
        featured = FeaturedSelection(on_change=listener)
        category = make_categories(1)[0]
        stream = make_streams(category, 1)[0]

        featured.set_featured_selection(stream, category, 1)
        featured.clear()

        assert listener.call_count == 2
        listener.assert_called_with(featured)
        assert not featured.has_selection
        assert featured.rank is None
