"""Guide state owner.

Holds the fetched categories and streams, the generated layout and the grid
index, and rebuilds them whenever the data or the session flag changes.
Every rebuild replaces the previous layout/index wholesale.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from ..config import settings, ui_config
from ..config.constants import BLANK_ROW_COUNT, DEFAULT_CATEGORY_LIMIT, DEFAULT_STREAM_LIMIT
from ..models.guide import Category, Layout, Stream
from ..services.twitch_client import TwitchClient
from .featured import FeaturedCandidate, FeaturedSelection, featured_candidates
from .grid_index import GridIndex, build_grid_index
from .layout import generate_layout
from .navigator import Navigator

logger = logging.getLogger(__name__)


@dataclass
class GuideConfig:
    """Inputs read once when the guide starts."""

    include_leading_blank_rows: bool = True
    size_by_name: bool = False
    blank_row_count: int = BLANK_ROW_COUNT
    category_limit: int = DEFAULT_CATEGORY_LIMIT
    stream_limit: int = DEFAULT_STREAM_LIMIT
    seed: Optional[int] = None

    @classmethod
    def from_settings(cls, **overrides) -> "GuideConfig":
        """Build from the persisted UI config and environment variables.

        Keyword overrides whose value is None are ignored.
        """
        config = cls(
            include_leading_blank_rows=ui_config.get_include_leading_blank_rows(),
            size_by_name=ui_config.get_size_by_name(),
            category_limit=settings.get_limit("VIBEGUIDE_CATEGORY_LIMIT"),
            stream_limit=settings.get_limit("VIBEGUIDE_STREAM_LIMIT"),
        )
        for name, value in overrides.items():
            if value is not None:
                setattr(config, name, value)
        return config


class GuideController:
    """Owns guide data, layout, index, focus and featured selection."""

    def __init__(
        self,
        client: Optional[TwitchClient] = None,
        config: Optional[GuideConfig] = None,
        *,
        navigator: Optional[Navigator] = None,
        featured: Optional[FeaturedSelection] = None,
    ) -> None:
        self.client = client
        self.config = config if config is not None else GuideConfig()
        self.categories: List[Category] = []
        self.streams_by_category: Dict[str, List[Stream]] = {}
        self.layout = Layout()
        self.index = GridIndex()
        self.featured = featured if featured is not None else FeaturedSelection()
        self.navigator = navigator if navigator is not None else Navigator(sink=self.featured)
        if self.navigator.sink is None:
            self.navigator.sink = self.featured
        # Called after every rebuild
        self.on_rebuild: Optional[Callable[["GuideController"], None]] = None
        self._rng = random.Random(self.config.seed)
        self._generation = 0

    def set_categories(self, categories: Sequence[Category]) -> None:
        """Category data arrived. Streams of vanished categories are dropped."""
        self.categories = list(categories)
        known = {category.id for category in self.categories}
        self.streams_by_category = {
            category_id: streams
            for category_id, streams in self.streams_by_category.items()
            if category_id in known
        }
        self.rebuild()

    def set_streams(self, streams_by_category: Mapping[str, Sequence[Stream]]) -> None:
        """Stream data arrived. Random-width layouts keep their shape."""
        self.streams_by_category = {key: list(value) for key, value in streams_by_category.items()}
        self.rebuild(regenerate_layout=self.config.size_by_name)

    def set_include_leading_blank_rows(self, enabled: bool) -> None:
        if enabled == self.config.include_leading_blank_rows:
            return
        self.config.include_leading_blank_rows = enabled
        self.rebuild()

    def set_size_by_name(self, enabled: bool) -> None:
        if enabled == self.config.size_by_name:
            return
        self.config.size_by_name = enabled
        self.rebuild()

    def rebuild(self, regenerate_layout: bool = True) -> None:
        """Recompute the layout (optionally) and the index from current data."""
        if regenerate_layout:
            rng = random.Random(self.config.seed) if self.config.seed is not None else self._rng
            self.layout = generate_layout(
                self.categories,
                self.streams_by_category,
                self.config.include_leading_blank_rows,
                self.config.blank_row_count,
                rng=rng,
                size_by_name=self.config.size_by_name,
            )
        self.index = build_grid_index(self.layout, self.categories, self.streams_by_category)
        self.navigator.rebuild(self.index)
        logger.debug(
            f"Rebuilt guide: {len(self.layout)} layout rows, "
            f"{len(self.index)} index rows, {self.index.cell_count()} cells"
        )
        if self.on_rebuild is not None:
            self.on_rebuild(self)

    async def load(self) -> bool:
        """Fetch categories, then every category's streams concurrently.

        A newer ``load`` supersedes an older one; the older call's results
        are discarded.

        Returns:
            False if this load was superseded.
        """
        if self.client is None:
            logger.warning("No API client configured; guide stays empty")
            return False

        self._generation += 1
        generation = self._generation

        categories = await self.client.fetch_top_categories(self.config.category_limit)
        if generation != self._generation:
            logger.debug(f"Discarding categories from superseded load {generation}")
            return False
        self.set_categories(categories)

        results = await asyncio.gather(
            *(
                self.client.fetch_streams_for_category(category.id, self.config.stream_limit)
                for category in categories
            )
        )
        if generation != self._generation:
            logger.debug(f"Discarding streams from superseded load {generation}")
            return False
        self.set_streams({category.id: streams for category, streams in zip(categories, results)})
        logger.info(
            f"Loaded {len(categories)} channels, "
            f"{sum(len(s) for s in results)} streams"
        )
        return True

    def featured_candidates(self) -> List[FeaturedCandidate]:
        return featured_candidates(self.categories, self.streams_by_category)

    def rotate_featured(self) -> bool:
        return self.featured.rotate(self.featured_candidates())
