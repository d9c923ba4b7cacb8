"""Shared pytest fixtures for vibeguide tests."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

import pytest

from vibeguide.config import ui_config
from vibeguide.config.constants import ENV_VAR_DEFINITIONS
from vibeguide.models.guide import Category, Stream


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep UI config writes and env vars away from the real user."""
    monkeypatch.setattr(ui_config, "VIBEGUIDE_CONFIG_DIR", tmp_path / "config")
    for name in ENV_VAR_DEFINITIONS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "config"


def make_categories(count: int) -> List[Category]:
    return [Category(id=f"cat{n}", name=f"Game {n}") for n in range(count)]


def make_streams(category: Category, count: int, mature: Optional[set] = None) -> List[Stream]:
    mature = mature or set()
    return [
        Stream(
            user_login=f"{category.id}_user{n}",
            user_name=f"{category.id} User {n}",
            is_mature=n in mature,
            game_id=category.id,
            game_name=category.name,
            title=f"Stream {n} in {category.name}",
            viewer_count=1000 - n,
        )
        for n in range(count)
    ]


def make_streams_by_category(categories: List[Category], count: int) -> Dict[str, List[Stream]]:
    return {category.id: make_streams(category, count) for category in categories}


@pytest.fixture
def categories() -> List[Category]:
    return make_categories(12)


@pytest.fixture
def streams_by_category(categories) -> Dict[str, List[Stream]]:
    return make_streams_by_category(categories, 3)


class FakeClient:
    """Stands in for TwitchClient with canned data and call tracking."""

    def __init__(
        self,
        categories: List[Category],
        streams_by_category: Dict[str, List[Stream]],
        category_delay: float = 0,
    ) -> None:
        self.categories = categories
        self.streams_by_category = streams_by_category
        self.category_delay = category_delay
        self.category_calls: List[int] = []
        self.stream_calls: List[tuple] = []
        self.closed = False

    async def fetch_top_categories(self, limit: int = 20) -> List[Category]:
        self.category_calls.append(limit)
        if self.category_delay:
            await asyncio.sleep(self.category_delay)
        return list(self.categories[:limit])

    async def fetch_streams_for_category(self, category_id: str, limit: int = 20) -> List[Stream]:
        self.stream_calls.append((category_id, limit))
        return list(self.streams_by_category.get(category_id, [])[:limit])

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client(categories, streams_by_category) -> FakeClient:
    return FakeClient(categories, streams_by_category)
