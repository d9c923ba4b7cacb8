"""
Data models for the channel guide.

Category and Stream mirror the backend API payloads. Block, Row and Layout
describe the generated grid: a Layout is an ordered list of Rows, a Row is an
ordered list of contiguous Blocks measured in grid-cell units.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Category:
    """A Twitch game/category. One content row per category."""

    id: str
    name: str
    box_art_url: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Category":
        """Create from a backend API category object."""
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            box_art_url=str(data.get("box_art_url") or ""),
        )


@dataclass(frozen=True)
class Stream:
    """A live stream belonging to a category."""

    user_login: str
    user_name: str
    is_mature: bool = False
    id: str = ""
    game_id: str = ""
    game_name: str = ""
    title: str = ""
    viewer_count: int = 0
    started_at: Optional[str] = None
    language: str = ""
    thumbnail_url: str = ""
    tags: Tuple[str, ...] = ()

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Stream":
        """Create from a backend API stream object."""
        user_login = str(data.get("user_login") or "")
        return cls(
            user_login=user_login,
            user_name=str(data.get("user_name") or user_login),
            is_mature=bool(data.get("is_mature", False)),
            id=str(data.get("id") or ""),
            game_id=str(data.get("game_id") or ""),
            game_name=str(data.get("game_name") or ""),
            title=str(data.get("title") or ""),
            viewer_count=int(data.get("viewer_count") or 0),
            started_at=data.get("started_at"),
            language=str(data.get("language") or ""),
            thumbnail_url=str(data.get("thumbnail_url") or ""),
            tags=tuple(data.get("tags") or ()),
        )

    @property
    def display_name(self) -> str:
        return self.user_name or self.user_login


@dataclass(frozen=True)
class Block:
    """One cell-span within a grid row.

    ``position`` is the starting offset in grid-cell units and always equals
    the sum of the widths of the blocks before it. ``stream_index`` indexes
    the row's stream list, or is -1 for blank blocks.
    """

    id: str
    width: float
    position: float
    stream_index: int = -1
    is_blank: bool = False

    @property
    def end(self) -> float:
        return self.position + self.width

    def contains(self, position: float) -> bool:
        """True if ``position`` falls inside ``[position, position + width)``."""
        return self.position <= position < self.end


@dataclass(frozen=True)
class Row:
    """An ordered list of blocks, bound to a category or blank."""

    id: str
    blocks: Tuple[Block, ...]
    category_index: Optional[int] = None

    @property
    def is_blank(self) -> bool:
        return self.category_index is None

    @property
    def total_width(self) -> float:
        return sum(block.width for block in self.blocks)

    def widths(self) -> List[float]:
        return [block.width for block in self.blocks]


@dataclass
class Layout:
    """All rows of one guide session, in display order."""

    rows: List[Row] = field(default_factory=list)
    leading_blank_rows: int = 0
    max_width: float = 0

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def content_rows(self) -> List[Row]:
        return [row for row in self.rows if not row.is_blank]

    def row_for_category(self, category_index: int) -> Optional[Row]:
        for row in self.rows:
            if row.category_index == category_index:
                return row
        return None
