"""Featured stream selection.

The featured stream is shown in the preview panel above the grid. While auto
rotation is enabled a timer steps through the top stream of each channel;
activating a cell pins that stream and turns rotation off.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Protocol, Sequence

from ..models.guide import Category, Stream

logger = logging.getLogger(__name__)


class FeaturedSink(Protocol):
    """Receiver of cell activations."""

    def set_featured_selection(self, stream: Stream, category: Category, rank: int) -> None:
        ...

    def set_auto_rotate_enabled(self, enabled: bool) -> None:
        ...


@dataclass(frozen=True)
class FeaturedCandidate:
    stream: Stream
    category: Category
    rank: int


def featured_candidates(
    categories: Sequence[Category],
    streams_by_category: Mapping[str, Sequence[Stream]],
) -> List[FeaturedCandidate]:
    """Top non-mature stream of every channel, in channel order."""
    candidates = []
    for category_index, category in enumerate(categories):
        streams = streams_by_category.get(category.id) or ()
        stream = next((s for s in streams if not s.is_mature), None)
        if stream is not None:
            candidates.append(FeaturedCandidate(stream, category, category_index + 1))
    return candidates


class FeaturedSelection:
    """Current featured stream plus the auto-rotate switch."""

    def __init__(self, on_change: Optional[Callable[["FeaturedSelection"], None]] = None) -> None:
        self.stream: Optional[Stream] = None
        self.category: Optional[Category] = None
        self.rank: Optional[int] = None
        self.auto_rotate_enabled = True
        self.on_change = on_change
        self._rotation_index = -1

    @property
    def has_selection(self) -> bool:
        return self.stream is not None

    def set_featured_selection(self, stream: Stream, category: Category, rank: int) -> None:
        logger.debug(f"Featuring {stream.user_login} on channel {rank} ({category.name})")
        self.stream = stream
        self.category = category
        self.rank = rank
        self._notify()

    def set_auto_rotate_enabled(self, enabled: bool) -> None:
        if self.auto_rotate_enabled != enabled:
            logger.debug(f"Featured auto-rotate {'enabled' if enabled else 'disabled'}")
        self.auto_rotate_enabled = enabled

    def rotate(self, candidates: Sequence[FeaturedCandidate]) -> bool:
        """Advance to the next candidate if rotation is on.

        Returns:
            True if the featured stream changed.
        """
        if not self.auto_rotate_enabled or not candidates:
            return False
        self._rotation_index = (self._rotation_index + 1) % len(candidates)
        candidate = candidates[self._rotation_index]
        self.set_featured_selection(candidate.stream, candidate.category, candidate.rank)
        return True

    def clear(self) -> None:
        self.stream = None
        self.category = None
        self.rank = None
        self._rotation_index = -1
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
