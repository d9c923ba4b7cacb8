"""Layout generation for the channel grid.

A row is a fixed number of grid-cell units (45 by default) split into blocks
of varying width. Widths are either drawn at random or derived from a weight
per item (streamer name length). Two rules shape every row:

- A block wider than one unit never starts one unit before a multiple of the
  alignment modulus; at such a position only a one-unit block is placed.
- The last block is clipped so the widths add up to exactly the row width.

Every ``repeat_interval``-th layout row reuses the widths of the row above it
so the grid shows vertical "time slot" seams like a printed TV guide.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Mapping, Optional, Sequence

from ..config.constants import (
    ALIGNMENT_MODULUS,
    BLANK_ROW_COUNT,
    MEDIUM_BLOCK_WIDTH,
    MEDIUM_NAME_LENGTH,
    NARROW_BLOCK_WIDTH,
    RANDOM_BLOCK_WIDTHS,
    ROW_MAX_WIDTH,
    ROW_REPEAT_INTERVAL,
    WIDE_BLOCK_WIDTH,
    WIDE_NAME_LENGTH,
)
from ..exceptions import LayoutError
from ..models.guide import Block, Category, Layout, Row, Stream

logger = logging.getLogger(__name__)


def width_for_weight(weight: int) -> int:
    """Map an item weight (name length) to a block width."""
    if weight >= WIDE_NAME_LENGTH:
        return WIDE_BLOCK_WIDTH
    if weight >= MEDIUM_NAME_LENGTH:
        return MEDIUM_BLOCK_WIDTH
    return NARROW_BLOCK_WIDTH


def is_before_boundary(position: float, alignment: int) -> bool:
    """True if ``position`` sits one unit before an alignment boundary."""
    return position % alignment == alignment - 1


def generate_row_blocks(
    weights: Optional[Sequence[int]] = None,
    max_width: float = ROW_MAX_WIDTH,
    alignment: int = ALIGNMENT_MODULUS,
    *,
    rng: Optional[random.Random] = None,
    row_id: str = "row",
    random_widths: Sequence[int] = RANDOM_BLOCK_WIDTHS,
) -> List[Block]:
    """Split one row into contiguous blocks.

    Args:
        weights: One weight per item. When given, slot ``n`` is sized from
            ``weights[n % len(weights)]`` and bound to that item's index.
            When empty or None, widths come from ``random_widths`` and
            stream indices are assigned sequentially.
        max_width: Row width in grid-cell units.
        alignment: Alignment modulus for blocks wider than one unit.
        rng: Random source; pass a seeded ``random.Random`` for repeatable rows.
        row_id: Prefix for block ids.
        random_widths: Allowed widths in random mode.

    Returns:
        Blocks whose widths sum to exactly ``max_width``.

    Raises:
        LayoutError: If the parameters cannot produce a row.
    """
    if max_width <= 0:
        raise LayoutError("Row width must be positive", max_width=max_width)
    if alignment < 1:
        raise LayoutError("Alignment modulus must be at least 1", alignment=alignment)
    if not random_widths or min(random_widths) <= 0:
        raise LayoutError("Random widths must be positive", random_widths=tuple(random_widths))

    rng = rng if rng is not None else random.Random()
    items = list(weights or [])

    blocks: List[Block] = []
    position: float = 0
    slot = 0
    while position < max_width:
        if is_before_boundary(position, alignment):
            width: float = 1
        elif items:
            width = width_for_weight(items[slot % len(items)])
        else:
            width = rng.choice(random_widths)
        width = min(width, max_width - position)

        stream_index = slot % len(items) if items else slot
        blocks.append(
            Block(
                id=f"{row_id}-{slot}",
                width=width,
                position=position,
                stream_index=stream_index,
            )
        )
        position += width
        slot += 1

    return blocks


def repeat_row_blocks(source: Sequence[Block], row_id: str) -> List[Block]:
    """Copy a row's widths and positions, rebinding streams 0, 1, 2, ..."""
    return [
        Block(
            id=f"{row_id}-{n}",
            width=block.width,
            position=block.position,
            stream_index=n,
        )
        for n, block in enumerate(source)
    ]


def blank_row(row_id: str, max_width: float = ROW_MAX_WIDTH) -> Row:
    """A single full-width blank block used as padding and loop boundary."""
    block = Block(id=f"{row_id}-0", width=max_width, position=0, stream_index=-1, is_blank=True)
    return Row(id=row_id, blocks=(block,), category_index=None)


def generate_layout(
    categories: Sequence[Category],
    streams_by_category: Optional[Mapping[str, Sequence[Stream]]] = None,
    include_leading_blank_rows: bool = True,
    blank_row_count: int = BLANK_ROW_COUNT,
    *,
    rng: Optional[random.Random] = None,
    size_by_name: bool = False,
    max_width: float = ROW_MAX_WIDTH,
    alignment: int = ALIGNMENT_MODULUS,
    repeat_interval: int = ROW_REPEAT_INTERVAL,
) -> Layout:
    """Build every row of the guide.

    Produces ``blank_row_count`` leading blank rows (only when
    ``include_leading_blank_rows``), one content row per category and
    ``blank_row_count`` trailing blank rows.

    Row ``r`` (layout index) with ``r % repeat_interval == 0`` and ``r > 0``
    copies the widths of row ``r - 1`` when that row is a content row.
    With ``size_by_name`` the blocks of a category with streams are sized by
    streamer name length; categories without streams use random widths.
    """
    if blank_row_count < 0:
        raise LayoutError("Blank row count cannot be negative", blank_row_count=blank_row_count)

    rng = rng if rng is not None else random.Random()
    streams_by_category = streams_by_category or {}
    leading = blank_row_count if include_leading_blank_rows else 0

    rows: List[Row] = [blank_row(f"blank-top-{n}", max_width) for n in range(leading)]

    for category_index, category in enumerate(categories):
        row_index = len(rows)
        row_id = f"row-{category_index}"
        previous = rows[-1] if rows else None

        if (
            repeat_interval > 0
            and row_index > 0
            and row_index % repeat_interval == 0
            and previous is not None
            and not previous.is_blank
        ):
            blocks = repeat_row_blocks(previous.blocks, row_id)
        else:
            weights = None
            if size_by_name:
                streams = streams_by_category.get(category.id) or ()
                weights = [len(stream.display_name) for stream in streams]
            blocks = generate_row_blocks(weights, max_width, alignment, rng=rng, row_id=row_id)

        rows.append(Row(id=row_id, blocks=tuple(blocks), category_index=category_index))

    rows.extend(blank_row(f"blank-bottom-{n}", max_width) for n in range(blank_row_count))

    logger.debug(
        f"Generated layout: {len(categories)} content rows, "
        f"{leading} leading / {blank_row_count} trailing blank rows"
    )
    return Layout(rows=rows, leading_blank_rows=leading, max_width=max_width)


def check_layout(layout: Layout, alignment: int = ALIGNMENT_MODULUS) -> List[str]:
    """Check a layout against the row invariants.

    Returns:
        List of problem descriptions (empty if the layout is sound).
    """
    problems: List[str] = []
    for row_index, row in enumerate(layout.rows):
        position: float = 0
        for block in row.blocks:
            if block.width <= 0:
                problems.append(f"row {row_index}: block {block.id} has width {block.width}")
            if block.position != position:
                problems.append(
                    f"row {row_index}: block {block.id} starts at {block.position}, expected {position}"
                )
            if not row.is_blank and block.width > 1 and is_before_boundary(block.position, alignment):
                problems.append(
                    f"row {row_index}: wide block {block.id} starts one unit before a boundary"
                )
            position += block.width
        if row.total_width != layout.max_width:
            problems.append(f"row {row_index}: widths sum to {row.total_width}, expected {layout.max_width}")
    return problems


def streams_for_rows(
    layout: Layout,
    categories: Sequence[Category],
    streams_by_category: Mapping[str, Sequence[Stream]],
) -> Dict[str, int]:
    """Count bound cells per row id that resolve to an actual stream."""
    counts: Dict[str, int] = {}
    for row in layout.content_rows:
        category = categories[row.category_index]
        streams = streams_by_category.get(category.id) or ()
        counts[row.id] = sum(1 for block in row.blocks if 0 <= block.stream_index < len(streams))
    return counts
