"""Map a character span in extracted text onto positioned text blocks."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence

from ..documents.models import TextBlock
from ..spans import Span


def _block_end(block: TextBlock) -> int:
    return block.span.end


def map_offset_to_blocks(blocks: Sequence[TextBlock], span: Span) -> list[TextBlock]:
    """Return the blocks whose char ranges intersect ``span``, in text order.

    ``blocks`` must be sorted by ``span.begin`` and non-overlapping.  Ranges
    are half-open, so a span starting exactly where one block ends and the
    next begins belongs to the next block.  A zero-width span selects the
    block that contains (or starts at) its offset, and nothing when the
    offset falls in a gap between blocks.
    """
    if not blocks:
        return []

    # first block whose end > span.begin
    start = bisect_right(blocks, span.begin, key=_block_end)
    if start >= len(blocks):
        return []

    first = blocks[start]
    if span.is_empty:
        return [first] if first.span.begin <= span.begin else []

    hits: list[TextBlock] = []
    for block in blocks[start:]:
        if block.span.begin >= span.end:
            break
        hits.append(block)
    return hits
