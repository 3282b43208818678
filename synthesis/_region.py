from fim.region import TextRegion
from fim.types import REGION_PADDING_CHARS, RegionBounds


def resolve_editable_region(code: str, cursor: int, padding: int = REGION_PADDING_CHARS) -> RegionBounds:
    """
    Expand a cursor into the indentation block around it.

    Returns inclusive bounds with ``start <= cursor <= end`` and
    ``0 <= start <= end < len(code)``; ``(0, 0)`` for empty code. The block's
    exclusive end is the newline after its last line, so the inclusive end
    keeps that newline in the region (or stops at the last char of the text).
    """
    if not code:
        return RegionBounds(0, 0)

    region = TextRegion(code)
    last = region.length - 1
    cursor = max(0, min(cursor, last))

    block = region.find_block_boundaries(cursor)
    start = min(block.start, last)
    end = max(start, min(block.end, last))

    if start > cursor:
        start = max(0, cursor - padding)
    if end < cursor:
        end = min(last, cursor + padding)

    return RegionBounds(start, end)
