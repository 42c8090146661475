from __future__ import annotations

from rich.cells import cell_len

ELLIPSIS = "…"


def rendered_width(text: str) -> int:
    """Return the number of terminal cells `text` occupies.

    Wide and fullwidth East Asian characters count as two cells, narrow ones
    as one, zero-width characters as none.

    Args:
        text: Text to measure.

    Returns:
        The display width in cells.
    """
    return cell_len(text)


def truncate(text: str, max_width: int, tail: str = ELLIPSIS) -> str:
    """Shorten `text` so it fits in `max_width` cells, marking the cut with `tail`.

    Text that already fits is returned unchanged. Otherwise the longest prefix
    of whole characters that fits in ``max_width - width(tail)`` cells is kept,
    so a wide character is never split.

    Args:
        text: Text to shorten.
        max_width: Maximum display width of the result.
        tail: Marker appended to shortened text.

    Returns:
        Text whose rendered width is at most `max_width`.
    """
    if rendered_width(text) <= max_width:
        return text
    if max_width <= 0:
        return ""
    budget = max_width - rendered_width(tail)
    if budget < 0:
        return ""
    used = 0
    end = 0
    for ch in text:
        w = cell_len(ch)
        if used + w > budget:
            break
        used += w
        end += 1
    return text[:end] + tail


def pad_right(text: str, width: int) -> str:
    """Append spaces to `text` until it is `width` cells wide.

    Text that is already as wide as `width` (or wider) is returned unchanged;
    truncation is the caller's job.

    Args:
        text: Text to pad.
        width: Target display width.

    Returns:
        The padded text.
    """
    gap = width - rendered_width(text)
    if gap <= 0:
        return text
    return text + " " * gap
