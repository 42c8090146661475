from __future__ import annotations

from datetime import datetime

from rich.text import Text

from ..github import PullRequest
from ..layout import (
    BRANCH_LABEL,
    CREATED_LABEL,
    ID_LABEL,
    TITLE_LABEL,
    ColumnWidths,
    created_label,
    id_label,
)
from ..utils.text import pad_right, truncate
from .styles import Palette

GUTTER = "  "
# Room for the selection cursor drawn in front of each row
CURSOR_INDENT = "  "


def build_header(widths: ColumnWidths, palette: Palette) -> Text:
    """Render the column header line shown above the menu.

    Args:
        widths: Layout computed for the current pull requests.
        palette: Styles to apply.

    Returns:
        The header as styled text.
    """
    header = Text(CURSOR_INDENT)
    labels = [
        (ID_LABEL, widths.id),
        (TITLE_LABEL, widths.title),
        (BRANCH_LABEL, widths.branch),
        (CREATED_LABEL, widths.created),
    ]
    for i, (label, width) in enumerate(labels):
        if i:
            header.append(GUTTER)
        header.append(pad_right(label, width), style=palette.header)
    return header


def format_row(pr: PullRequest, widths: ColumnWidths, palette: Palette, now: datetime | None = None) -> Text:
    """Render one selectable menu row for `pr`.

    Title and branch are truncated to their column before padding; the number
    and creation time are only padded.

    Args:
        pr: Pull request to render.
        widths: Layout shared with the header.
        palette: Styles to apply.
        now: Reference time for the relative creation column.

    Returns:
        The row as styled text.
    """
    row = Text()
    row.append(pad_right(id_label(pr), widths.id), style=palette.id_style(pr.is_draft))
    row.append(GUTTER)
    row.append(pad_right(truncate(pr.title, widths.title), widths.title))
    row.append(GUTTER)
    row.append(pad_right(truncate(pr.head_ref_name, widths.branch), widths.branch), style=palette.branch)
    row.append(GUTTER)
    row.append(pad_right(created_label(pr, now), widths.created), style=palette.created)
    return row


def format_summary(pr: PullRequest, palette: Palette) -> Text:
    """One-line description of the chosen PR, printed before checking it out."""
    summary = Text()
    summary.append(id_label(pr), style=palette.id_style(pr.is_draft))
    summary.append(GUTTER)
    summary.append(pr.title)
    summary.append(GUTTER)
    summary.append(pr.head_ref_name, style=palette.branch)
    return summary
