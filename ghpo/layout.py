from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone

from .github import PullRequest
from .utils.text import rendered_width
from .utils.time import time_ago

ID_LABEL = "ID"
TITLE_LABEL = "TITLE"
BRANCH_LABEL = "BRANCH"
CREATED_LABEL = "CREATED AT"

TITLE_MAX_WIDTH = 100
BRANCH_MAX_WIDTH = 30


@dataclass(frozen=True)
class ColumnWidths:
    """Display widths of the four menu columns, shared by the header and every row."""

    id: int
    title: int
    branch: int
    created: int


def id_label(pr: PullRequest) -> str:
    return f"#{pr.number}"


def created_label(pr: PullRequest, now: datetime | None = None) -> str:
    """Return the relative creation time shown in the CREATED AT column."""
    return "about " + time_ago(pr.created_at, now)


def compute_column_widths(
    prs: Iterable[PullRequest],
    now: datetime | None = None,
    title_max: int = TITLE_MAX_WIDTH,
    branch_max: int = BRANCH_MAX_WIDTH,
) -> ColumnWidths:
    """Find the narrowest layout that fits every pull request.

    Each column is at least as wide as its header label and as wide as its
    widest value; the title and branch columns are then capped.

    Args:
        prs: Pull requests to lay out.
        now: Reference time for the relative creation column.
        title_max: Cap for the title column.
        branch_max: Cap for the branch column.

    Returns:
        The computed `ColumnWidths`.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    id_w = len(ID_LABEL)
    title_w = len(TITLE_LABEL)
    branch_w = len(BRANCH_LABEL)
    created_w = len(CREATED_LABEL)
    for pr in prs:
        id_w = max(id_w, rendered_width(id_label(pr)))
        title_w = max(title_w, rendered_width(pr.title))
        branch_w = max(branch_w, rendered_width(pr.head_ref_name))
        created_w = max(created_w, rendered_width(created_label(pr, now)))
    return ColumnWidths(
        id=id_w,
        title=min(title_w, title_max),
        branch=min(branch_w, branch_max),
        created=created_w,
    )
