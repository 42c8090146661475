from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Label, ListItem, ListView, Static

from ..github import PullRequest
from ..layout import BRANCH_MAX_WIDTH, TITLE_MAX_WIDTH, compute_column_widths
from .render import build_header, format_row
from .styles import Palette

DEFAULT_TITLE = "Select a PR to checkout"


class SelectionCancelled(Exception):
    """Raised when the user leaves the menu without choosing a pull request."""

    def __init__(self, message: str = "selection cancelled") -> None:
        super().__init__(message)


class PRItem(ListItem):
    """Menu row that remembers the pull request it stands for."""

    def __init__(self, pr: PullRequest, label: Label) -> None:
        super().__init__(label)
        self.pr = pr


class PRPickerApp(App[PullRequest | None]):
    """Single-choice menu over a list of pull requests.

    Exits with the chosen `PullRequest` as its return value, or None when the
    user cancels.
    """

    CSS = """
    #picker-title { text-style: bold; }
    ListView { height: auto; max-height: 20; }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("up", "cursor_up", "Up", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False, priority=True),
        Binding("escape", "cancel", "Cancel"),
        Binding("q", "cancel", "Cancel", show=False),
        Binding("ctrl+c", "cancel", "Cancel", show=False, priority=True),
    ]

    def __init__(
        self,
        prs: Iterable[PullRequest],
        palette: Palette | None = None,
        title: str = DEFAULT_TITLE,
        now: datetime | None = None,
        title_max: int = TITLE_MAX_WIDTH,
        branch_max: int = BRANCH_MAX_WIDTH,
    ) -> None:
        """Lay out the rows once so the header and every row share one set of widths.

        Args:
            prs: Pull requests to offer, in display order.
            palette: Styles for the header and rows.
            title: Prompt shown above the header.
            now: Reference time for relative creation times.
            title_max: Cap for the title column.
            branch_max: Cap for the branch column.
        """
        super().__init__()
        self.prs: list[PullRequest] = list(prs)
        self.palette = palette or Palette()
        self.prompt = title
        self.now = now or datetime.now(timezone.utc)
        self.widths = compute_column_widths(self.prs, self.now, title_max, branch_max)
        self._list = ListView(
            *[PRItem(pr, Label(format_row(pr, self.widths, self.palette, self.now))) for pr in self.prs]
        )

    def compose(self) -> ComposeResult:
        yield Label(self.prompt, id="picker-title")
        yield Static(build_header(self.widths, self.palette), id="picker-header")
        yield self._list

    def on_mount(self) -> None:
        self.set_focus(self._list)
        if self.prs and self._list.index is None:
            self._list.index = 0

    def action_cursor_up(self) -> None:
        self._move("up")

    def action_cursor_down(self) -> None:
        self._move("down")

    def action_cancel(self) -> None:
        self.exit(None)

    def _move(self, key: str) -> None:
        """Move the highlight one row, wrapping around at either end."""
        count = len(self.prs)
        if count == 0:
            return
        idx = self._list.index or 0
        wrapped = self._maybe_wrap_index(count, idx, key)
        if wrapped is not None:
            self._list.index = wrapped
        elif key == "up":
            self._list.index = idx - 1
        else:
            self._list.index = idx + 1

    @staticmethod
    def _maybe_wrap_index(count: int, idx: int, key: str) -> int | None:
        """Return wrapped index if at boundary for key, otherwise None.

        Args:
            count: Number of items.
            idx: Current index.
            key: 'up' or 'down'.

        Returns:
            New index if wrapping should occur; otherwise None.
        """
        if count <= 0:
            return None
        if key == "up" and idx == 0:
            return count - 1
        if key == "down" and idx == count - 1:
            return 0
        return None

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        item = event.item
        if isinstance(item, PRItem):
            self.exit(item.pr)


def select_pr(
    prs: Iterable[PullRequest],
    palette: Palette | None = None,
    title: str = DEFAULT_TITLE,
    now: datetime | None = None,
    title_max: int = TITLE_MAX_WIDTH,
    branch_max: int = BRANCH_MAX_WIDTH,
) -> PullRequest:
    """Show the menu inline in the terminal and wait for a choice.

    Args:
        prs: Pull requests to offer, in display order.
        palette: Styles for the header and rows.
        title: Prompt shown above the header.
        now: Reference time for relative creation times.
        title_max: Cap for the title column.
        branch_max: Cap for the branch column.

    Returns:
        The chosen pull request.

    Raises:
        SelectionCancelled: If the user aborts the menu.
    """
    app = PRPickerApp(prs, palette, title=title, now=now, title_max=title_max, branch_max=branch_max)
    selected = app.run(inline=True)
    if selected is None:
        raise SelectionCancelled()
    return selected
